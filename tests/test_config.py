"""Tests for config module."""

import pytest
import yaml

from nginxlog.config import Config, load_config, load_yaml_config
from nginxlog.errors import ConfigError

ENV_VARS = (
    "ACCESS_LOG_FILE", "PARSED_LOG_FILE", "OUTPUT_FORMAT", "CHUNK_SIZE",
    "LOG_NEWLINE", "PARSE_WORKERS", "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


class TestConfigDefaults:
    def test_defaults(self):
        cfg = Config()
        assert cfg.log_file == "./access.log"
        assert cfg.output_file is None
        assert cfg.output_format == "json"
        assert cfg.chunk_size == 65536
        assert cfg.newline == "crlf"
        assert cfg.workers == 0
        assert cfg.log_level == "INFO"

    def test_frozen(self):
        cfg = Config()
        with pytest.raises(AttributeError):
            cfg.chunk_size = 1

    def test_newline_sequence(self):
        assert Config().newline_sequence == "\r\n"
        assert Config(newline="lf").newline_sequence == "\n"


class TestConfigValidation:
    def test_bad_newline(self):
        with pytest.raises(ConfigError):
            Config(newline="cr")

    def test_bad_format(self):
        with pytest.raises(ConfigError):
            Config(output_format="xml")

    def test_bad_chunk_size(self):
        with pytest.raises(ConfigError):
            Config(chunk_size=0)

    def test_negative_workers(self):
        with pytest.raises(ConfigError):
            Config(workers=-1)

    def test_bad_log_level(self):
        with pytest.raises(ConfigError):
            Config(log_level="LOUD")


class TestLoadYamlConfig:
    def test_no_path(self):
        assert load_yaml_config(None) == {}

    def test_missing_file(self, tmp_path):
        assert load_yaml_config(str(tmp_path / "nope.yml")) == {}

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_yaml_config(str(path))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("key: [unclosed\n")
        with pytest.raises(ConfigError):
            load_yaml_config(str(path))


class TestLoadConfig:
    def _yaml(self, tmp_path, data) -> str:
        path = tmp_path / "config.yml"
        path.write_text(yaml.dump(data))
        return str(path)

    def test_no_sources(self):
        assert load_config() == Config()

    def test_yaml_values(self, tmp_path):
        path = self._yaml(tmp_path, {"log_file": "/var/log/nginx/access.log", "chunk_size": 1024, "newline": "lf"})
        cfg = load_config(path)
        assert cfg.log_file == "/var/log/nginx/access.log"
        assert cfg.chunk_size == 1024
        assert cfg.newline == "lf"
        assert cfg.output_format == "json"

    def test_unknown_yaml_key_ignored(self, tmp_path):
        cfg = load_config(self._yaml(tmp_path, {"colour": "blue"}))
        assert cfg == Config()

    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("ACCESS_LOG_FILE", "/env/access.log")
        monkeypatch.setenv("OUTPUT_FORMAT", "NDJSON")
        monkeypatch.setenv("CHUNK_SIZE", "4096")
        monkeypatch.setenv("PARSE_WORKERS", "3")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        cfg = load_config()
        assert cfg.log_file == "/env/access.log"
        assert cfg.output_format == "ndjson"
        assert cfg.chunk_size == 4096
        assert cfg.workers == 3
        assert cfg.log_level == "DEBUG"

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CHUNK_SIZE", "2048")
        cfg = load_config(self._yaml(tmp_path, {"chunk_size": 1024}))
        assert cfg.chunk_size == 2048

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("ACCESS_LOG_FILE", "/env/access.log")
        cfg = load_config(overrides={"log_file": "/cli/access.log", "output_file": None})
        assert cfg.log_file == "/cli/access.log"
        assert cfg.output_file is None

    def test_bad_env_int(self, monkeypatch):
        monkeypatch.setenv("CHUNK_SIZE", "lots")
        with pytest.raises(ConfigError):
            load_config()
