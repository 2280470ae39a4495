"""Configuration: frozen dataclass built from defaults <- YAML <- env vars <- CLI."""

import logging
import os
from dataclasses import dataclass, fields

import yaml

from nginxlog.errors import ConfigError

logger = logging.getLogger(__name__)

NEWLINES = {"crlf": "\r\n", "lf": "\n"}
OUTPUT_FORMATS = ("json", "ndjson")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Config:
    log_file: str = "./access.log"
    output_file: str | None = None
    output_format: str = "json"
    chunk_size: int = 64 * 1024
    newline: str = "crlf"
    workers: int = 0
    log_level: str = "INFO"

    def __post_init__(self):
        if self.newline not in NEWLINES:
            raise ConfigError(f"newline must be one of {sorted(NEWLINES)}, got {self.newline!r}")
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigError(
                f"output_format must be one of {list(OUTPUT_FORMATS)}, got {self.output_format!r}"
            )
        if self.chunk_size <= 0:
            raise ConfigError(f"chunk_size must be positive, got {self.chunk_size}")
        if self.workers < 0:
            raise ConfigError(f"workers must not be negative, got {self.workers}")
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {list(LOG_LEVELS)}, got {self.log_level!r}")

    @property
    def newline_sequence(self) -> str:
        return NEWLINES[self.newline]


# field name -> (environment variable, converter)
_ENV_VARS = {
    "log_file": ("ACCESS_LOG_FILE", str),
    "output_file": ("PARSED_LOG_FILE", str),
    "output_format": ("OUTPUT_FORMAT", str.lower),
    "chunk_size": ("CHUNK_SIZE", int),
    "newline": ("LOG_NEWLINE", str.lower),
    "workers": ("PARSE_WORKERS", int),
    "log_level": ("LOG_LEVEL", str.upper),
}


def _convert(name: str, value, source: str):
    converter = _ENV_VARS[name][1]
    try:
        return converter(value) if isinstance(value, str) else value
    except ValueError as e:
        raise ConfigError(f"Invalid value for {name} from {source}: {value!r}") from e


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path or file missing."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file {path} is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    logger.info("Loaded YAML config from %s", path)
    return data


def load_config(yaml_path: str | None = None, overrides: dict | None = None) -> Config:
    """Build Config from defaults <- YAML file <- env vars <- overrides (highest priority).

    None values in *overrides* are ignored so argparse namespaces can be
    passed through without clobbering lower layers.
    """
    known = {f.name for f in fields(Config)}
    kwargs: dict = {}

    for key, value in load_yaml_config(yaml_path).items():
        if key not in known:
            logger.warning("Ignoring unknown config key %r", key)
            continue
        kwargs[key] = _convert(key, value, "config file")

    for name, (env_var, _) in _ENV_VARS.items():
        raw = os.environ.get(env_var)
        if raw is not None:
            kwargs[name] = _convert(name, raw, env_var)

    for key, value in (overrides or {}).items():
        if key in known and value is not None:
            kwargs[key] = value

    return Config(**kwargs)
