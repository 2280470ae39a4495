"""Shared pytest fixtures for the nginxlog test suite."""

import os

import pytest

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")


@pytest.fixture()
def sample_log_path() -> str:
    """Path to the bundled five-line CRLF access log."""
    return os.path.join(DATA_DIR, "access.log")


@pytest.fixture()
def sample_content(sample_log_path) -> str:
    with open(sample_log_path, "r", encoding="utf-8", newline="") as f:
        return f.read()


@pytest.fixture()
def write_log(tmp_path):
    """Write *content* verbatim (no newline translation) and return its path."""

    def _write(content: str, name: str = "access.log") -> str:
        path = tmp_path / name
        path.write_bytes(content.encode("utf-8"))
        return str(path)

    return _write
