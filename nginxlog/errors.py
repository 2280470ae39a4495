"""Exception types raised outside the line parser."""


class NginxLogError(Exception):
    """Base class for all nginxlog errors."""


class ConfigError(NginxLogError):
    """Raised when a configuration value is invalid."""


class LogReadError(NginxLogError):
    """Raised when an access log cannot be read."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{message}: {path}")
        self.path = path


class LogFileNotFoundError(LogReadError):
    """The access log does not exist."""


class LogAccessError(LogReadError):
    """The access log exists but cannot be opened for reading."""
