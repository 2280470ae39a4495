"""Parsed access-log record: frozen dataclass with optional fields."""

import math
from dataclasses import dataclass, fields
from typing import Any

# Sentinel stored in numeric fields that could not be coerced.
NAN = math.nan


def is_nan(value: Any) -> bool:
    """True if *value* is the not-a-number sentinel."""
    return isinstance(value, float) and math.isnan(value)


@dataclass(frozen=True)
class LogRecord:
    remote_addr: str | None = None
    remote_user: str | None = None
    time_local: str | None = None
    request: str | None = None
    status: int | float = NAN
    body_bytes_sent: int | float = NAN
    http_referer: str | None = None
    http_user_agent: str | None = None
    http_x_forwarded_for: str | None = None

    @property
    def has_invalid_numbers(self) -> bool:
        """True if status or body_bytes_sent failed numeric coercion."""
        return is_nan(self.status) or is_nan(self.body_bytes_sent)


def record_to_dict(record: LogRecord) -> dict[str, Any]:
    """Convert a LogRecord to a JSON-ready dict.

    Unset string fields are dropped and NaN numbers become None, so the
    output matches what a JSON serializer does with missing and NaN values.
    """
    out: dict[str, Any] = {}
    for f in fields(record):
        value = getattr(record, f.name)
        if value is None:
            continue
        out[f.name] = None if is_nan(value) else value
    return out
