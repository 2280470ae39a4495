"""Output sink: serializes records to JSON or NDJSON, written atomically."""

import json
import logging
import os
import tempfile
from typing import Iterable

from nginxlog.models import LogRecord, record_to_dict

logger = logging.getLogger(__name__)


def to_json(records: Iterable[LogRecord], indent: int | None = None) -> str:
    """Serialize records as a single JSON array."""
    return json.dumps([record_to_dict(r) for r in records], indent=indent)


def to_ndjson(records: Iterable[LogRecord]) -> str:
    """Serialize records as newline-delimited JSON, one object per line."""
    return "".join(json.dumps(record_to_dict(r)) + "\n" for r in records)


def serialize(records: Iterable[LogRecord], fmt: str = "json") -> str:
    if fmt == "json":
        return to_json(records)
    if fmt == "ndjson":
        return to_ndjson(records)
    raise ValueError(f"Unknown output format: {fmt}")


def write_records(records: Iterable[LogRecord], path: str, fmt: str = "json") -> int:
    """Write records to *path* atomically. Returns the number written."""
    records = list(records)
    payload = serialize(records, fmt)

    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    tmp_fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
    try:
        with os.fdopen(tmp_fd, "w", encoding="utf-8") as f:
            f.write(payload)
        os.replace(tmp_path, path)
    except Exception:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise

    logger.info("Wrote %d records to %s", len(records), path)
    return len(records)
