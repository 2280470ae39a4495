"""Parser for nginx default-format access logs."""

from nginxlog.models import LogRecord, is_nan, record_to_dict
from nginxlog.parser import build_record, iter_records, parse, parse_file, stream_file

__version__ = "0.1.0"

__all__ = [
    "LogRecord",
    "build_record",
    "is_nan",
    "iter_records",
    "parse",
    "parse_file",
    "record_to_dict",
    "stream_file",
]
