"""Builds LogRecords from access-log text, whole-file or chunk by chunk."""

import logging
import re
from concurrent.futures import ProcessPoolExecutor
from typing import Iterable, Iterator

from nginxlog.models import NAN, LogRecord
from nginxlog.reader import read_all, read_chunks
from nginxlog.tokenizer import split_fields

logger = logging.getLogger(__name__)

CRLF = "\r\n"
LF = "\n"

# Token used when the optional $http_x_forwarded_for field is missing.
_MISSING_FORWARDED_FOR = '"-"'

_BOM = "\ufeff"

# ASCII digits with an optional sign
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def _unwrap(token: str | None) -> str:
    """Drop the opening and closing character: '[abc]' -> 'abc'. None -> '-'."""
    if not token:
        return "-"
    return token[1:-1]


def _to_number(token: str | None) -> int | float:
    """Convert a token to int, returning NaN for missing or non-numeric values."""
    if token is None or not _INTEGER_RE.fullmatch(token):
        return NAN
    return int(token)


def _token(tokens: list[str], index: int) -> str | None:
    return tokens[index] if index < len(tokens) else None


def build_record(line: str) -> LogRecord:
    """Map the fields of one log line onto a LogRecord.

    Never raises: a short or malformed line yields a record with whatever
    could be extracted and defaults for the rest.
    """
    tokens = split_fields(line)
    # tokens[1] is the literal '-' between $remote_addr and $remote_user
    return LogRecord(
        remote_addr=_token(tokens, 0),
        remote_user=_token(tokens, 2),
        time_local=_unwrap(_token(tokens, 3)),
        request=_unwrap(_token(tokens, 4)),
        status=_to_number(_token(tokens, 5)),
        body_bytes_sent=_to_number(_token(tokens, 6)),
        http_referer=_unwrap(_token(tokens, 7)),
        http_user_agent=_unwrap(_token(tokens, 8)),
        http_x_forwarded_for=_unwrap(_token(tokens, 9) or _MISSING_FORWARDED_FOR),
    )


def build_records(lines: list[str]) -> list[LogRecord]:
    return [build_record(line) for line in lines]


def split_lines(content: str, newline: str = CRLF) -> list[str]:
    """Split file content into stripped, non-empty lines."""
    lines = []
    for line in content.strip().lstrip(_BOM).split(newline):
        stripped = line.strip()
        if stripped:
            lines.append(stripped)
    return lines


def parse(content: str, newline: str = CRLF) -> list[LogRecord]:
    """Parse the full text of an access log into records, in line order."""
    return build_records(split_lines(content, newline))


def iter_records(chunks: Iterable[str], newline: str = CRLF) -> Iterator[LogRecord]:
    """Yield records from successive text chunks.

    The trailing partial line of each chunk is held back and joined with the
    next one, so chunk boundaries may fall anywhere, including between the
    two characters of a CRLF. Pending text is only joined and split once a
    terminator shows up, so a long run without one stays linear.
    """
    overlap = len(newline) - 1
    pending: list[str] = []
    tail = ""  # last `overlap` characters of the pending text
    first = True

    for chunk in chunks:
        if first and chunk:
            chunk = chunk.lstrip(_BOM)
            first = False

        window = tail + chunk
        if newline not in window:
            if chunk:
                pending.append(chunk)
            tail = window[-overlap:] if overlap else ""
            continue

        pending.append(chunk)
        lines = "".join(pending).split(newline)
        rest = lines.pop()
        pending = [rest] if rest else []
        tail = rest[-overlap:] if overlap else ""
        for line in lines:
            stripped = line.strip()
            if stripped:
                yield build_record(stripped)

    remainder = "".join(pending).strip()
    if remainder:
        yield build_record(remainder)


def parse_parallel(
    content: str,
    workers: int | None = None,
    batch_lines: int = 10_000,
    newline: str = CRLF,
) -> list[LogRecord]:
    """Parse *content* across a process pool. Output order matches parse()."""
    lines = split_lines(content, newline)
    batches = [lines[i:i + batch_lines] for i in range(0, len(lines), batch_lines)]
    if workers == 1 or len(batches) <= 1:
        return build_records(lines)

    records: list[LogRecord] = []
    with ProcessPoolExecutor(max_workers=workers) as executor:
        # map() yields results in submission order
        for batch in executor.map(build_records, batches):
            records.extend(batch)
    return records


def parse_file(path: str, newline: str = CRLF, workers: int = 0) -> list[LogRecord]:
    """Read the whole file, then parse it. Read errors propagate."""
    content = read_all(path)
    if workers:
        records = parse_parallel(content, workers=workers, newline=newline)
    else:
        records = parse(content, newline)
    logger.info("Parsed %d records from %s", len(records), path)
    return records


def stream_file(
    path: str,
    chunk_size: int = 65536,
    newline: str = CRLF,
) -> Iterator[LogRecord]:
    """Read the file in chunks and yield records as lines complete."""
    count = 0
    for record in iter_records(read_chunks(path, chunk_size), newline):
        count += 1
        yield record
    logger.info("Streamed %d records from %s", count, path)
