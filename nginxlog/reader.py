"""Access-log file reading: whole-file and chunked.

Files are opened with newline="" so CRLF terminators reach the parser
untranslated, and with utf-8-sig so a leading byte-order mark is dropped.
"""

import logging
from contextlib import contextmanager
from typing import Generator, Iterator, TextIO

from nginxlog.errors import LogAccessError, LogFileNotFoundError, LogReadError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


@contextmanager
def _open_log(path: str) -> Iterator[TextIO]:
    """Open *path* for reading, translating OS errors into LogReadError types."""
    try:
        f = open(path, "r", encoding="utf-8-sig", newline="")
    except FileNotFoundError as e:
        logger.error("Failed to read %s: %s", path, e)
        raise LogFileNotFoundError(path, "Access log not found") from e
    except (PermissionError, IsADirectoryError) as e:
        logger.error("Failed to read %s: %s", path, e)
        raise LogAccessError(path, "Access permission for access log is denied") from e
    except OSError as e:
        logger.error("Failed to read %s: %s", path, e)
        raise LogReadError(path, "Could not open access log") from e

    with f:
        try:
            yield f
        except UnicodeDecodeError as e:
            logger.error("Failed to decode %s: %s", path, e)
            raise LogReadError(path, "Access log is not valid UTF-8") from e
        except OSError as e:
            logger.error("Failed to read %s: %s", path, e)
            raise LogReadError(path, "Could not read access log") from e


def read_all(path: str) -> str:
    """Return the entire content of the access log at *path*."""
    with _open_log(path) as f:
        content = f.read()
    logger.debug("Read %d characters from %s", len(content), path)
    return content


def read_chunks(path: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Generator[str, None, None]:
    """Yield successive text chunks of at most *chunk_size* characters."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    with _open_log(path) as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            logger.debug("Read chunk of %d characters from %s", len(chunk), path)
            yield chunk
