"""Benchmark: whole-file read-then-parse vs chunked read-and-parse."""

import logging
import os
import random
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterator

from nginxlog.parser import CRLF, parse_file, stream_file
from nginxlog.reader import DEFAULT_CHUNK_SIZE

logger = logging.getLogger(__name__)

IP_POOL = [
    "192.168.1.1", "10.0.0.42", "172.16.0.5", "203.0.113.7",
    "198.51.100.23", "192.0.2.88", "10.10.10.10", "172.31.255.1",
]

PATH_POOL = [
    "/", "/index.html", "/api/users", "/api/orders", "/api/products",
    "/api/health", "/login", "/logout", "/dashboard", "/static/app.js",
    "/images/logo.png", "/api/search?q=test", "/docs", "/api/v2/items",
]

METHOD_POOL = ["GET", "POST", "PUT", "DELETE", "PATCH"]
METHOD_WEIGHTS = [60, 15, 10, 10, 5]

STATUS_POOL = [200, 200, 200, 201, 204, 301, 302, 400, 401, 403, 404, 404, 500, 502, 503]

USER_POOL = ["-", "-", "-", "frank", "alice"]

USER_AGENT_POOL = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1",
    "Mozilla/5.0 (X11; Linux x86_64; rv:109.0) Gecko/20100101 Firefox/115.0",
    "curl/7.68.0",
    "python-requests/2.31.0",
]

REFERER_POOL = [
    "-",
    "https://google.com/",
    "https://example.com/page",
    "https://github.com/",
    "-",
]

FORWARDED_POOL = ["-", "203.0.113.195", "198.51.100.7, 10.0.0.1", None]


@dataclass
class BenchmarkResult:
    strategy: str
    lines: int
    seconds: float

    @property
    def lines_per_second(self) -> float:
        return self.lines / self.seconds if self.seconds > 0 else 0.0


def generate_access_line(rng: random.Random, when: datetime) -> str:
    """Return one access-log line in the default nginx layout."""
    status = rng.choice(STATUS_POOL)
    size = rng.randint(128, 65536) if status != 204 else 0
    method = rng.choices(METHOD_POOL, weights=METHOD_WEIGHTS, k=1)[0]
    line = (
        f'{rng.choice(IP_POOL)} - {rng.choice(USER_POOL)} '
        f'[{when.strftime("%d/%b/%Y:%H:%M:%S %z")}] '
        f'"{method} {rng.choice(PATH_POOL)} HTTP/1.1" {status} {size} '
        f'"{rng.choice(REFERER_POOL)}" "{rng.choice(USER_AGENT_POOL)}"'
    )
    forwarded = rng.choice(FORWARDED_POOL)
    if forwarded is not None:
        line += f' "{forwarded}"'
    return line


def _iter_access_lines(count: int, seed: int | None = None) -> Iterator[str]:
    rng = random.Random(seed)
    start = datetime(2021, 10, 10, 13, 55, 36, tzinfo=timezone.utc)
    for i in range(count):
        yield generate_access_line(rng, start + timedelta(seconds=i)) + CRLF


def generate_access_log(count: int, seed: int | None = None) -> str:
    """Return *count* CRLF-terminated access-log lines."""
    return "".join(_iter_access_lines(count, seed))


def write_access_log(path: str, count: int, seed: int | None = None) -> int:
    """Write a synthetic access log of *count* lines to *path* for benchmarking."""
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        for line in _iter_access_lines(count, seed):
            f.write(line)
    logger.info("Generated %d access-log lines in %s", count, path)
    return count


def time_whole_file(path: str, newline: str = CRLF) -> BenchmarkResult:
    start = time.perf_counter()
    records = parse_file(path, newline)
    elapsed = time.perf_counter() - start
    return BenchmarkResult("whole-file", len(records), elapsed)


def time_chunked(path: str, chunk_size: int = DEFAULT_CHUNK_SIZE, newline: str = CRLF) -> BenchmarkResult:
    start = time.perf_counter()
    count = sum(1 for _ in stream_file(path, chunk_size, newline))
    elapsed = time.perf_counter() - start
    return BenchmarkResult(f"chunked ({chunk_size})", count, elapsed)


def run_benchmark(
    path: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    newline: str = CRLF,
) -> list[BenchmarkResult]:
    """Time both reading strategies against the same file."""
    return [
        time_whole_file(path, newline),
        time_chunked(path, chunk_size, newline),
    ]


def format_results(results: list[BenchmarkResult]) -> str:
    lines = [f"{'Strategy':<20} {'Lines':>10} {'Seconds':>10} {'Lines/s':>12}", "-" * 55]
    for r in results:
        lines.append(
            f"{r.strategy:<20} {r.lines:>10,} {r.seconds:>10.3f} {r.lines_per_second:>12,.0f}"
        )
    return "\n".join(lines)
