"""Tests for benchmark module."""

from nginxlog.benchmark import (
    BenchmarkResult,
    format_results,
    generate_access_log,
    run_benchmark,
    write_access_log,
)
from nginxlog.parser import parse, parse_file


class TestGenerateAccessLog:
    def test_line_count_and_terminator(self):
        content = generate_access_log(50, seed=1)
        assert content.endswith("\r\n")
        assert content.count("\r\n") == 50

    def test_deterministic_with_seed(self):
        assert generate_access_log(20, seed=7) == generate_access_log(20, seed=7)

    def test_generated_lines_parse_cleanly(self):
        records = parse(generate_access_log(200, seed=3))
        assert len(records) == 200
        for record in records:
            assert not record.has_invalid_numbers
            assert record.remote_addr.count(".") == 3
            assert record.request.endswith(" HTTP/1.1")
            assert record.remote_user in ("-", "frank", "alice")
            assert record.time_local.endswith("+0000")
            assert record.http_x_forwarded_for in ("-", "203.0.113.195", "198.51.100.7, 10.0.0.1")


class TestBenchmarkResult:
    def test_rate(self):
        assert BenchmarkResult("whole-file", 1000, 2.0).lines_per_second == 500.0

    def test_zero_seconds(self):
        assert BenchmarkResult("whole-file", 1000, 0.0).lines_per_second == 0.0


class TestRunBenchmark:
    def test_both_strategies_agree(self, write_log):
        path = write_log(generate_access_log(300, seed=5))
        results = run_benchmark(path, chunk_size=512)
        assert [r.strategy for r in results] == ["whole-file", "chunked (512)"]
        assert all(r.lines == 300 for r in results)

    def test_format_results(self):
        text = format_results([BenchmarkResult("whole-file", 1234, 0.5)])
        assert "Strategy" in text
        assert "whole-file" in text
        assert "1,234" in text
        assert "2,468" in text


class TestWriteAccessLog:
    def test_writes_requested_lines(self, tmp_path):
        path = tmp_path / "logs" / "access.log"
        assert write_access_log(str(path), 40, seed=2) == 40
        assert path.read_bytes().decode("utf-8") == generate_access_log(40, seed=2)
        assert len(parse_file(str(path))) == 40

    def test_zero_lines(self, tmp_path):
        path = tmp_path / "access.log"
        assert write_access_log(str(path), 0) == 0
        assert path.read_bytes() == b""
