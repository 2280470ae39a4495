"""nginx-log-parse: parse an nginx access log into JSON records."""

import logging
import sys
import time
from argparse import ArgumentParser

from nginxlog.benchmark import format_results, run_benchmark, write_access_log
from nginxlog.config import NEWLINES, OUTPUT_FORMATS, Config, load_config
from nginxlog.errors import NginxLogError
from nginxlog.parser import parse_file, stream_file
from nginxlog.sink import serialize, write_records

logger = logging.getLogger("nginxlog")


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="nginx-log-parse",
        description="Parse an nginx access log (default log_format) into JSON records.",
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="Access log path (default: ./access.log or ACCESS_LOG_FILE)",
    )
    parser.add_argument(
        "--output", "-o",
        help="Write records to this file instead of stdout",
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--stream",
        action="store_true",
        help="Read the file in chunks instead of all at once",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        help="Chunk size in characters for --stream and --benchmark",
    )
    parser.add_argument(
        "--newline",
        choices=sorted(NEWLINES),
        help="Line terminator used by the log (default: crlf)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        help="Parse with N worker processes (whole-file mode only)",
    )
    parser.add_argument(
        "--benchmark",
        action="store_true",
        help="Time whole-file vs chunked parsing instead of printing records",
    )
    parser.add_argument(
        "--generate",
        type=int,
        metavar="N",
        help="Write N synthetic access-log lines to the log path and exit",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for --generate",
    )
    parser.add_argument(
        "--timing",
        action="store_true",
        help="Log execution time and lines parsed per second",
    )
    parser.add_argument(
        "--config",
        help="Path to a YAML config file",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (default: INFO)",
    )
    return parser


def _config_from_args(args) -> Config:
    return load_config(
        args.config,
        overrides={
            "log_file": args.file,
            "output_file": args.output,
            "output_format": args.format,
            "chunk_size": args.chunk_size,
            "newline": args.newline,
            "workers": args.workers,
            "log_level": args.log_level.upper() if args.log_level else None,
        },
    )


def run(args, config: Config) -> None:
    """Parse the configured log and hand the records to the sink."""
    if args.generate is not None:
        write_access_log(config.log_file, args.generate, args.seed)
        return

    if args.benchmark:
        results = run_benchmark(config.log_file, config.chunk_size, config.newline_sequence)
        print(format_results(results))
        return

    start = time.perf_counter()
    if args.stream:
        records = list(stream_file(config.log_file, config.chunk_size, config.newline_sequence))
    else:
        records = parse_file(config.log_file, config.newline_sequence, config.workers)
    elapsed = time.perf_counter() - start

    if args.timing:
        rate = len(records) / elapsed if elapsed > 0 else 0.0
        logger.info("Execution time was: %.3f s", elapsed)
        logger.info("Log lines parsed per second (in average): %.0f lps", rate)

    if config.output_file:
        write_records(records, config.output_file, config.output_format)
    else:
        sys.stdout.write(serialize(records, config.output_format))
        if config.output_format == "json":
            sys.stdout.write("\n")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.stream and args.workers:
        parser.error("--stream and --workers cannot be used together")
    if args.generate is not None and args.generate < 0:
        parser.error("--generate must be zero or positive")

    # Configured before the config is loaded so its warnings share the format.
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [PARSER] %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        config = _config_from_args(args)
    except NginxLogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    logging.getLogger().setLevel(config.log_level)

    try:
        run(args, config)
    except NginxLogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def cli() -> None:
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)


if __name__ == "__main__":
    cli()
