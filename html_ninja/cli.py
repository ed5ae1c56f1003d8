import argparse
import logging
from pathlib import Path
import sys
from typing import Sequence
from .dataclasses import TraceEvent
from .exc import HtmlNinjaError
from .ninja import HtmlNinja
from .writers.csv_files import CsvFileWriter

logger = logging.getLogger("html_ninja")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="html-ninja",
        description="Extract tables from HTML files and save them as CSV",
    )
    parser.add_argument("-i", "--input", required=True, help="Input HTML file path or URL")
    parser.add_argument(
        "-o", "--output-dir", type=Path, default=Path("."), help="Output directory for CSV files"
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug mode")
    return parser.parse_args(argv)


def log_trace(event: TraceEvent) -> None:
    details = ", ".join(f"{k}={v}" for k, v in event.data.items())
    logger.debug("[table %s] %s %s", event.table_index, event.kind, details)


def setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def run(args: argparse.Namespace) -> int:
    ninja = HtmlNinja(trace=log_trace if args.debug else None)
    parsed = ninja.parse(args.input)
    if not parsed.tables:
        print("No tables found in the input source.")
        return 0

    ninja.save(parsed, CsvFileWriter(args.output_dir))
    print(f"Successfully extracted {len(parsed.tables)} tables!")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.debug)
    try:
        return run(args)
    except HtmlNinjaError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
