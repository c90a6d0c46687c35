"""Command-line entry point.

Usage::

    dem-pipeline ORDER_ZIP [OUTPUT_DIR]

Writes masspoint.csv, hard_breakline.csv and soft_breakline.csv to OUTPUT_DIR
(``./output`` by default).
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .config import DEFAULT_OUTPUT_DIR, PipelineConfig
from .errors import ConversionError
from .log import configure_logging
from .pipeline import convert_order

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="dem-pipeline",
        description="Convert a DEM order archive into masspoint and breakline CSV files.",
    )
    p.add_argument("order_file", type=Path, help="Path to the order .zip file")
    p.add_argument(
        "output_dir",
        nargs="?",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help=f"Directory for the CSV files (default: ./{DEFAULT_OUTPUT_DIR})",
    )
    p.add_argument("--work-dir", type=Path, help="Unpack into this (absent or empty) directory")
    p.add_argument("--keep-work-dir", action="store_true", help="Do not delete the unpacked files")
    p.add_argument("--no-color", action="store_true", help="Disable coloured output")
    verbosity = p.add_mutually_exclusive_group()
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only report warnings and errors")
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Show debug messages")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.WARNING if args.quiet else logging.DEBUG if args.verbose else logging.INFO
    configure_logging(level, color=False if args.no_color else None)

    config = PipelineConfig(
        order_file=args.order_file,
        output_dir=args.output_dir,
        work_dir=args.work_dir,
        keep_work_dir=args.keep_work_dir,
    )

    try:
        result = convert_order(config)
    except ConversionError as exc:
        logger.error("%s", exc)
        return 1

    for summary in result.summaries:
        logger.info(
            "%s: %d records, %d distinct keys.",
            summary.path.name, summary.records, summary.distinct_keys,
        )
    return 0