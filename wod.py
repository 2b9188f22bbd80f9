#!/usr/bin/env python3
"""
Unified CLI for the workout scraper.

Usage:
    wod run                      # Scrape tomorrow's workout, OCR it, send to Telegram
    wod run Monday               # Same for an explicit day
    wod run --dry-run -v         # Skip delivery, log carousel contents
    wod match [DAY]              # Show which carousel image matches (no OCR)
    wod ocr <image>              # Preprocess + OCR a local image
"""

import argparse
import logging
import sys

from logging_utils import configure_logging, add_logging_args
from cli.run import add_run_subparser
from cli.match import add_match_subparser
from cli.ocr import add_ocr_subparser

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wod",
        description="Workout scraper - fetch a day's workout image and extract its text",
    )
    add_logging_args(parser)
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    add_run_subparser(subparsers)
    add_match_subparser(subparsers)
    add_ocr_subparser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.verbose, args.quiet)

    cmd = getattr(args, "_cmd", None)
    if cmd is None:
        parser.print_help()
        return 1
    return cmd(args)


if __name__ == "__main__":
    sys.exit(main())
