"""Helpers shared by the CLI commands."""

from __future__ import annotations

import argparse
import logging

from logging_utils import configure_logging
from settings import Settings, load_settings

logger = logging.getLogger(__name__)


def load_cli_settings(args: argparse.Namespace, **overrides) -> Settings:
    """Load settings and raise log verbosity when DEBUG is enabled.

    Raises:
        ConfigurationError: If the environment holds invalid values.
    """
    settings = load_settings(**{k: v for k, v in overrides.items() if v is not None})
    if settings.debug:
        configure_logging(args.log_level, args.verbose, args.quiet, debug=True)
    return settings


def add_day_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "day",
        nargs="?",
        help="Day to fetch, e.g. Monday (default: tomorrow)",
    )
