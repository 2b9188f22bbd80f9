"""Match command: show which carousel image would be selected for a day."""

from __future__ import annotations

import argparse
import logging

from errors import NotFoundError, WorkoutScraperError
from matching import describe_candidates, resolve_day
from workflow import find_workout_image
from cli.common import add_day_argument, load_cli_settings

logger = logging.getLogger(__name__)


def add_match_subparser(subparsers: argparse._SubParsersAction) -> None:
    match_parser = subparsers.add_parser(
        "match",
        help="List carousel images and show which one matches a day (no OCR)",
    )
    add_day_argument(match_parser)
    match_parser.add_argument(
        "--url",
        help="Workout page URL (default: GYM_WORKOUT_URL)",
    )
    match_parser.add_argument(
        "--selector",
        help="Carousel CSS selector (default: CAROUSEL_SELECTOR)",
    )
    match_parser.add_argument(
        "--strategy",
        choices=("alt-text", "filename", "both"),
        help="Match strategy (default: IMAGE_MATCH_STRATEGY)",
    )
    match_parser.set_defaults(_cmd=cmd_match)


def cmd_match(args: argparse.Namespace) -> int:
    try:
        settings = load_cli_settings(
            args,
            gym_workout_url=args.url,
            carousel_selector=args.selector,
            image_match_strategy=args.strategy,
        )
        settings.validate_for_run(require_delivery=False)
        day = resolve_day(args.day, timezone=settings.timezone)
        found, candidates = find_workout_image(settings, day)
    except NotFoundError as exc:
        logger.error("%s", exc)
        logger.info("Images in carousel (%s):", len(exc.candidates))
        for line in describe_candidates(exc.candidates):
            logger.info("  %s", line)
        return 1
    except WorkoutScraperError as exc:
        logger.error("%s", exc)
        return 1

    logger.info("Images in carousel (%s):", len(candidates))
    for index, line in enumerate(describe_candidates(candidates)):
        marker = "->" if index == found.index else "  "
        logger.info("%s %s", marker, line)
    logger.info("Selected #%s for %s (matched by %s)", found.index, day, found.matched_by)
    print(found.image_url)
    return 0
