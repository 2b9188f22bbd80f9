"""Run command: scrape, OCR and deliver one day's workout."""

from __future__ import annotations

import argparse
import logging

from delivery import TelegramNotifier
from errors import WorkoutScraperError
from workflow import run_workout
from cli.common import add_day_argument, load_cli_settings

logger = logging.getLogger(__name__)


def add_run_subparser(subparsers: argparse._SubParsersAction) -> None:
    run_parser = subparsers.add_parser(
        "run",
        help="Scrape a workout image, extract its text and send it to Telegram",
    )
    add_day_argument(run_parser)
    run_parser.add_argument(
        "-n", "--dry-run",
        action="store_true",
        help="Skip Telegram delivery (Telegram settings not required)",
    )
    run_parser.add_argument(
        "--print-text",
        action="store_true",
        help="Print the extracted text after the run",
    )
    run_parser.add_argument(
        "--with-photo",
        action="store_true",
        help="Also send the workout image with a caption",
    )
    run_parser.add_argument(
        "--notify-errors",
        action="store_true",
        help="Send a Telegram message when the run fails",
    )
    run_parser.set_defaults(_cmd=cmd_run)


def cmd_run(args: argparse.Namespace) -> int:
    notifier: TelegramNotifier | None = None
    if args.notify_errors and args.dry_run:
        logger.warning("--notify-errors has no effect with --dry-run")

    try:
        settings = load_cli_settings(args)
        settings.validate_for_run(require_delivery=not args.dry_run)

        if args.day:
            logger.info("Manual mode: scraping %s's workout", args.day)
        else:
            logger.info("Automatic mode: scraping tomorrow's workout")

        if not args.dry_run:
            notifier = TelegramNotifier(
                settings.telegram_bot_token,
                settings.telegram_chat_id,
                include_photo=args.with_photo,
            )

        report = run_workout(settings, target_day=args.day, notifier=notifier)
    except WorkoutScraperError as exc:
        logger.error("Workflow failed: %s", exc)
        if args.notify_errors and not args.dry_run:
            if notifier is not None:
                notifier.send_error(exc, context="Workout Scraper")
            else:
                logger.warning("Error notification not sent: failed before Telegram was configured")
        return 1

    logger.info("%s", "=" * 50)
    logger.info("Workflow completed successfully!")
    logger.info("%s", "=" * 50)
    logger.info("Day:            %s", report.day)
    logger.info("Image:          %s", report.image_url)
    logger.info("Matched by:     %s", report.matched_by)
    logger.info("OCR confidence: %.2f%%", report.confidence)
    logger.info("Text length:    %s characters", len(report.text))
    logger.info("Duration:       %.2fs", report.duration_seconds)
    if report.used_fallback:
        logger.warning("OCR ran on the original image (preprocessing failed)")

    if args.print_text or settings.print_text or settings.debug:
        print("\nExtracted Text:")
        print("-" * 50)
        print(report.text)
        print("-" * 50)
    return 0
