"""Workout pipeline entrypoints for reuse across the CLI and scheduled runs."""

from __future__ import annotations

import logging
import time
from datetime import date
from typing import Callable, Protocol

from errors import NotFoundError
from matching import compile_strategy, describe_candidates, resolve_day
from matching.days import today_in
from matching.types import CandidateImage, Found
from ocr import OcrEngine, get_ocr_engine, normalize_text
from preprocessing import PreprocessConfig, preprocess_image
from settings import Settings
from sources import PageSource, PlaywrightCarouselSource, download_image

from .report import WorkoutReport

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Delivery interface used by run_workout()."""

    def send_workout(self, report: WorkoutReport) -> None:
        ...


def find_workout_image(
    settings: Settings,
    day: str,
    page_source: PageSource | None = None,
) -> tuple[Found, list[CandidateImage]]:
    """Scan the carousel and select the image for `day`.

    The match strategy is compiled before the page is loaded, so a broken
    pattern fails without touching the network.

    Raises:
        ConfigurationError: If the match strategy is invalid.
        PageSourceError: If the page or carousel cannot be loaded.
        NotFoundError: If no image matches the day.
    """
    matcher = compile_strategy(settings.match_strategy(), day)

    if page_source is None:
        page_source = PlaywrightCarouselSource(settings.gym_workout_url)

    logger.info("Looking for %s workout image in carousel...", day)
    candidates = page_source.scan(settings.carousel_selector)

    logger.debug("--- Available images in carousel ---")
    for line in describe_candidates(candidates):
        logger.debug("  %s", line)

    result = matcher.match(candidates)
    if not isinstance(result, Found):
        raise NotFoundError(day, candidates)

    logger.info("Found image: %s (matched by %s)", result.image_url, result.matched_by)
    return result, candidates


def run_workout(
    settings: Settings,
    target_day: str | None = None,
    page_source: PageSource | None = None,
    fetch: Callable[[str], bytes] | None = None,
    ocr_engine: OcrEngine | None = None,
    notifier: Notifier | None = None,
    preprocess_config: PreprocessConfig | None = None,
    today: date | None = None,
) -> WorkoutReport:
    """Run the full scrape -> OCR -> deliver workflow once.

    Collaborators default to the production adapters built from settings.
    Delivery is skipped when `notifier` is None.

    Raises:
        ConfigurationError: Invalid day, strategy or OCR engine.
        NotFoundError: The carousel has no image for the day.
        PageSourceError, DownloadError, RecognitionFailure, DeliveryError:
            Propagated unchanged from the collaborators.
    """
    started = time.monotonic()
    if today is None:
        today = today_in(settings.timezone)

    day = resolve_day(target_day, today=today)
    if ocr_engine is None:
        ocr_engine = get_ocr_engine(settings.ocr_engine)

    logger.info("Step 1/3: Scraping workout image...")
    found, _ = find_workout_image(settings, day, page_source)
    image_data = (fetch or download_image)(found.image_url)

    logger.info("Step 2/3: Extracting text from image...")
    outcome = preprocess_image(image_data, preprocess_config)
    recognized = ocr_engine.recognize(outcome.image_bytes)
    text = normalize_text(recognized.raw_text)

    report = WorkoutReport(
        day=day,
        date=today,
        image_url=found.image_url,
        matched_by=found.matched_by,
        image_bytes=image_data,
        text=text,
        confidence=recognized.confidence,
        used_fallback=outcome.used_fallback,
    )

    if notifier is not None:
        logger.info("Step 3/3: Sending workout...")
        notifier.send_workout(report)
    else:
        logger.info("Step 3/3: Delivery skipped")

    report.duration_seconds = time.monotonic() - started
    return report
