"""OCR command: extract text from a local schedule image."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from errors import WorkoutScraperError
from ocr import get_ocr_engine, normalize_text
from preprocessing import preprocess_image
from cli.common import load_cli_settings

logger = logging.getLogger(__name__)


def add_ocr_subparser(subparsers: argparse._SubParsersAction) -> None:
    ocr_parser = subparsers.add_parser(
        "ocr",
        help="Preprocess and OCR a local image file",
    )
    ocr_parser.add_argument("image", help="Path to the image file")
    ocr_parser.add_argument(
        "--no-preprocess",
        action="store_true",
        help="Run OCR on the image as-is",
    )
    ocr_parser.add_argument(
        "--artifact-dir",
        help="Save each preprocessing step's output image to this directory",
    )
    ocr_parser.set_defaults(_cmd=cmd_ocr)


def cmd_ocr(args: argparse.Namespace) -> int:
    image_path = Path(args.image)
    if not image_path.is_file():
        logger.error("%s is not a file", image_path)
        return 1

    try:
        settings = load_cli_settings(args)
        engine = get_ocr_engine(settings.ocr_engine)

        image_data = image_path.read_bytes()
        if not args.no_preprocess:
            outcome = preprocess_image(image_data, artifact_dir=args.artifact_dir)
            if outcome.used_fallback:
                logger.warning("Preprocessing failed, using the original image")
            image_data = outcome.image_bytes

        recognized = engine.recognize(image_data)
    except WorkoutScraperError as exc:
        logger.error("%s", exc)
        return 1

    text = normalize_text(recognized.raw_text)
    logger.info("OCR confidence: %.2f%%", recognized.confidence)
    print(text)
    return 0
