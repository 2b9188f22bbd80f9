"""Result of one workout scraping run."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from config import REPORT_PREVIEW_LENGTH


@dataclass
class WorkoutReport:
    """Everything downstream delivery needs about one run.

    Attributes:
        day: Resolved weekday label.
        date: Calendar date the run happened on.
        image_url: URL of the matched carousel image.
        matched_by: Which sub-check selected the image ("alt" or "filename").
        image_bytes: The downloaded (original) image.
        text: Normalized OCR text.
        confidence: OCR confidence, 0-100.
        used_fallback: True if OCR ran on the unprocessed image.
        duration_seconds: Wall time of the run.
    """

    day: str
    date: date
    image_url: str
    matched_by: str
    image_bytes: bytes = field(repr=False)
    text: str
    confidence: float
    used_fallback: bool = False
    duration_seconds: float = 0.0

    @property
    def text_preview(self) -> str:
        """Leading slice of the text handed to delivery summaries."""
        return self.text[:REPORT_PREVIEW_LENGTH]
