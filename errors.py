"""Exception types shared across the workout scraper.

Anything the CLI should report as a clean failure derives from
WorkoutScraperError. DegradedInputWarning is a warning category, not an
error: it is only ever logged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from matching.types import CandidateImage


class WorkoutScraperError(Exception):
    """Base class for expected, reportable failures."""


class ConfigurationError(WorkoutScraperError):
    """Invalid settings or match strategy. Raised before any page is scraped."""


class NotFoundError(WorkoutScraperError):
    """No carousel image satisfied the configured match predicate."""

    def __init__(self, day: str, candidates: Sequence["CandidateImage"] = ()):
        self.day = day
        self.candidates = tuple(candidates)
        super().__init__(f"No image found for {day} in carousel")


class RecognitionFailure(WorkoutScraperError):
    """The OCR engine failed to recognize the image."""


class PageSourceError(WorkoutScraperError):
    """The page could not be loaded or the carousel was not found."""


class DownloadError(WorkoutScraperError):
    """The matched image could not be downloaded."""


class DeliveryError(WorkoutScraperError):
    """The delivery backend rejected or failed to receive a message."""


class DegradedInputWarning(UserWarning):
    """Image preprocessing failed and the original bytes were used."""
