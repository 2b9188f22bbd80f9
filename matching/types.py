"""
Type definitions for the carousel matching module.

This module defines the data structures exchanged between the page scanner,
the matcher and the orchestrator.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Union
from urllib.parse import urlsplit

from config import DEFAULT_ALT_PATTERN, DEFAULT_FILENAME_PATTERN

# Which sub-check selected the image
MatchedBy = Literal["alt", "filename"]


def derive_filename(source_url: str) -> str:
    """Return the final path segment of an image URL.

    Query strings and fragments are not part of the path, so
    ``https://x/y/2-Monday-2.png?ver=3`` yields ``2-Monday-2.png``.

    Args:
        source_url: Absolute or relative image URL.

    Returns:
        The last path segment, or an empty string for an empty path.
    """
    path = urlsplit(source_url).path
    return path.rsplit("/", 1)[-1]


@dataclass(frozen=True)
class CandidateImage:
    """One image element scanned from the carousel, in document order.

    Attributes:
        alt_text: The element's alt attribute ("" when absent).
        source_url: The resolved src URL of the image.
        derived_filename: Final path segment of source_url.
    """

    alt_text: str
    source_url: str
    derived_filename: str

    @classmethod
    def from_element(cls, alt: str | None, src: str | None) -> CandidateImage:
        """Build a candidate from raw element attributes."""
        source_url = src or ""
        return cls(
            alt_text=alt or "",
            source_url=source_url,
            derived_filename=derive_filename(source_url),
        )


class MatchMode(str, Enum):
    """Which candidate attributes are checked against the day."""

    ALT_TEXT = "alt-text"
    FILENAME = "filename"
    BOTH = "both"

    @classmethod
    def parse(cls, value: str | MatchMode) -> MatchMode:
        """Parse a configuration string such as ``"Alt-Text"`` or ``"both"``.

        Raises:
            ValueError: If the value names no known mode.
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("_", "-")
        for mode in cls:
            if mode.value == normalized:
                return mode
        choices = ", ".join(mode.value for mode in cls)
        raise ValueError(f"Unknown match strategy {value!r}; expected one of: {choices}")

    @property
    def checks_alt(self) -> bool:
        return self in (MatchMode.ALT_TEXT, MatchMode.BOTH)

    @property
    def checks_filename(self) -> bool:
        return self in (MatchMode.FILENAME, MatchMode.BOTH)


@dataclass(frozen=True)
class MatchStrategyConfig:
    """Matching strategy as supplied by configuration.

    Both patterns contain the day placeholder ``{DAY}``. The alt pattern is
    matched as a literal substring, the filename pattern as a regular
    expression searched anywhere in the filename.

    Attributes:
        mode: Which sub-checks are active.
        alt_pattern: Substring template for alt text.
        filename_pattern: Regex template for the derived filename.
    """

    mode: MatchMode = MatchMode.BOTH
    alt_pattern: str = DEFAULT_ALT_PATTERN
    filename_pattern: str = DEFAULT_FILENAME_PATTERN


@dataclass(frozen=True)
class Found:
    """A candidate satisfied the match predicate.

    Attributes:
        image_url: source_url of the selected candidate.
        matched_by: The first sub-check that fired ("alt" wins ties under BOTH).
        candidate: The selected candidate.
        index: Position of the candidate in document order.
    """

    image_url: str
    matched_by: MatchedBy
    candidate: CandidateImage
    index: int

    @property
    def found(self) -> bool:
        return True


@dataclass(frozen=True)
class NotFound:
    """No candidate satisfied the match predicate.

    Attributes:
        day: The day label that was searched for.
        candidates_seen: Number of candidates examined.
    """

    day: str
    candidates_seen: int = 0

    @property
    def found(self) -> bool:
        return False


MatchResult = Union[Found, NotFound]
