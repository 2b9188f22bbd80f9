"""Type definitions for the OCR module."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


# A quadrilateral as returned by EasyOCR: four [x, y] points
Bbox = list[list[float]]


@dataclass(frozen=True)
class RecognizedText:
    """Raw OCR output for one image.

    Attributes:
        raw_text: Recognized text, lines separated by newlines.
        confidence: Mean recognition confidence on a 0-100 scale.
    """

    raw_text: str
    confidence: float


@dataclass(frozen=True)
class TextFragment:
    """One recognized text box, used to rebuild reading order."""

    text: str
    confidence: float
    bbox: Bbox

    @property
    def top(self) -> float:
        return min(p[1] for p in self.bbox)

    @property
    def left(self) -> float:
        return min(p[0] for p in self.bbox)

    @property
    def height(self) -> float:
        return max(p[1] for p in self.bbox) - self.top

    @property
    def center_y(self) -> float:
        return self.top + self.height / 2


class OcrEngine(Protocol):
    """Anything that turns image bytes into RecognizedText."""

    name: str

    def recognize(self, image_data: bytes) -> RecognizedText:
        ...
