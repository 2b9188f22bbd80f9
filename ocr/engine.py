"""
OCR engine adapters.

The orchestrator only depends on the OcrEngine protocol. EasyOcrEngine is the
production implementation; get_ocr_engine() maps the OCR_ENGINE setting to
an engine instance.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, Sequence

from config import OCR_LANGUAGES, OCR_LINE_MERGE_RATIO, OCR_USE_GPU
from errors import ConfigurationError, RecognitionFailure

from .types import OcrEngine, RecognizedText, TextFragment

if TYPE_CHECKING:
    import easyocr

logger = logging.getLogger(__name__)


def group_lines(
    fragments: Iterable[TextFragment],
    merge_ratio: float = OCR_LINE_MERGE_RATIO,
) -> list[list[TextFragment]]:
    """Group text fragments into rows, top to bottom, left to right.

    A fragment joins the current row when its vertical centre lies within
    `merge_ratio` x its own height of the row's first fragment.
    """
    rows: list[list[TextFragment]] = []
    for fragment in sorted(fragments, key=lambda f: (f.top, f.left)):
        if rows:
            anchor = rows[-1][0]
            tolerance = max(fragment.height, anchor.height) * merge_ratio
            if abs(fragment.center_y - anchor.center_y) <= tolerance:
                rows[-1].append(fragment)
                continue
        rows.append([fragment])
    return [sorted(row, key=lambda f: f.left) for row in rows]


def fragments_to_text(fragments: Sequence[TextFragment]) -> RecognizedText:
    """Assemble fragments into text and a 0-100 mean confidence."""
    if not fragments:
        return RecognizedText(raw_text="", confidence=0.0)

    lines = [
        " ".join(fragment.text.strip() for fragment in row if fragment.text.strip())
        for row in group_lines(fragments)
    ]
    confidence = sum(f.confidence for f in fragments) / len(fragments) * 100.0
    return RecognizedText(raw_text="\n".join(lines), confidence=confidence)


class EasyOcrEngine:
    """OCR through an EasyOCR reader.

    The reader loads detection and recognition models on construction, which
    takes seconds, so it is created lazily on first use unless one is
    injected.
    """

    name = "easyocr"

    def __init__(
        self,
        languages: Sequence[str] = OCR_LANGUAGES,
        gpu: bool = OCR_USE_GPU,
        reader: "easyocr.Reader | Any | None" = None,
    ):
        self.languages = list(languages)
        self.gpu = gpu
        self._reader = reader

    @property
    def reader(self) -> "easyocr.Reader":
        if self._reader is None:
            import easyocr

            logger.info("Loading EasyOCR models (%s)...", ", ".join(self.languages))
            self._reader = easyocr.Reader(self.languages, gpu=self.gpu)
        return self._reader

    def recognize(self, image_data: bytes) -> RecognizedText:
        """Recognize text in encoded image bytes.

        Raises:
            RecognitionFailure: If the reader fails for any reason.
        """
        logger.info("Starting OCR with EasyOCR...")
        try:
            results = self.reader.readtext(image_data, detail=1, paragraph=False)
        except Exception as exc:
            raise RecognitionFailure(f"EasyOCR failed: {exc}") from exc

        fragments = [
            TextFragment(
                text=str(text),
                confidence=float(confidence),
                bbox=[[float(x), float(y)] for x, y in bbox],
            )
            for bbox, text, confidence in results
        ]
        recognized = fragments_to_text(fragments)
        logger.info("OCR completed (confidence: %.2f%%)", recognized.confidence)
        logger.info("Extracted %s characters", len(recognized.raw_text))
        return recognized


OCR_ENGINES = {
    "easyocr": EasyOcrEngine,
}


def get_ocr_engine(name: str) -> OcrEngine:
    """Return an engine instance for a configured engine name.

    Raises:
        ConfigurationError: If the engine is not supported.
    """
    key = name.strip().lower()
    engine_cls = OCR_ENGINES.get(key)
    if engine_cls is None:
        choices = ", ".join(sorted(OCR_ENGINES))
        raise ConfigurationError(f"Unsupported OCR engine: {name} (available: {choices})")
    return engine_cls()
