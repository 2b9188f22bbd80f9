"""
OCR module: recognition engines and text normalization.

Key components:
- types: RecognizedText, TextFragment, OcrEngine protocol
- engine: EasyOcrEngine and get_ocr_engine()
- text: normalize_text() and preview()
"""

from .types import RecognizedText, TextFragment, OcrEngine
from .engine import EasyOcrEngine, get_ocr_engine, group_lines, fragments_to_text
from .text import normalize_text, preview

__all__ = [
    "RecognizedText",
    "TextFragment",
    "OcrEngine",
    "EasyOcrEngine",
    "get_ocr_engine",
    "group_lines",
    "fragments_to_text",
    "normalize_text",
    "preview",
]
