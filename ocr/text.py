"""
Text normalization for OCR output.

normalize_text() is pure and idempotent; applying it twice gives the same
result as applying it once.
"""

import re

# CR runs before LF collapse too, so "\r\r\n" cannot leave a fresh CRLF behind
_CRLF = re.compile(r"\r+\n")
_BLANK_RUN = re.compile(r"\n{3,}")


def normalize_text(raw: str) -> str:
    """Clean raw recognized text.

    1. CRLF line endings become LF.
    2. Runs of three or more newlines collapse to two (one blank line).
    3. Leading and trailing whitespace is trimmed.

    Examples:
        >>> normalize_text("a\\r\\n\\r\\n\\r\\n\\r\\nb")
        'a\\n\\nb'
    """
    text = _CRLF.sub("\n", raw)
    text = _BLANK_RUN.sub("\n\n", text)
    return text.strip()


def preview(text: str, limit: int) -> str:
    """Truncate text to `limit` characters, marking truncation with "..."."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
