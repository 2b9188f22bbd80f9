"""Pytest configuration: fast-by-default setup.

Slow tests (real OCR model loading) are skipped unless --slow is passed.
Run the full suite:   pytest --slow
Run fast tests only:  pytest          (default)
"""
import io

import numpy as np
import pytest
from PIL import Image

from matching import CandidateImage

CAROUSEL_BASE = "https://gym.example.com/wp-content/uploads/2025/10"


def pytest_addoption(parser):
    parser.addoption(
        "--slow",
        action="store_true",
        default=False,
        help="Run slow tests that load OCR models (EasyOCR)",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--slow"):
        return  # run everything
    skip_slow = pytest.mark.skip(reason="slow test skipped, pass --slow to include")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch):
    """Keep the developer's environment out of Settings()."""
    for name in (
        "GYM_WORKOUT_URL",
        "TELEGRAM_BOT_TOKEN",
        "TELEGRAM_CHAT_ID",
        "OCR_ENGINE",
        "TIMEZONE",
        "DEBUG",
        "PRINT_TEXT",
        "CAROUSEL_SELECTOR",
        "IMAGE_MATCH_STRATEGY",
        "IMAGE_FILENAME_PATTERN",
        "IMAGE_ALT_PATTERN",
    ):
        monkeypatch.delenv(name, raising=False)


def _candidate(filename: str, alt: str = "") -> CandidateImage:
    return CandidateImage.from_element(alt, f"{CAROUSEL_BASE}/{filename}")


@pytest.fixture
def week_carousel() -> list[CandidateImage]:
    """Newest-week carousel as the gym page renders it: cover first, then days."""
    days = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
    candidates = [_candidate("1-Cover-2.png", alt="Week 2 cover")]
    for position, day in enumerate(days, start=2):
        candidates.append(_candidate(f"{position}-{day}-2.png", alt=f"{day} workout"))
    return candidates


def _encode(array: np.ndarray, fmt: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    Image.fromarray(array).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def encode_image():
    """Encode a numpy array as image bytes (PNG by default)."""
    return _encode


@pytest.fixture
def schedule_png() -> bytes:
    """A low-contrast RGB 'photo' with dark text-like bars on a gray page."""
    img = np.full((120, 200, 3), 150, dtype=np.uint8)
    img[20:30, 20:180] = 90
    img[50:60, 20:140] = 90
    img[80:90, 20:160] = 90
    return _encode(img)
