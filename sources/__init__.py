"""
Page and image source adapters.

- carousel: scan a workout page carousel with Playwright
- download: fetch the matched image over HTTP
"""

from .carousel import PageSource, PlaywrightCarouselSource, extract_carousel_images
from .download import download_image

__all__ = [
    "PageSource",
    "PlaywrightCarouselSource",
    "extract_carousel_images",
    "download_image",
]
