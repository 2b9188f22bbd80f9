"""
Workout page carousel scanning.

Loads the gym's workout page in headless Chromium and collects the images of
the first carousel matching a CSS selector, in document order. The page
lists the newest week first; only the first carousel is read.
"""

from __future__ import annotations

import logging
from typing import Protocol

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from config import (
    BROWSER_ARGS,
    BROWSER_USER_AGENT,
    BROWSER_VIEWPORT,
    CAROUSEL_WAIT_TIMEOUT_MS,
    DYNAMIC_CONTENT_WAIT_MS,
    PAGE_LOAD_TIMEOUT_MS,
)
from errors import PageSourceError
from logging_utils import configure_logging, add_logging_args
from matching.types import CandidateImage

logger = logging.getLogger(__name__)

# Runs in the page: alt/src of every <img> under the first matching container
_EXTRACT_IMAGES_JS = """
(selector) => {
    const carousel = document.querySelector(selector);
    if (!carousel) {
        return null;
    }
    return Array.from(carousel.querySelectorAll('img')).map(img => ({
        alt: img.alt || '',
        src: img.src || '',
    }));
}
"""


class PageSource(Protocol):
    """Anything that can scan a carousel into ordered candidates."""

    def scan(self, selector: str) -> list[CandidateImage]:
        ...


def extract_carousel_images(page, selector: str) -> list[CandidateImage]:
    """Extract candidate images from the first carousel on a loaded page.

    Args:
        page: Playwright page object (or anything with a compatible evaluate()).
        selector: CSS selector of the carousel container.

    Returns:
        Candidates in document order.

    Raises:
        PageSourceError: If no element matches the selector.
    """
    elements = page.evaluate(_EXTRACT_IMAGES_JS, selector)
    if elements is None:
        raise PageSourceError(f"Carousel not found: {selector}")
    return [
        CandidateImage.from_element(element.get("alt"), element.get("src"))
        for element in elements
    ]


class PlaywrightCarouselSource:
    """PageSource backed by a headless Chromium session.

    The browser is opened and closed inside scan(); nothing stays open
    between calls.
    """

    def __init__(
        self,
        url: str,
        headless: bool = True,
        page_load_timeout_ms: int = PAGE_LOAD_TIMEOUT_MS,
        carousel_timeout_ms: int = CAROUSEL_WAIT_TIMEOUT_MS,
        settle_ms: int = DYNAMIC_CONTENT_WAIT_MS,
    ):
        self.url = url
        self.headless = headless
        self.page_load_timeout_ms = page_load_timeout_ms
        self.carousel_timeout_ms = carousel_timeout_ms
        self.settle_ms = settle_ms

    def scan(self, selector: str) -> list[CandidateImage]:
        """Load the page and return the carousel's images in document order.

        Raises:
            PageSourceError: If the page fails to load or has no carousel.
        """
        logger.info("Launching browser...")
        try:
            with sync_playwright() as p:
                browser = p.chromium.launch(
                    headless=self.headless,
                    args=list(BROWSER_ARGS),
                )
                try:
                    context = browser.new_context(
                        viewport=BROWSER_VIEWPORT,
                        user_agent=BROWSER_USER_AGENT,
                    )
                    page = context.new_page()

                    logger.info("Navigating to %s...", self.url)
                    page.goto(
                        self.url,
                        wait_until="domcontentloaded",
                        timeout=self.page_load_timeout_ms,
                    )
                    page.wait_for_timeout(self.settle_ms)
                    logger.info("Page loaded successfully")

                    logger.info("Looking for workout carousel...")
                    page.wait_for_selector(selector, timeout=self.carousel_timeout_ms)
                    logger.info("Found workout carousel")

                    candidates = extract_carousel_images(page, selector)
                finally:
                    browser.close()
                    logger.info("Browser closed")
        except PlaywrightError as exc:
            raise PageSourceError(f"Failed to scan {self.url}: {exc}") from exc

        logger.info("Carousel has %s images", len(candidates))
        return candidates


def main(argv: list[str] | None = None) -> int:
    """CLI helper to list the images of a carousel."""
    import argparse

    from matching import describe_candidates

    parser = argparse.ArgumentParser(description="List images in a workout page carousel")
    parser.add_argument("url", help="Workout page URL")
    parser.add_argument("selector", help="CSS selector of the carousel container")
    add_logging_args(parser)

    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.verbose, args.quiet)
    try:
        candidates = PlaywrightCarouselSource(args.url).scan(args.selector)
    except PageSourceError as exc:
        logger.error("%s", exc)
        return 1
    for line in describe_candidates(candidates):
        logger.info("  %s", line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
