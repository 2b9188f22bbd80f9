"""
Telegram delivery of workout results.

Talks to the Telegram Bot HTTP API directly with requests. Messages are sent
as plain text (no parse mode) so OCR output with stray markup characters
cannot break formatting.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

import requests

from config import (
    CAPTION_PREVIEW_LENGTH,
    TELEGRAM_API_BASE,
    TELEGRAM_CAPTION_LIMIT,
    TELEGRAM_MESSAGE_LIMIT,
    TELEGRAM_TIMEOUT,
)
from errors import DeliveryError
from ocr.text import preview

if TYPE_CHECKING:
    from workflow.report import WorkoutReport

logger = logging.getLogger(__name__)


def format_caption(report: "WorkoutReport") -> str:
    """Build the photo caption: day, long date, confidence and a text preview."""
    caption = f"{report.day} Workout\n"
    caption += f"{report.date:%A, %B} {report.date.day}, {report.date.year}\n\n"

    if report.confidence:
        caption += f"OCR Confidence: {report.confidence:.1f}%\n\n"

    if report.text:
        caption += f"Preview:\n{preview(report.text_preview, CAPTION_PREVIEW_LENGTH)}"

    return caption.rstrip("\n")


def format_error(error: BaseException, context: str, when: datetime | None = None) -> str:
    """Build an error notification message."""
    when = when or datetime.now()
    return (
        "Scraper Error\n\n"
        f"Context: {context}\n"
        f"Error: {error}\n\n"
        f"Time: {when:%Y-%m-%d %H:%M:%S}"
    )


def split_message(text: str, limit: int = TELEGRAM_MESSAGE_LIMIT) -> list[str]:
    """Split text into chunks of at most `limit` characters.

    Splits on line boundaries where possible; a single line longer than the
    limit is hard-wrapped.
    """
    if len(text) <= limit:
        return [text]

    chunks: list[str] = []
    current = ""
    for line in text.split("\n"):
        while len(line) > limit:
            if current:
                chunks.append(current)
                current = ""
            chunks.append(line[:limit])
            line = line[limit:]
        candidate = f"{current}\n{line}" if current else line
        if len(candidate) > limit:
            chunks.append(current)
            current = line
        else:
            current = candidate
    if current:
        chunks.append(current)
    return chunks


class TelegramNotifier:
    """Sends workout results to one Telegram chat."""

    def __init__(
        self,
        bot_token: str,
        chat_id: str,
        session: requests.Session | None = None,
        api_base: str = TELEGRAM_API_BASE,
        timeout: int = TELEGRAM_TIMEOUT,
        include_photo: bool = False,
    ):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.session = session or requests.Session()
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.include_photo = include_photo

    def _call(self, method: str, data: dict[str, Any], files: dict | None = None) -> dict:
        url = f"{self.api_base}/bot{self.bot_token}/{method}"
        try:
            response = self.session.post(url, data=data, files=files, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            # Never echo the URL: it contains the bot token
            raise DeliveryError(f"Telegram {method} failed: {type(exc).__name__}") from exc

        if not payload.get("ok"):
            description = payload.get("description", "unknown error")
            raise DeliveryError(f"Telegram {method} rejected: {description}")
        return payload

    def send_message(self, text: str) -> None:
        """Send plain text, split into several messages if too long."""
        logger.info("Sending message to Telegram...")
        for chunk in split_message(text):
            self._call("sendMessage", {"chat_id": self.chat_id, "text": chunk})
        logger.info("Message sent successfully")

    def send_photo(self, image_data: bytes, caption: str = "") -> None:
        """Send a photo with a plain-text caption."""
        logger.info("Sending workout image to Telegram...")
        if len(caption) > TELEGRAM_CAPTION_LIMIT:
            caption = caption[: TELEGRAM_CAPTION_LIMIT - 3] + "..."
        self._call(
            "sendPhoto",
            {"chat_id": self.chat_id, "caption": caption},
            files={"photo": ("workout.png", image_data)},
        )
        logger.info("Image sent successfully to Telegram")

    def send_workout(self, report: "WorkoutReport") -> None:
        """Deliver a workout report as text, preceded by the photo if enabled."""
        logger.info("Sending workout notification to Telegram...")
        if self.include_photo:
            self.send_photo(report.image_bytes, format_caption(report))

        if not report.text:
            logger.info("Workout content empty")
            return

        self.send_message(f"Full Workout Text:\n\n{report.text}")
        logger.info("Workout notification sent successfully")

    def send_error(self, error: BaseException, context: str = "Unknown") -> None:
        """Best-effort error notification; delivery failures are only logged."""
        try:
            self.send_message(format_error(error, context))
        except DeliveryError as exc:
            logger.error("Failed to send error notification: %s", exc)
