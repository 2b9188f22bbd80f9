"""Delivery of workout results (Telegram)."""

from .telegram import TelegramNotifier, format_caption, format_error, split_message

__all__ = [
    "TelegramNotifier",
    "format_caption",
    "format_error",
    "split_message",
]
