"""Runtime settings loaded from the environment and an optional .env file.

Defaults for everything tunable live in config.py; this module only holds
values that differ per deployment (URLs, credentials, match overrides).
"""

from __future__ import annotations

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from config import (
    DEFAULT_ALT_PATTERN,
    DEFAULT_CAROUSEL_SELECTOR,
    DEFAULT_FILENAME_PATTERN,
    DEFAULT_MATCH_STRATEGY,
    DEFAULT_OCR_ENGINE,
    DEFAULT_TIMEZONE,
)
from errors import ConfigurationError
from matching.types import MatchMode, MatchStrategyConfig


class Settings(BaseSettings):
    """Deployment settings. Field names map to upper-case environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    gym_workout_url: str | None = None

    telegram_bot_token: str | None = None
    telegram_chat_id: str | None = None

    ocr_engine: str = DEFAULT_OCR_ENGINE
    timezone: str = DEFAULT_TIMEZONE

    debug: bool = False
    print_text: bool = False

    carousel_selector: str = DEFAULT_CAROUSEL_SELECTOR
    image_match_strategy: MatchMode = MatchMode(DEFAULT_MATCH_STRATEGY)
    image_filename_pattern: str = DEFAULT_FILENAME_PATTERN
    image_alt_pattern: str = DEFAULT_ALT_PATTERN

    @field_validator("image_match_strategy", mode="before")
    @classmethod
    def _parse_match_strategy(cls, value):
        return MatchMode.parse(value)

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"unknown timezone {value!r}")
        return value

    def match_strategy(self) -> MatchStrategyConfig:
        """Return the configured carousel match strategy."""
        return MatchStrategyConfig(
            mode=self.image_match_strategy,
            alt_pattern=self.image_alt_pattern,
            filename_pattern=self.image_filename_pattern,
        )

    def validate_for_run(self, require_delivery: bool = True) -> None:
        """Check that everything a run needs is configured.

        Raises:
            ConfigurationError: Listing every missing value.
        """
        errors = []
        if not self.gym_workout_url:
            errors.append("GYM_WORKOUT_URL is required")
        if require_delivery:
            if not self.telegram_bot_token:
                errors.append("TELEGRAM_BOT_TOKEN is required")
            if not self.telegram_chat_id:
                errors.append("TELEGRAM_CHAT_ID is required")
        if errors:
            raise ConfigurationError(
                "Configuration errors: " + "; ".join(errors)
                + ". Create a .env file or set the environment variables."
            )


def load_settings(**overrides) -> Settings:
    """Load settings, converting validation failures to ConfigurationError."""
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid settings: {exc}") from exc
