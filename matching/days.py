"""
Target day resolution.

The scraper normally runs in the evening and fetches tomorrow's workout; an
explicit day can be supplied for manual runs and testing.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from config import DAY_OFFSET, DEFAULT_TIMEZONE, WEEKDAYS
from errors import ConfigurationError

logger = logging.getLogger(__name__)


def canonical_day(label: str) -> str:
    """Return the canonical weekday name for a user-supplied label.

    Matching is case-insensitive and ignores surrounding whitespace.

    Raises:
        ConfigurationError: If the label is not one of the seven weekdays.
    """
    cleaned = label.strip().lower()
    for day in WEEKDAYS:
        if day.lower() == cleaned:
            return day
    raise ConfigurationError(
        f"Unknown day {label!r}; expected one of: {', '.join(WEEKDAYS)}"
    )


def today_in(timezone: str = DEFAULT_TIMEZONE) -> date:
    """Return the current calendar date in an IANA timezone."""
    try:
        tz = ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"Unknown timezone {timezone!r}") from exc
    return datetime.now(tz).date()


def target_date(today: date, offset: int = DAY_OFFSET) -> date:
    """Return the calendar date `offset` days after `today`."""
    return today + timedelta(days=offset)


def resolve_day(
    override: str | None = None,
    today: date | None = None,
    timezone: str = DEFAULT_TIMEZONE,
) -> str:
    """Resolve the weekday label to scrape.

    Args:
        override: Explicit day name. Takes precedence when non-empty.
        today: Reference date. Defaults to the current date in `timezone`.
        timezone: IANA timezone used when `today` is not given.

    Returns:
        One of the seven weekday names, e.g. "Monday".

    Raises:
        ConfigurationError: If the override or timezone is invalid.
    """
    if override and override.strip():
        day = canonical_day(override)
        logger.info("Target day (manual): %s", day)
        return day

    if today is None:
        today = today_in(timezone)
    tomorrow = target_date(today)
    day = WEEKDAYS[tomorrow.weekday()]
    logger.info("Target day: %s (%s)", day, tomorrow.isoformat())
    return day
