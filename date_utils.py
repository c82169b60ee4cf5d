"""
Centralized date and time utilities for the application.

All timestamps are handled as timezone-aware datetime objects, defaulting to
UTC, so fixes recorded with and without offsets can be ordered together.
`dateutil` does the ISO 8601 parsing.
"""

import logging
from datetime import UTC, datetime

from dateutil import parser

logger = logging.getLogger(__name__)


def get_current_utc_time() -> datetime:
    """Return the current time as a timezone-aware datetime object in UTC."""
    return datetime.now(UTC)


def parse_timestamp(ts: str | datetime | int | float | None) -> datetime | None:
    """
    Parse a timestamp and ensure it is timezone-aware, normalized to UTC.

    Args:
        ts: ISO 8601 string, datetime, or Unix epoch seconds.

    Returns:
        A UTC datetime, or None if parsing fails.
    """
    if ts is None or ts == "":
        logger.debug("Received empty timestamp; returning None.")
        return None

    if isinstance(ts, datetime):
        return ensure_utc(ts)

    if isinstance(ts, bool):
        logger.warning("Refusing boolean timestamp %r", ts)
        return None

    if isinstance(ts, int | float):
        try:
            return datetime.fromtimestamp(ts, UTC)
        except (OverflowError, OSError, ValueError) as e:
            logger.warning("Failed to convert epoch timestamp %s: %s", ts, e)
            return None

    try:
        return ensure_utc(parser.isoparse(ts))
    except (ValueError, TypeError) as e:
        logger.warning("Failed to parse timestamp '%s': %s", ts, e)
        return None


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Return the datetime as an explicit UTC-aware value."""

    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)
