"""Centralized configuration for environment variables and external APIs.

This module is the single source of truth for configuration used across the
application. Import constants from here rather than calling os.getenv directly
in multiple places.

NOTE: The matching pipeline never reads these values itself. The HTTP layer
reads them once and injects the token and settings into
RouteMatchingService.
"""

from __future__ import annotations

import os
from typing import Final

from dotenv import load_dotenv

# Load environment variables from .env if present
load_dotenv()


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_float(key: str, default: float | None) -> float | None:
    value = os.getenv(key)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


# --- Mapbox Configuration ---
MAPBOX_ACCESS_TOKEN: Final[str] = os.getenv("MAPBOX_ACCESS_TOKEN", "")
MAPBOX_API_BASE_URL: Final[str] = os.getenv(
    "MAPBOX_API_BASE_URL",
    "https://api.mapbox.com",
).rstrip("/")
MAPBOX_PROFILE: Final[str] = os.getenv("MAPBOX_PROFILE", "driving")


# --- Route Matching Configuration ---
# Upper bound on fixes kept after time-interval sampling.
ROUTE_MATCH_MAX_POINTS: Final[int] = _env_int("ROUTE_MATCH_MAX_POINTS", 100)
# Overall per-request deadline; unset means no deadline.
ROUTE_MATCH_TIMEOUT_SECONDS: Final[float | None] = _env_float(
    "ROUTE_MATCH_TIMEOUT_SECONDS",
    None,
)


def get_mapbox_token() -> str:
    """Return the Mapbox token, re-reading the environment if it was unset at import."""
    return MAPBOX_ACCESS_TOKEN or os.getenv("MAPBOX_ACCESS_TOKEN", "")


__all__ = [
    "MAPBOX_ACCESS_TOKEN",
    "MAPBOX_API_BASE_URL",
    "MAPBOX_PROFILE",
    "ROUTE_MATCH_MAX_POINTS",
    "ROUTE_MATCH_TIMEOUT_SECONDS",
    "get_mapbox_token",
]
