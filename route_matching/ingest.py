"""
Fix ingestion from uploaded JSON documents.

Supported layouts:
    - A list of objects with ``latitude``/``longitude`` (optional ``id`` and
      ``timestamp``) or a list of ``[lat, lon]`` pairs
    - An object with a ``coordinates`` list, accepting ``lat`` and
      ``lng``/``lon`` aliases
    - A GeoJSON FeatureCollection of ``Point`` features with an optional
      ``properties.timestamp``

Fixes without a timestamp get the ingestion time. Fixes outside the valid
latitude/longitude range are discarded and counted.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from core.exceptions import ValidationException
from date_utils import get_current_utc_time
from geometry_service import GeometryService
from route_matching.models import Fix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestResult:
    fixes: list[Fix]
    discarded: int


def _first_present(item: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = item.get(key)
        if value is not None and value != "":
            return value
    return None


def _to_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _raw_from_list(data: list[Any]) -> list[dict[str, Any]]:
    raw: list[dict[str, Any]] = []
    for index, item in enumerate(data):
        if isinstance(item, dict) and "latitude" in item and "longitude" in item:
            raw.append(
                {
                    "id": item.get("id"),
                    "latitude": item.get("latitude"),
                    "longitude": item.get("longitude"),
                    "timestamp": item.get("timestamp"),
                },
            )
        elif isinstance(item, list | tuple) and len(item) >= 2:
            raw.append({"latitude": item[0], "longitude": item[1]})
        else:
            msg = f"Invalid coordinate format at index {index}"
            raise ValidationException(msg, {"index": index})
    return raw


def _raw_from_nested(coordinates: list[Any]) -> list[dict[str, Any]]:
    raw: list[dict[str, Any]] = []
    for index, item in enumerate(coordinates):
        if not isinstance(item, dict):
            msg = f"Invalid coordinate format at index {index}"
            raise ValidationException(msg, {"index": index})
        raw.append(
            {
                "id": item.get("id"),
                "latitude": _first_present(item, "latitude", "lat"),
                "longitude": _first_present(item, "longitude", "lng", "lon"),
                "timestamp": item.get("timestamp"),
            },
        )
    return raw


def _raw_from_features(features: list[Any]) -> list[dict[str, Any]]:
    raw: list[dict[str, Any]] = []
    for feature in features:
        if not isinstance(feature, dict):
            continue
        geometry = feature.get("geometry")
        if not isinstance(geometry, dict) or geometry.get("type") != "Point":
            continue
        coords = geometry.get("coordinates")
        if not isinstance(coords, list | tuple) or len(coords) < 2:
            continue
        properties = feature.get("properties")
        if not isinstance(properties, dict):
            properties = {}
        raw.append(
            {
                "id": feature.get("id"),
                "latitude": coords[1],
                "longitude": coords[0],
                "timestamp": properties.get("timestamp"),
            },
        )
    return raw


def parse_fix_payload(data: Any, *, now: datetime | None = None) -> IngestResult:
    """
    Convert a decoded JSON document into fixes.

    Args:
        data: Decoded JSON in one of the supported layouts
        now: Timestamp for fixes that carry none (defaults to current UTC time)

    Returns:
        IngestResult with the valid fixes and the number discarded

    Raises:
        ValidationException: Unsupported layout or no valid fixes
    """
    if isinstance(data, list):
        raw = _raw_from_list(data)
    elif isinstance(data, dict) and isinstance(data.get("coordinates"), list):
        raw = _raw_from_nested(data["coordinates"])
    elif isinstance(data, dict) and isinstance(data.get("features"), list):
        raw = _raw_from_features(data["features"])
    else:
        msg = "Unsupported JSON format"
        raise ValidationException(msg)

    if not raw:
        msg = "No valid coordinates found in the file"
        raise ValidationException(msg)

    fallback_time = now or get_current_utc_time()
    fixes: list[Fix] = []
    for item in raw:
        lat = _to_float(item["latitude"])
        lon = _to_float(item["longitude"])
        if lat is None or lon is None or not GeometryService.is_valid_lat_lon(lat, lon):
            continue
        try:
            fixes.append(
                Fix(
                    id=item.get("id"),
                    latitude=lat,
                    longitude=lon,
                    timestamp=item.get("timestamp") or fallback_time,
                ),
            )
        except PydanticValidationError as exc:
            logger.warning("Skipping fix %s: %s", item.get("id"), exc.errors()[0]["msg"])

    if not fixes:
        msg = (
            "No valid coordinates found (latitude must be -90 to 90, "
            "longitude must be -180 to 180)"
        )
        raise ValidationException(msg, {"received": len(raw)})

    discarded = len(raw) - len(fixes)
    if discarded:
        logger.info("Discarded %d invalid fix(es) of %d", discarded, len(raw))
    return IngestResult(fixes=fixes, discarded=discarded)


def parse_fix_file(content: bytes | str) -> IngestResult:
    """Decode an uploaded JSON file and parse its fixes."""
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        msg = "Uploaded file is not valid JSON"
        raise ValidationException(msg, {"error": str(exc)}) from exc
    return parse_fix_payload(data)
