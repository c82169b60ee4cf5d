"""Geometry helpers for coordinate validation, distance, and GeoJSON output."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from typing import Any


class GeometryService:
    """Geometry operations shared by ingestion and the route matching pipeline."""

    EARTH_RADIUS_M = 6371000.0

    @staticmethod
    def is_valid_lat_lon(lat: Any, lon: Any) -> bool:
        """Check that a latitude/longitude pair is numeric and within range."""
        try:
            lat_f = float(lat)
            lon_f = float(lon)
        except (TypeError, ValueError):
            return False
        if math.isnan(lat_f) or math.isnan(lon_f):
            return False
        return -90 <= lat_f <= 90 and -180 <= lon_f <= 180

    @staticmethod
    def haversine_distance(
        lon1: float,
        lat1: float,
        lon2: float,
        lat2: float,
    ) -> float:
        """Great-circle distance in meters using the Haversine formula."""
        phi1 = math.radians(lat1)
        phi2 = math.radians(lat2)
        dphi = math.radians(lat2 - lat1)
        dlmb = math.radians(lon2 - lon1)
        a = (
            math.sin(dphi / 2) ** 2
            + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
        )
        return 2 * GeometryService.EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(a)))

    @staticmethod
    def path_length(coords: Sequence[Sequence[float]]) -> float:
        """Sum of haversine distances in meters along an ordered (lon, lat) path."""
        total = 0.0
        for (lon1, lat1), (lon2, lat2) in zip(coords, coords[1:]):
            total += GeometryService.haversine_distance(lon1, lat1, lon2, lat2)
        return total

    @staticmethod
    def line_string(coords: Iterable[Sequence[float]]) -> dict[str, Any]:
        """Build a GeoJSON LineString; vertex order and duplicates are kept."""
        return {
            "type": "LineString",
            "coordinates": [[float(c[0]), float(c[1])] for c in coords],
        }
