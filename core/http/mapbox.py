"""
Mapbox HTTP client utilities.

Wraps the Map Matching and Directions endpoints used by the route matching
pipeline. Both calls are single-shot: failures surface as
ExternalServiceException and are never retried here.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import aiohttp

from core.constants import MATCH_RADIUS_METERS
from core.exceptions import ConfigurationException, ExternalServiceException
from core.http.rate_limiting import mapbox_rate_limiter, mapbox_semaphore
from core.http.request import request_json
from core.http.session import get_session

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.mapbox.com"


class MapboxClient:
    def __init__(
        self,
        access_token: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        profile: str = "driving",
    ) -> None:
        if not access_token:
            msg = "Mapbox access token not configured"
            raise ConfigurationException(msg)
        self._access_token = access_token
        self._base_url = base_url.rstrip("/")
        self._profile = profile

    @property
    def matching_url(self) -> str:
        return f"{self._base_url}/matching/v5/mapbox/{self._profile}"

    @property
    def directions_url(self) -> str:
        return f"{self._base_url}/directions/v5/mapbox/{self._profile}"

    async def match(
        self,
        coordinates: Sequence[tuple[float, float]],
        *,
        radius_meters: int = MATCH_RADIUS_METERS,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """Call the Map Matching API for one batch of (lon, lat) pairs.

        Returns the raw response body; callers decide whether it holds a
        usable matching.
        """
        if len(coordinates) < 2:
            msg = "Mapbox map matching requires at least two coordinates."
            raise ExternalServiceException(msg)

        params = {
            "access_token": self._access_token,
            "geometries": "geojson",
            "overview": "full",
            "radiuses": ";".join(str(radius_meters) for _ in coordinates),
            "steps": "false",
            "tidy": "true",
            "annotations": "distance,duration",
        }
        url = f"{self.matching_url}/{self._format_coordinates(coordinates)}"
        data = await self._get(url, params, "Mapbox map matching", timeout)
        if not isinstance(data, dict):
            msg = "Mapbox map matching error: unexpected response"
            raise ExternalServiceException(msg, {"url": self.matching_url})
        return data

    async def directions(
        self,
        coordinates: Sequence[tuple[float, float]],
        *,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """Call the Directions API with ordered waypoints."""
        if len(coordinates) < 2:
            msg = "Mapbox directions requires at least two waypoints."
            raise ExternalServiceException(msg)

        params = {
            "access_token": self._access_token,
            "geometries": "geojson",
            "overview": "full",
            "steps": "false",
        }
        url = f"{self.directions_url}/{self._format_coordinates(coordinates)}"
        data = await self._get(url, params, "Mapbox directions", timeout)
        if not isinstance(data, dict):
            msg = "Mapbox directions error: unexpected response"
            raise ExternalServiceException(msg, {"url": self.directions_url})
        return data

    async def _get(
        self,
        url: str,
        params: dict[str, Any],
        service_name: str,
        timeout: float | None,
    ) -> Any:
        client_timeout = aiohttp.ClientTimeout(total=timeout) if timeout else None
        async with mapbox_semaphore, mapbox_rate_limiter:
            session = await get_session()
            return await request_json(
                "GET",
                url,
                session=session,
                params=params,
                service_name=service_name,
                timeout=client_timeout,
            )

    @staticmethod
    def _format_coordinates(coordinates: Sequence[tuple[float, float]]) -> str:
        return ";".join(f"{lon},{lat}" for lon, lat in coordinates)

    @staticmethod
    def extract_geometry(candidate: Any) -> list[tuple[float, float]]:
        """Pull (lon, lat) vertices out of a matching or route object."""
        if not isinstance(candidate, dict):
            return []
        geometry = candidate.get("geometry")
        if not isinstance(geometry, dict):
            return []
        coords: list[tuple[float, float]] = []
        for point in geometry.get("coordinates") or []:
            try:
                coords.append((float(point[0]), float(point[1])))
            except (TypeError, ValueError, IndexError):
                continue
        return coords
