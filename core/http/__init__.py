"""HTTP client utilities and session management."""

from core.http.mapbox import MapboxClient
from core.http.rate_limiting import mapbox_rate_limiter, mapbox_semaphore
from core.http.request import request_json
from core.http.session import cleanup_session, get_session

__all__ = [
    "MapboxClient",
    "cleanup_session",
    "get_session",
    "mapbox_rate_limiter",
    "mapbox_semaphore",
    "request_json",
]
