"""Global constants for the core package.

This module contains shared constants used across the application core.
"""

from typing import Final

# HTTP Client Constants
HTTP_CONNECTION_LIMIT: Final[int] = 10
HTTP_TIMEOUT_CONNECT: Final[float] = 10.0
HTTP_TIMEOUT_SOCK_READ: Final[float] = 60.0
HTTP_TIMEOUT_TOTAL: Final[float] = 300.0

# Mapbox request limits
MAPBOX_REQUESTS_PER_MINUTE: Final[int] = 280
MAPBOX_MAX_CONCURRENT_REQUESTS: Final[int] = 10

# Route matching pipeline
MIN_ROUTE_POINTS: Final[int] = 2
MAX_SAMPLED_POINTS: Final[int] = 100
MAX_REQUEST_POINTS: Final[int] = 100
MATCH_RADIUS_METERS: Final[int] = 25
DIRECTIONS_MAX_WAYPOINTS: Final[int] = 25
SIMPLE_MAX_POINTS: Final[int] = 50
# Optimized but not GPS-verified.
DIRECTIONS_CONFIDENCE: Final[float] = 0.9
