"""
Rate limiting utilities for Mapbox API calls.
"""

import asyncio

from aiolimiter import AsyncLimiter

from core.constants import MAPBOX_MAX_CONCURRENT_REQUESTS, MAPBOX_REQUESTS_PER_MINUTE

# Mapbox allows 300 requests per minute - be conservative
mapbox_rate_limiter = AsyncLimiter(MAPBOX_REQUESTS_PER_MINUTE, 60)

# Semaphore for concurrent Mapbox requests
mapbox_semaphore = asyncio.Semaphore(MAPBOX_MAX_CONCURRENT_REQUESTS)
