"""API routes for route matching."""

import logging
from typing import Any

from fastapi import APIRouter, File, Query, UploadFile

from config import (
    MAPBOX_API_BASE_URL,
    MAPBOX_PROFILE,
    ROUTE_MATCH_MAX_POINTS,
    ROUTE_MATCH_TIMEOUT_SECONDS,
    get_mapbox_token,
)
from core.api import api_route
from route_matching.ingest import parse_fix_file
from route_matching.models import MatchingSettings, MatchRequest
from route_matching.service import RouteMatchingService

logger = logging.getLogger(__name__)
router = APIRouter()

service = RouteMatchingService(
    get_mapbox_token(),
    settings=MatchingSettings(max_sampled_points=ROUTE_MATCH_MAX_POINTS),
    base_url=MAPBOX_API_BASE_URL,
    profile=MAPBOX_PROFILE,
)


@router.post("/api/map-match", response_model=dict[str, Any])
@api_route(logger)
async def map_match(request: MatchRequest):
    """Match a list of fixes to a single route geometry."""
    result = await service.match(
        request.coordinates,
        timeout=ROUTE_MATCH_TIMEOUT_SECONDS,
    )
    return result.to_response()


@router.post("/api/map-match/upload", response_model=dict[str, Any])
@api_route(logger)
async def upload_fixes(
    file: UploadFile = File(...),
    match: bool = Query(True),
):
    """Parse an uploaded JSON file of fixes and optionally match it."""
    ingest = parse_fix_file(await file.read())
    logger.info(
        "Loaded %d fix(es) from %s (%d discarded)",
        len(ingest.fixes),
        file.filename,
        ingest.discarded,
    )

    route = None
    if match:
        result = await service.match(
            ingest.fixes,
            timeout=ROUTE_MATCH_TIMEOUT_SECONDS,
        )
        route = result.to_response()

    return {
        "coordinates": [fix.model_dump(mode="json") for fix in ingest.fixes],
        "discarded": ingest.discarded,
        "route": route,
    }
