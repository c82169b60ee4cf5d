"""
Route Matching Package.

Turns a noisy, possibly oversized set of GPS fixes into one road-aligned
route geometry:
- Temporal ordering and adaptive sampling
- Request batching for the Mapbox point limit
- Map matching, directions, and straight-line fallbacks
- Confidence scoring and result merging

Usage:
    from route_matching import RouteMatchingService

    service = RouteMatchingService(access_token)
    result = await service.match(fixes)
"""

from route_matching.batching import Batch, split_into_batches
from route_matching.confidence import matched_point_ratio
from route_matching.ingest import IngestResult, parse_fix_file, parse_fix_payload
from route_matching.merger import merge_results
from route_matching.models import (
    AggregateResult,
    Fix,
    MatchingSettings,
    MatchMethod,
    MatchRequest,
    MatchResult,
)
from route_matching.normalizer import require_minimum_fixes, sort_by_timestamp
from route_matching.sampling import sample_by_index, sample_by_time
from route_matching.service import RouteMatchingService, default_strategies
from route_matching.state import MatchingState, MatchingStateMachine
from route_matching.strategies import (
    DirectionsStrategy,
    MapMatchingStrategy,
    MatchContext,
    SimpleLineStrategy,
)

__all__ = [
    "AggregateResult",
    "Batch",
    "DirectionsStrategy",
    "Fix",
    "IngestResult",
    "MapMatchingStrategy",
    "MatchContext",
    "MatchMethod",
    "MatchRequest",
    "MatchResult",
    "MatchingSettings",
    "MatchingState",
    "MatchingStateMachine",
    # Main service
    "RouteMatchingService",
    "SimpleLineStrategy",
    "default_strategies",
    "matched_point_ratio",
    "merge_results",
    "parse_fix_file",
    "parse_fix_payload",
    "require_minimum_fixes",
    "sample_by_index",
    "sample_by_time",
    "sort_by_timestamp",
    "split_into_batches",
]
