"""
Matching strategies for the fallback cascade.

Each strategy takes a MatchContext and returns an AggregateResult, or None
when it could not produce geometry. Strategies never raise for service
failures; the orchestrator simply moves on to the next one.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from core.exceptions import ExternalServiceException
from core.http.mapbox import MapboxClient
from geometry_service import GeometryService
from route_matching.confidence import matched_point_ratio
from route_matching.merger import merge_results
from route_matching.models import AggregateResult, MatchMethod, MatchResult
from route_matching.sampling import sample_by_index
from route_matching.state import MatchingState

if TYPE_CHECKING:
    from route_matching.batching import Batch
    from route_matching.models import Fix, MatchingSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchContext:
    """Inputs shared by every strategy of one request."""

    fixes: tuple[Fix, ...]
    sampled: tuple[Fix, ...]
    batches: tuple[Batch, ...]
    settings: MatchingSettings
    deadline: float | None = None

    def remaining(self) -> float | None:
        """Seconds left before the caller's deadline, or None without one."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - asyncio.get_running_loop().time())

    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0


class MatchStrategy(Protocol):
    name: str
    state: MatchingState
    requires_service: bool

    async def __call__(self, context: MatchContext) -> AggregateResult | None: ...


def _first_geometry(candidates: Any) -> tuple[dict[str, Any], list[tuple[float, float]]] | None:
    """First candidate (matching or route) whose geometry has vertices."""
    for candidate in candidates or []:
        coords = MapboxClient.extract_geometry(candidate)
        if coords:
            return candidate, coords
    return None


def _as_float(value: Any) -> float | None:
    return float(value) if isinstance(value, int | float) else None


class MapMatchingStrategy:
    """Match every batch concurrently and merge whichever batches succeed."""

    name = "map_matching"
    state = MatchingState.MAP_MATCHING
    requires_service = True

    def __init__(self, client: MapboxClient) -> None:
        self._client = client

    async def __call__(self, context: MatchContext) -> AggregateResult | None:
        batches = context.batches
        if not batches:
            return None

        logger.info("Map matching %d batch(es)", len(batches))
        tasks = [
            asyncio.create_task(
                self._match_batch(batch, context.settings.match_radius_meters),
                name=f"map-match-batch-{batch.index}",
            )
            for batch in batches
        ]
        done, pending = await asyncio.wait(tasks, timeout=context.remaining())
        if pending:
            logger.warning(
                "%d of %d batch request(s) did not finish before the deadline",
                len(pending),
                len(tasks),
            )
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        # One slot per batch keeps results in batch order.
        slots: list[MatchResult | None] = [None] * len(tasks)
        for position, task in enumerate(tasks):
            if task not in done or task.cancelled():
                continue
            exc = task.exception()
            if exc is not None:
                if isinstance(exc, ExternalServiceException):
                    logger.warning(
                        "Batch %d map matching failed: %s",
                        batches[position].index,
                        exc.message,
                    )
                else:
                    logger.warning(
                        "Unexpected error matching batch %d",
                        batches[position].index,
                        exc_info=exc,
                    )
                continue
            slots[position] = task.result()

        matched = [result for result in slots if result is not None]
        logger.info("Map matching succeeded for %d/%d batch(es)", len(matched), len(tasks))
        return merge_results(
            matched,
            original_point_count=len(context.fixes),
            batch_count=len(batches),
        )

    async def _match_batch(self, batch: Batch, radius_meters: int) -> MatchResult | None:
        data = await self._client.match(batch.coordinates, radius_meters=radius_meters)

        found = _first_geometry(data.get("matchings"))
        if found is None:
            logger.warning(
                "Batch %d returned no usable matching (code=%s)",
                batch.index,
                data.get("code"),
            )
            return None

        matching, coords = found
        return MatchResult(
            geometry=coords,
            method=MatchMethod.MATCHED,
            confidence=matched_point_ratio(data.get("tracepoints"), len(batch)),
            processed_point_count=len(batch),
            original_point_count=len(batch),
            distance=_as_float(matching.get("distance")),
            duration=_as_float(matching.get("duration")),
        )


class DirectionsStrategy:
    """Route through evenly spaced waypoints of the sampled sequence."""

    name = "directions"
    state = MatchingState.DIRECTIONS_FALLBACK
    requires_service = True

    def __init__(self, client: MapboxClient) -> None:
        self._client = client

    async def __call__(self, context: MatchContext) -> AggregateResult | None:
        settings = context.settings
        waypoints = sample_by_index(context.sampled, settings.directions_max_waypoints)
        logger.info("Falling back to directions with %d waypoints", len(waypoints))

        try:
            data = await asyncio.wait_for(
                self._client.directions([fix.lon_lat for fix in waypoints]),
                timeout=context.remaining(),
            )
        except ExternalServiceException as exc:
            logger.warning("Directions request failed: %s", exc.message)
            return None
        except asyncio.TimeoutError:
            logger.warning("Directions request did not finish before the deadline")
            return None
        except Exception:
            logger.warning("Unexpected error requesting directions", exc_info=True)
            return None

        found = _first_geometry(data.get("routes"))
        if found is None:
            logger.warning("Directions returned no usable route (code=%s)", data.get("code"))
            return None

        route, coords = found
        result = MatchResult(
            geometry=coords,
            method=MatchMethod.ROUTED,
            confidence=settings.directions_confidence,
            processed_point_count=len(waypoints),
            original_point_count=len(context.fixes),
            distance=_as_float(route.get("distance")),
            duration=_as_float(route.get("duration")),
        )
        return merge_results([result], original_point_count=len(context.fixes))


class SimpleLineStrategy:
    """Join sampled fixes with straight segments; no external call."""

    name = "simple"
    state = MatchingState.SIMPLE_FALLBACK
    requires_service = False

    async def __call__(self, context: MatchContext) -> AggregateResult | None:
        points = sample_by_index(context.sampled, context.settings.simple_max_points)
        if len(points) < 2:
            return None

        logger.info("Using simple line fallback with %d points", len(points))
        coords = [fix.lon_lat for fix in points]
        # No confidence for unsnapped geometry.
        result = MatchResult(
            geometry=coords,
            method=MatchMethod.SIMPLE,
            confidence=None,
            processed_point_count=len(points),
            original_point_count=len(context.fixes),
            distance=GeometryService.path_length(coords),
        )
        return merge_results([result], original_point_count=len(context.fixes))
