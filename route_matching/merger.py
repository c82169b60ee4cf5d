"""Combine per-batch match results into one route."""

from __future__ import annotations

from collections.abc import Sequence

from route_matching.models import AggregateResult, MatchResult


def _sum_if_complete(values: Sequence[float | None]) -> float | None:
    if not values or any(v is None for v in values):
        return None
    return float(sum(values))  # type: ignore[arg-type]


def merge_results(
    results: Sequence[MatchResult],
    *,
    original_point_count: int,
    batch_count: int | None = None,
) -> AggregateResult | None:
    """
    Concatenate geometries in batch order and average their confidence.

    Seams between batches are not deduplicated. Results without a confidence
    are left out of the mean entirely. Returns None when nothing succeeded.
    """
    if not results:
        return None

    geometry = [vertex for result in results for vertex in result.geometry]
    confidences = [r.confidence for r in results if r.confidence is not None]
    confidence = sum(confidences) / len(confidences) if confidences else None

    return AggregateResult(
        geometry=geometry,
        method=results[0].method,
        confidence=confidence,
        processed_point_count=sum(r.processed_point_count for r in results),
        original_point_count=original_point_count,
        distance=_sum_if_complete([r.distance for r in results]),
        duration=_sum_if_complete([r.duration for r in results]),
        batch_count=batch_count if batch_count is not None else len(results),
        matched_batch_count=len(results),
    )
