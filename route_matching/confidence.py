"""Confidence scoring for matched geometry."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


def matched_point_ratio(
    tracepoints: Sequence[Any] | None,
    submitted_count: int,
) -> float:
    """
    Share of submitted points the matching service could place on the road.

    Mapbox returns one tracepoint per submitted coordinate and null for the
    ones it discarded as outliers.
    """
    if submitted_count <= 0:
        return 0.0
    placed = sum(1 for tp in tracepoints or () if tp is not None)
    return max(0.0, min(1.0, placed / submitted_count))
