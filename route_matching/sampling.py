"""
Adaptive downsampling of ordered fix sequences.

Two policies are provided. Time-interval sampling keeps fixes roughly evenly
spaced in time, so densely recorded stretches do not dominate the request.
Index-stride sampling picks evenly spaced indices and ignores timestamps.
Both always keep the first and last fix and return the input unchanged when
it already fits.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from core.constants import MIN_ROUTE_POINTS
from route_matching.models import Fix

logger = logging.getLogger(__name__)


def _check_target(max_points: int) -> None:
    if max_points < MIN_ROUTE_POINTS:
        msg = f"max_points must be at least {MIN_ROUTE_POINTS}, got {max_points}"
        raise ValueError(msg)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def stride_indices(length: int, max_points: int) -> list[int]:
    """Source indices chosen by index-stride sampling."""
    _check_target(max_points)
    if length <= max_points:
        return list(range(length))

    step = (length - 1) / (max_points - 1)
    indices = [0]
    indices.extend(_round_half_up(i * step) for i in range(1, max_points - 1))
    indices.append(length - 1)
    return indices


def sample_by_index(fixes: Sequence[Fix], max_points: int) -> list[Fix]:
    """Reduce to exactly min(len, max_points) fixes at evenly spaced indices."""
    return [fixes[i] for i in stride_indices(len(fixes), max_points)]


def sample_by_time(fixes: Sequence[Fix], max_points: int) -> list[Fix]:
    """
    Reduce a timestamp-ordered sequence to at most max_points fixes.

    A fix is kept once its timestamp is at least span / (max_points - 1)
    seconds past the last kept fix.

    Args:
        fixes: Fixes sorted by timestamp
        max_points: Upper bound on the output length

    Returns:
        Sampled fixes, first and last always included
    """
    _check_target(max_points)
    if len(fixes) <= max_points:
        return list(fixes)

    first, last = fixes[0], fixes[-1]
    span = (last.timestamp - first.timestamp).total_seconds()
    if span <= 0:
        logger.debug("Zero time span across %d fixes; using index stride", len(fixes))
        return sample_by_index(fixes, max_points)

    time_step = span / (max_points - 1)
    sampled = [first]
    last_kept = first.timestamp
    for fix in fixes[1:-1]:
        if (fix.timestamp - last_kept).total_seconds() >= time_step:
            sampled.append(fix)
            last_kept = fix.timestamp
    sampled.append(last)

    # Duplicate timestamps at the tail can push the walk one past the bound.
    if len(sampled) > max_points:
        sampled = sample_by_index(sampled, max_points)

    logger.debug("Time sampling reduced %d fixes to %d", len(fixes), len(sampled))
    return sampled
