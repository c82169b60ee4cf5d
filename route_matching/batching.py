"""Split sampled fixes into request-sized batches."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from core.constants import MIN_ROUTE_POINTS
from route_matching.models import Fix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Batch:
    """Contiguous run of fixes submitted as one map matching request."""

    index: int
    fixes: tuple[Fix, ...]

    def __len__(self) -> int:
        return len(self.fixes)

    @property
    def coordinates(self) -> list[tuple[float, float]]:
        return [fix.lon_lat for fix in self.fixes]


def split_into_batches(
    fixes: Sequence[Fix],
    max_request_points: int,
) -> list[Batch]:
    """
    Partition fixes into consecutive windows of max_request_points.

    A trailing window with fewer than two fixes cannot describe a path and is
    dropped rather than merged into its neighbour.
    """
    if max_request_points < MIN_ROUTE_POINTS:
        msg = f"max_request_points must be at least {MIN_ROUTE_POINTS}"
        raise ValueError(msg)

    batches: list[Batch] = []
    for start in range(0, len(fixes), max_request_points):
        window = tuple(fixes[start : start + max_request_points])
        if len(window) < MIN_ROUTE_POINTS:
            logger.debug("Dropping trailing window of %d fix(es)", len(window))
            continue
        batches.append(Batch(index=len(batches), fixes=window))

    logger.debug("Split %d fixes into %d batch(es)", len(fixes), len(batches))
    return batches
