"""Input checks and temporal ordering for fix sequences."""

from __future__ import annotations

from collections.abc import Sequence
from operator import attrgetter

from core.constants import MIN_ROUTE_POINTS
from core.exceptions import ValidationException
from route_matching.models import Fix


def require_minimum_fixes(fixes: Sequence[Fix]) -> None:
    if len(fixes) < MIN_ROUTE_POINTS:
        msg = f"At least {MIN_ROUTE_POINTS} coordinates are required"
        raise ValidationException(msg, {"received": len(fixes)})


def sort_by_timestamp(fixes: Sequence[Fix]) -> list[Fix]:
    """Return the fixes ordered by timestamp; equal timestamps keep input order."""
    return sorted(fixes, key=attrgetter("timestamp"))
