from __future__ import annotations

from datetime import UTC, datetime, timedelta

from route_matching.models import Fix

BASE_TIME = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


def make_fixes(
    count: int,
    *,
    step_seconds: float = 1.0,
    start_lon: float = -97.0,
    start_lat: float = 31.0,
) -> list[Fix]:
    """Fixes heading north-east, evenly spaced in time."""
    return [
        Fix(
            id=f"fix-{i}",
            latitude=start_lat + i * 0.0001,
            longitude=start_lon + i * 0.0001,
            timestamp=BASE_TIME + timedelta(seconds=i * step_seconds),
        )
        for i in range(count)
    ]


def fix_at(seconds: float, *, fix_id: str, lat: float = 31.0, lon: float = -97.0) -> Fix:
    return Fix(
        id=fix_id,
        latitude=lat,
        longitude=lon,
        timestamp=BASE_TIME + timedelta(seconds=seconds),
    )
