import pytest

from route_matching.confidence import matched_point_ratio
from route_matching.merger import merge_results
from route_matching.models import MatchMethod, MatchResult


def _result(
    geometry: list[tuple[float, float]],
    confidence: float | None,
    *,
    processed: int = 2,
    distance: float | None = 10.0,
) -> MatchResult:
    return MatchResult(
        geometry=geometry,
        method=MatchMethod.MATCHED,
        confidence=confidence,
        processed_point_count=processed,
        original_point_count=processed,
        distance=distance,
        duration=5.0,
    )


def test_matched_point_ratio_counts_non_null_tracepoints() -> None:
    tracepoints = [{"waypoint_index": 0}, None, {"waypoint_index": 1}, None]

    assert matched_point_ratio(tracepoints, 4) == 0.5


def test_matched_point_ratio_handles_missing_tracepoints() -> None:
    assert matched_point_ratio(None, 3) == 0.0
    assert matched_point_ratio([], 0) == 0.0


def test_matched_point_ratio_is_clamped() -> None:
    assert matched_point_ratio([{}, {}, {}], 2) == 1.0


def test_merge_concatenates_in_order_without_dedup() -> None:
    first = _result([(0.0, 0.0), (1.0, 1.0)], 0.5)
    second = _result([(1.0, 1.0), (2.0, 2.0)], 1.0)

    merged = merge_results([first, second], original_point_count=10, batch_count=3)

    assert merged is not None
    assert merged.geometry == [(0.0, 0.0), (1.0, 1.0), (1.0, 1.0), (2.0, 2.0)]
    assert merged.confidence == pytest.approx(0.75)
    assert merged.processed_point_count == 4
    assert merged.original_point_count == 10
    assert merged.batch_count == 3
    assert merged.matched_batch_count == 2
    assert merged.distance == 20.0
    assert merged.duration == 10.0


def test_merge_excludes_missing_confidence_from_mean() -> None:
    merged = merge_results(
        [_result([(0.0, 0.0)], 0.8), _result([(1.0, 1.0)], None)],
        original_point_count=4,
    )

    assert merged is not None
    assert merged.confidence == pytest.approx(0.8)


def test_merge_without_any_confidence_reports_none() -> None:
    merged = merge_results([_result([(0.0, 0.0)], None)], original_point_count=2)

    assert merged is not None
    assert merged.confidence is None


def test_merge_drops_distance_when_a_batch_lacks_it() -> None:
    merged = merge_results(
        [_result([(0.0, 0.0)], 0.5), _result([(1.0, 1.0)], 0.5, distance=None)],
        original_point_count=4,
    )

    assert merged is not None
    assert merged.distance is None


def test_merge_of_nothing_is_none() -> None:
    assert merge_results([], original_point_count=5) is None


def test_to_response_uses_geojson_and_public_names() -> None:
    merged = merge_results([_result([(0.0, 0.0), (1.0, 1.0)], 1.0)], original_point_count=3)

    assert merged is not None
    body = merged.to_response()
    assert body["geometry"] == {"type": "LineString", "coordinates": [[0.0, 0.0], [1.0, 1.0]]}
    assert body["method"] == "matched"
    assert body["processedPoints"] == 2
    assert body["originalPoints"] == 3
