import math

import pytest

from geometry_service import GeometryService


@pytest.mark.parametrize(
    ("lat", "lon", "expected"),
    [
        (0, 0, True),
        (90, 180, True),
        (-90, -180, True),
        (90.0001, 0, False),
        (0, -180.5, False),
        ("31.5", "-97.1", True),
        (None, 0, False),
        ("abc", 0, False),
        (math.nan, 0, False),
    ],
)
def test_is_valid_lat_lon(lat, lon, expected) -> None:
    assert GeometryService.is_valid_lat_lon(lat, lon) is expected


def test_haversine_distance_one_degree_of_latitude() -> None:
    distance = GeometryService.haversine_distance(0, 0, 0, 1)
    assert distance == pytest.approx(111_195, rel=1e-3)


def test_path_length_sums_segments() -> None:
    coords = [(0.0, 0.0), (0.0, 1.0), (0.0, 2.0)]
    single = GeometryService.haversine_distance(0, 0, 0, 1)
    assert GeometryService.path_length(coords) == pytest.approx(2 * single)
    assert GeometryService.path_length(coords[:1]) == 0.0


def test_line_string_keeps_order_and_duplicates() -> None:
    coords = [(1, 2), (1, 2), (3, 4)]
    assert GeometryService.line_string(coords) == {
        "type": "LineString",
        "coordinates": [[1.0, 2.0], [1.0, 2.0], [3.0, 4.0]],
    }
