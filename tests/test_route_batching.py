import pytest

from route_matching.batching import split_into_batches
from tests.fix_factory import make_fixes


def test_split_150_fixes_into_two_batches() -> None:
    fixes = make_fixes(150)

    batches = split_into_batches(fixes, 100)

    assert [len(b) for b in batches] == [100, 50]
    assert [b.index for b in batches] == [0, 1]


def test_split_drops_single_fix_tail() -> None:
    fixes = make_fixes(101)

    batches = split_into_batches(fixes, 100)

    assert [len(b) for b in batches] == [100]
    assert batches[0].fixes[-1] is fixes[99]


@pytest.mark.parametrize(("count", "limit"), [(2, 100), (99, 10), (100, 100), (201, 100), (57, 7)])
def test_split_concatenation_reproduces_input(count: int, limit: int) -> None:
    fixes = make_fixes(count)

    batches = split_into_batches(fixes, limit)

    flattened = [fix for batch in batches for fix in batch.fixes]
    expected = fixes if count % limit != 1 else fixes[:-1]
    assert flattened == expected
    assert all(2 <= len(b) <= limit for b in batches)


def test_split_of_single_fix_yields_no_batches() -> None:
    assert split_into_batches(make_fixes(1), 100) == []


def test_batch_coordinates_are_lon_lat() -> None:
    fixes = make_fixes(2)

    batch = split_into_batches(fixes, 100)[0]

    assert batch.coordinates == [(f.longitude, f.latitude) for f in fixes]


def test_split_rejects_limit_below_two() -> None:
    with pytest.raises(ValueError):
        split_into_batches(make_fixes(4), 1)
