import pytest

from route_matching.normalizer import require_minimum_fixes, sort_by_timestamp
from route_matching.sampling import sample_by_index, sample_by_time, stride_indices
from core.exceptions import ValidationException
from tests.fix_factory import fix_at, make_fixes


def test_require_minimum_fixes_rejects_single_fix() -> None:
    with pytest.raises(ValidationException) as raised:
        require_minimum_fixes(make_fixes(1))

    assert "At least 2" in raised.value.message
    assert raised.value.details == {"received": 1}


def test_require_minimum_fixes_rejects_empty() -> None:
    with pytest.raises(ValidationException):
        require_minimum_fixes([])


def test_sort_by_timestamp_is_stable_for_duplicates() -> None:
    fixes = [
        fix_at(5, fix_id="late"),
        fix_at(1, fix_id="dup-a"),
        fix_at(0, fix_id="first"),
        fix_at(1, fix_id="dup-b"),
    ]

    ordered = sort_by_timestamp(fixes)

    assert [f.id for f in ordered] == ["first", "dup-a", "dup-b", "late"]
    # Input sequence is left untouched.
    assert fixes[0].id == "late"


@pytest.mark.parametrize("count", [2, 3, 50, 100])
def test_samplers_are_noops_within_limit(count: int) -> None:
    fixes = make_fixes(count)

    assert sample_by_time(fixes, 100) == fixes
    assert sample_by_index(fixes, 100) == fixes


def test_time_sampling_keeps_first_and_last() -> None:
    fixes = make_fixes(150)

    sampled = sample_by_time(fixes, 100)

    assert sampled[0] is fixes[0]
    assert sampled[-1] is fixes[-1]
    assert len(sampled) <= 100


def test_time_sampling_spacing_for_even_fixes() -> None:
    # 150 fixes one second apart: step is 149/99 s, so every second fix is kept.
    fixes = make_fixes(150)

    sampled = sample_by_time(fixes, 100)

    interior = [int(f.id.split("-")[1]) for f in sampled[1:-1]]
    assert interior == list(range(2, 149, 2))
    assert len(sampled) == 76


def test_time_sampling_favours_temporal_spread_over_density() -> None:
    # A dense burst of fixes followed by a sparse tail.
    burst = [fix_at(i * 0.01, fix_id=f"burst-{i}") for i in range(90)]
    tail = [fix_at(10 + i * 10, fix_id=f"tail-{i}") for i in range(10)]
    fixes = burst + tail + [fix_at(110, fix_id="end")]

    sampled = sample_by_time(fixes, 10)

    ids = [f.id for f in sampled]
    assert ids[0] == "burst-0"
    assert ids[-1] == "end"
    assert sum(1 for i in ids if i.startswith("burst")) == 1
    assert len(sampled) <= 10


def test_time_sampling_with_zero_span_falls_back_to_stride() -> None:
    fixes = [fix_at(0, fix_id=f"same-{i}") for i in range(20)]

    sampled = sample_by_time(fixes, 5)

    assert len(sampled) == 5
    assert sampled[0].id == "same-0"
    assert sampled[-1].id == "same-19"


def test_time_sampling_never_exceeds_target_with_duplicate_tail() -> None:
    fixes = [fix_at(0, fix_id="a"), fix_at(5, fix_id="b"), fix_at(10, fix_id="c")]
    fixes += [fix_at(10, fix_id="d"), fix_at(10, fix_id="e")]

    sampled = sample_by_time(fixes, 3)

    assert len(sampled) == 3
    assert sampled[0].id == "a"
    assert sampled[-1].id == "e"


@pytest.mark.parametrize("target", [2, 3, 7])
def test_time_sampling_small_targets_keep_endpoints(target: int) -> None:
    fixes = make_fixes(40, step_seconds=3)

    sampled = sample_by_time(fixes, target)

    assert sampled[0] is fixes[0]
    assert sampled[-1] is fixes[-1]
    assert len(sampled) <= target


@pytest.mark.parametrize(("length", "target"), [(150, 100), (100, 25), (51, 50), (1000, 2), (30, 3)])
def test_stride_indices_length_and_order(length: int, target: int) -> None:
    indices = stride_indices(length, target)

    assert len(indices) == min(length, target)
    assert indices[0] == 0
    assert indices[-1] == length - 1
    assert all(a < b for a, b in zip(indices, indices[1:]))


def test_stride_indices_rounds_half_up() -> None:
    # step = 4 / 2 = 2 -> [0, 2, 4]; step = 5 / 2 = 2.5 -> round(2.5) = 3
    assert stride_indices(5, 3) == [0, 2, 4]
    assert stride_indices(6, 3) == [0, 3, 5]


def test_sample_by_index_reduces_to_target() -> None:
    fixes = make_fixes(100)

    sampled = sample_by_index(fixes, 25)

    assert len(sampled) == 25
    assert sampled[0] is fixes[0]
    assert sampled[-1] is fixes[-1]


def test_samplers_reject_targets_below_two() -> None:
    with pytest.raises(ValueError):
        sample_by_index(make_fixes(5), 1)
    with pytest.raises(ValueError):
        sample_by_time(make_fixes(5), 1)
