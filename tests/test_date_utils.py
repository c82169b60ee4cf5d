from datetime import UTC, datetime, timedelta, timezone

from date_utils import ensure_utc, get_current_utc_time, parse_timestamp


def test_parse_timestamp_handles_empty_and_invalid() -> None:
    assert parse_timestamp("") is None
    assert parse_timestamp(None) is None
    assert parse_timestamp("not-a-date") is None


def test_parse_timestamp_normalizes_to_utc() -> None:
    parsed = parse_timestamp("2024-01-01T00:00:00-05:00")
    assert parsed is not None
    assert parsed.tzinfo == UTC
    assert parsed.hour == 5


def test_parse_timestamp_accepts_zulu_suffix() -> None:
    parsed = parse_timestamp("2024-05-01T12:30:00Z")
    assert parsed == datetime(2024, 5, 1, 12, 30, tzinfo=UTC)


def test_parse_timestamp_accepts_epoch_seconds() -> None:
    assert parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=UTC)
    assert parse_timestamp(1.5) == datetime(1970, 1, 1, 0, 0, 1, 500000, tzinfo=UTC)


def test_parse_timestamp_rejects_booleans() -> None:
    assert parse_timestamp(True) is None


def test_parse_timestamp_converts_aware_datetime() -> None:
    value = datetime(2024, 1, 1, 8, 0, tzinfo=timezone(timedelta(hours=2)))
    parsed = parse_timestamp(value)
    assert parsed is not None
    assert parsed.tzinfo == UTC
    assert parsed.hour == 6


def test_ensure_utc_handles_naive_datetime() -> None:
    value = datetime(2024, 1, 1, 12, 0, 0)
    normalized = ensure_utc(value)
    assert normalized is not None
    assert normalized.tzinfo == UTC
    assert normalized.hour == 12


def test_ensure_utc_passes_none_through() -> None:
    assert ensure_utc(None) is None


def test_get_current_utc_time_is_aware() -> None:
    assert get_current_utc_time().tzinfo == UTC
