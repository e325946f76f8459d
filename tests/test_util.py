from datetime import UTC, datetime, timedelta, timezone

import pytest

from pyparkingavailability.exceptions import ValidationError
from pyparkingavailability.util import (
    clamp,
    format_utc_timestamp,
    normalize_lot_name,
    parse_timestamp,
    round_half_up,
    safe_count,
    safe_number,
)


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(-2.5) == -2
    assert round_half_up(2.49) == 2


def test_clamp() -> None:
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert clamp(2, 0, 3) == 2


@pytest.mark.parametrize(
    ("value", "expected"),
    [(3, 3.0), ("4.5", 4.5), (" 7 ", 7.0), ("x", None), (None, None), (True, None), (float("nan"), None), ([], None)],
)
def test_safe_number(value: object, expected: float | None) -> None:
    assert safe_number(value) == expected


def test_safe_count() -> None:
    assert safe_count(4.9) == 4
    assert safe_count(-3) == 0
    assert safe_count("oops") is None


def test_normalize_lot_name() -> None:
    assert normalize_lot_name("Slater  St (City Parking)") == "slater st"
    assert normalize_lot_name("Lyon City Parking Garage") == "lyon garage"


def test_format_utc_timestamp_converts_offset() -> None:
    dt = datetime(2024, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
    assert format_utc_timestamp(dt) == "2024-01-01T10:00:00Z"


def test_format_utc_timestamp_requires_timezone() -> None:
    with pytest.raises(ValidationError):
        format_utc_timestamp(datetime(2024, 1, 1, 12, 0))


def test_parse_timestamp() -> None:
    assert parse_timestamp("2024-01-01T12:00:00+02:00") == datetime(2024, 1, 1, 10, 0, tzinfo=UTC)
    assert parse_timestamp("2024-01-01T12:00:00Z") == datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
    assert parse_timestamp("2024-01-01 12:00:00") == datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


def test_parse_timestamp_invalid() -> None:
    with pytest.raises(ValidationError):
        parse_timestamp("not a date")
    with pytest.raises(ValidationError):
        parse_timestamp("")


def test_safe_number_out_of_float_range() -> None:
    assert safe_number(10**400) is None
    assert safe_number("1e400") is None
    assert safe_count(-(10**400)) is None
