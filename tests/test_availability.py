import pytest

from pyparkingavailability.availability import Availability, classify, confidence_pct


@pytest.mark.parametrize(
    ("free", "total", "level"),
    [
        (60, 100, "available"),
        (59, 100, "moderate"),
        (30, 100, "moderate"),
        (29, 100, "busy"),
        (0, 100, "busy"),
        (100, 100, "available"),
    ],
)
def test_classify_bands(free: int, total: int, level: str) -> None:
    result = classify(free, total)
    assert result.level == level
    assert result.pct == free


@pytest.mark.parametrize(("free", "total"), [(None, 100), (5, 0), (5, -1), (None, 0), (3, None)])
def test_classify_no_data(free: int | None, total: int | None) -> None:
    assert classify(free, total) == Availability(level="unknown", pct=None)
    assert classify(free, total).has_data is False


def test_classify_rounds_half_up() -> None:
    assert classify(1, 8).pct == 13
    assert classify(1, 3).pct == 33


def test_classify_clamps_percentage() -> None:
    assert classify(150, 100) == Availability(level="available", pct=100)
    assert classify(-5, 100) == Availability(level="busy", pct=0)


def test_is_full() -> None:
    assert classify(0, 40).is_full is True
    assert classify(1, 40).is_full is False
    assert classify(None, 40).is_full is False


@pytest.mark.parametrize(
    ("confidence", "pct"),
    [(0.95, 95), (0.654, 65), (85, 85), (150, 100), (None, 0), ("bad", 0), (-0.2, 0)],
)
def test_confidence_pct(confidence: object, pct: int) -> None:
    assert confidence_pct(confidence) == pct  # type: ignore[arg-type]
