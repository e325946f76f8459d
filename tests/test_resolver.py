from datetime import UTC, datetime, timedelta

import pytest

from pyparkingavailability.resolver import resolve, resolve_all, tick

NOW = datetime(2024, 1, 2, 8, 0, tzinfo=UTC)


def _resolve(row: dict):
    lot = resolve(row, NOW)
    assert lot is not None
    return lot


def test_live_from_available_count() -> None:
    lot = _resolve(
        {
            "map_id": 1,
            "map_name": "City Hall",
            "map_capacity": 100,
            "map_available": 30,
            "map_status": "open",
            "map_updated_at": "2024-01-02T12:55:00Z",
        }
    )
    assert lot.id == "1"
    assert lot.estimate_source == "live"
    assert (lot.total, lot.free, lot.occupied) == (100, 30, 70)
    assert lot.status == "available"
    assert lot.confidence == 0.95
    assert lot.last_updated == datetime(2024, 1, 2, 12, 55, tzinfo=UTC)
    assert lot.availability.level == "moderate"


def test_live_from_occupied_count() -> None:
    lot = _resolve({"id": "g", "name": "Garage", "capacity": 100, "api_occupied": 120})
    assert lot.estimate_source == "live"
    assert (lot.free, lot.occupied) == (0, 100)
    assert lot.status == "busy"


def test_live_status_only_has_unknown_counts() -> None:
    lot = _resolve({"id": "s", "name": "Status Lot", "capacity": 50, "status": "FULL"})
    assert lot.estimate_source == "live"
    assert lot.free is None
    assert lot.occupied is None
    assert lot.status == "busy"
    assert lot.availability.level == "unknown"
    assert lot.availability.pct is None


def test_live_status_derived_from_free_without_status_text() -> None:
    assert _resolve({"id": "a", "name": "A", "capacity": 10, "available": 1}).status == "available"
    assert _resolve({"id": "b", "name": "B", "capacity": 10, "available": 0}).status == "busy"


def test_virtual_tier() -> None:
    lot = _resolve(
        {
            "id": "v",
            "name": "Virtual",
            "capacity": 80,
            "virtual_occupied": 20,
            "updated_at": "2024-01-01T00:00:00Z",
        }
    )
    assert lot.estimate_source == "virtual"
    assert (lot.free, lot.occupied) == (60, 20)
    assert lot.status == "available"
    assert lot.confidence == 0.65
    assert lot.last_updated == datetime(2024, 1, 1, tzinfo=UTC)


def test_virtual_tier_clamps() -> None:
    lot = _resolve({"id": "v", "name": "Virtual", "capacity": 80, "virtual_occupied": 500})
    assert (lot.free, lot.occupied, lot.status) == (0, 80, "busy")


def test_live_wins_over_virtual() -> None:
    lot = _resolve(
        {"id": "x", "name": "Both", "capacity": 40, "available": 5, "virtual_occupied": 1}
    )
    assert lot.estimate_source == "live"
    assert lot.free == 5


def test_heuristic_tier() -> None:
    lot = _resolve({"id": "h", "name": "Generic lot", "capacity": 100, "updated_at": "2020-01-01T00:00:00Z"})
    assert lot.estimate_source == "heuristic"
    assert lot.free is not None and lot.occupied is not None
    assert lot.free + lot.occupied == 100
    assert 0.25 <= lot.confidence <= 0.75
    assert lot.last_updated == NOW
    expected = "available" if lot.free >= 30 else "busy"
    assert lot.status == expected


@pytest.mark.parametrize(
    "row",
    [
        {"id": "z", "name": "Zero", "capacity": 0, "available": 5},
        {"id": "z", "name": "Zero", "capacity": 0, "virtual_occupied": 5},
        {"id": "z", "name": "Zero"},
    ],
)
def test_no_capacity_is_no_data(row: dict) -> None:
    lot = _resolve(row)
    assert lot.total == 0
    assert lot.free is None
    assert lot.occupied is None
    assert lot.status is None
    assert lot.confidence == 0.0
    assert lot.has_data is False
    assert lot.availability.level == "unknown"


def test_resolve_skips_rows_without_identity() -> None:
    assert resolve({"capacity": 10}, NOW) is None
    assert resolve_all([{"capacity": 10}, {"id": "a", "name": "A"}], NOW)[0].id == "a"


def test_resolve_all_dedups() -> None:
    lots = resolve_all(
        [
            {"id": "1", "name": "Lot", "ottawa_lot_id": "7", "capacity": 10, "available": 2},
            {"id": "2", "name": "Lot copy", "ottawa_lot_id": "7", "capacity": 10},
            {"id": "3", "name": "Slater (City Parking)", "lat": 45.42, "lng": -75.7, "capacity": 5},
            {"id": "4", "name": "Slater", "lat": 45.42, "lng": -75.7, "capacity": 5},
        ],
        NOW,
    )
    assert [lot.id for lot in lots] == ["1", "3"]


def test_count_invariant_holds_for_all_tiers() -> None:
    rows = [
        {"id": "1", "name": "A", "capacity": 10, "available": 50, "occupied": 50},
        {"id": "2", "name": "B", "capacity": 10, "occupied": -4},
        {"id": "3", "name": "C", "capacity": 10, "virtual_occupied": 11},
        {"id": "4", "name": "D Hospital", "capacity": 3},
        {"id": "5", "name": "E Station", "capacity": 997, "lat": 45.42, "lng": -75.69},
    ]
    for lot in resolve_all(rows, NOW):
        assert lot.total > 0
        assert lot.free is not None and lot.occupied is not None
        assert 0 <= lot.free <= lot.total
        assert 0 <= lot.occupied <= lot.total
        assert lot.free + lot.occupied <= lot.total


def test_tick_only_moves_heuristic_lots() -> None:
    live = _resolve({"id": "l", "name": "Live", "capacity": 10, "available": 4})
    empty = _resolve({"id": "e", "name": "Empty"})
    heuristic = _resolve({"id": "h", "name": "Heuristic", "capacity": 100})
    later = NOW + timedelta(minutes=5)

    ticked = tick([live, empty, heuristic], later)

    assert ticked[0] is live
    assert ticked[1] is empty
    assert ticked[2].last_updated == later
    assert ticked[2].estimate_source == "heuristic"
    assert ticked[2].free + ticked[2].occupied == 100


def test_resolve_all_survives_out_of_range_counts() -> None:
    lots = resolve_all(
        [
            {"id": "a", "name": "A", "capacity": 50, "available": 10**400},
            {"id": "b", "name": "B", "capacity": 10**400, "available": 5},
        ],
        NOW,
    )
    assert [lot.id for lot in lots] == ["a", "b"]
    assert lots[0].estimate_source == "heuristic"
    assert lots[0].free is not None and lots[0].free + lots[0].occupied == 50
    assert lots[1].total == 0
    assert lots[1].has_data is False
