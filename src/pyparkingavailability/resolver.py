"""Tier resolution: live, virtual or heuristic occupancy per lot."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from datetime import datetime
from typing import Any

from .estimator import estimate
from .merge import dedup_lots
from .models import EstimateSource, LotRecord, LotStatus, ParkingLot
from .normalize import parse_record
from .util import clamp

_LOGGER = logging.getLogger(__name__)

LIVE_CONFIDENCE = 0.95
VIRTUAL_CONFIDENCE = 0.65
NO_DATA_CONFIDENCE = 0.0
HEURISTIC_AVAILABLE_PCT = 30

_AVAILABLE_STATUSES = frozenset({"available", "open"})


def status_from_text(value: str) -> LotStatus:
    if value.strip().lower() in _AVAILABLE_STATUSES:
        return "available"
    return "busy"


def heuristic_status(free: int, total: int) -> LotStatus:
    if total > 0 and free * 100 / total >= HEURISTIC_AVAILABLE_PCT:
        return "available"
    return "busy"


def has_live_data(record: LotRecord) -> bool:
    return (
        record.api_available is not None
        or record.api_occupied is not None
        or record.api_status is not None
    )


def has_virtual_data(record: LotRecord) -> bool:
    return record.virtual_occupied is not None and record.virtual_occupied >= 0


def tier_of(record: LotRecord) -> EstimateSource:
    if has_live_data(record):
        return "live"
    if has_virtual_data(record):
        return "virtual"
    return "heuristic"


def _base_lot(record: LotRecord, source: EstimateSource, now: datetime) -> ParkingLot:
    last_updated = now
    if source != "heuristic" and record.updated_at is not None:
        last_updated = record.updated_at
    return ParkingLot(
        id=record.id,
        name=record.name,
        address=record.address,
        coordinates=record.coordinates,
        external_id=record.external_id,
        data_mode=record.data_mode,
        total=record.capacity,
        free=None,
        occupied=None,
        status=None,
        confidence=NO_DATA_CONFIDENCE,
        estimate_source=source,
        last_updated=last_updated,
    )


def _resolve_live(record: LotRecord, lot: ParkingLot) -> ParkingLot:
    capacity = record.capacity
    free: int | None = None
    occupied: int | None = None
    if record.api_available is not None:
        free = int(clamp(record.api_available, 0, capacity))
        occupied = capacity - free
    elif record.api_occupied is not None:
        occupied = int(clamp(record.api_occupied, 0, capacity))
        free = capacity - occupied
    if record.api_status is not None:
        status = status_from_text(record.api_status)
    else:
        status = "available" if free is not None and free > 0 else "busy"
    return replace(
        lot,
        free=free,
        occupied=occupied,
        status=status,
        confidence=LIVE_CONFIDENCE,
    )


def _resolve_virtual(record: LotRecord, lot: ParkingLot) -> ParkingLot:
    capacity = record.capacity
    occupied = int(clamp(record.virtual_occupied or 0, 0, capacity))
    free = capacity - occupied
    return replace(
        lot,
        free=free,
        occupied=occupied,
        status="available" if free > 0 else "busy",
        confidence=VIRTUAL_CONFIDENCE,
    )


def estimate_lot(lot: ParkingLot, now: datetime) -> ParkingLot:
    """Apply the heuristic estimate at ``now`` to a lot with a known capacity."""
    capacity = lot.total
    coordinates = lot.coordinates
    result = estimate(
        lot.id,
        lot.name,
        capacity,
        coordinates.lat if coordinates else None,
        coordinates.lng if coordinates else None,
        now,
    )
    occupied = int(clamp(result.occupied, 0, capacity))
    free = capacity - occupied
    return replace(
        lot,
        free=free,
        occupied=occupied,
        status=heuristic_status(free, capacity),
        confidence=result.confidence,
        last_updated=now,
        congestion_score=None,
    )


def resolve_record(record: LotRecord, now: datetime) -> ParkingLot:
    source = tier_of(record)
    lot = _base_lot(record, source, now)
    if record.capacity <= 0:
        return lot
    if source == "live":
        return _resolve_live(record, lot)
    if source == "virtual":
        return _resolve_virtual(record, lot)
    return estimate_lot(lot, now)


def resolve(raw: Mapping[str, Any], now: datetime) -> ParkingLot | None:
    """Resolve one raw row into a :class:`ParkingLot`.

    Returns None for rows without an id or a name.
    """
    record = parse_record(raw)
    if record is None:
        return None
    return resolve_record(record, now)


def resolve_all(rows: Iterable[Mapping[str, Any]], now: datetime) -> list[ParkingLot]:
    lots: list[ParkingLot] = []
    skipped = 0
    for row in rows:
        lot = resolve(row, now)
        if lot is None:
            skipped += 1
            continue
        lots.append(lot)
    if skipped:
        _LOGGER.debug("Skipped %s rows without id or name", skipped)
    return dedup_lots(lots)


def tick(lots: Iterable[ParkingLot], now: datetime) -> list[ParkingLot]:
    """Advance heuristic lots to ``now``; other lots are returned unchanged."""
    return [
        estimate_lot(lot, now) if lot.estimate_source == "heuristic" and lot.total > 0 else lot
        for lot in lots
    ]
