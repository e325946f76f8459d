"""Merging freshly fetched lots with the state held in memory."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from .models import ParkingLot
from .util import normalize_lot_name


def dedup_key(lot: ParkingLot) -> str:
    if lot.external_id:
        return f"ext:{lot.external_id}"
    coordinates = lot.coordinates
    if coordinates is not None and (coordinates.lat != 0 or coordinates.lng != 0):
        return f"geo:{coordinates.lat:.6f},{coordinates.lng:.6f}|{normalize_lot_name(lot.name)}"
    return f"id:{lot.id}"


def dedup_lots(lots: Iterable[ParkingLot]) -> list[ParkingLot]:
    """Drop near-duplicate rows; the first occurrence of a key wins."""
    seen: set[str] = set()
    result: list[ParkingLot] = []
    for lot in lots:
        key = dedup_key(lot)
        if key in seen:
            continue
        seen.add(key)
        result.append(lot)
    return result


def merge(previous: Iterable[ParkingLot], fresh: Iterable[ParkingLot]) -> list[ParkingLot]:
    """Combine a fresh fetch with the previous collection.

    Live and virtual lots always take the fresh values. Heuristic lots that
    already exist keep their previous counts: those only move on the
    heuristic tick, not when the list is refetched. A lot whose previous
    version came from the live or virtual tier keeps that tier tag too,
    so it is never relabelled as a heuristic guess.

    Such a lot is neither ticked nor adjusted, and its ``last_updated``
    stays at the last live or virtual reading. Compare ``last_updated``
    with the current time to tell a stale reading from a fresh one.
    """
    by_id = {lot.id: lot for lot in previous}
    merged: list[ParkingLot] = []
    for lot in fresh:
        prior = by_id.get(lot.id)
        if prior is None or lot.estimate_source != "heuristic" or prior.total != lot.total:
            merged.append(lot)
            continue
        merged.append(
            replace(
                lot,
                free=prior.free,
                occupied=prior.occupied,
                status=prior.status,
                confidence=prior.confidence,
                estimate_source=prior.estimate_source,
                last_updated=prior.last_updated,
                congestion_score=prior.congestion_score,
            )
        )
    return merged
