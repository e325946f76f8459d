"""Time and weather based congestion adjustment for heuristic lots."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime

from .models import ParkingLot, Weather
from .resolver import heuristic_status
from .util import clamp, round_half_up

BASELINE_SCORE = 40
MAX_DROP_RATIO = 0.35
DEFAULT_FREE_RATIO = 0.35
COLD_THRESHOLD_C = -10


def time_congestion_score(now: datetime) -> int:
    hour = now.hour
    weekday = now.weekday()
    score = BASELINE_SCORE
    if 7 <= hour <= 9:
        score += 25
    if 15 <= hour <= 18:
        score += 30
    # Monday to Thursday; Friday is neutral.
    if weekday <= 3:
        score += 10
    if weekday >= 5:
        score -= 10
    if hour >= 22 or hour <= 5:
        score -= 15
    return int(clamp(score, 0, 100))


def weather_delta(weather: Weather) -> int:
    delta = 0
    if weather.rain:
        delta += 10
    if weather.snow:
        delta += 20
    if weather.temp < COLD_THRESHOLD_C:
        delta += 15
    return delta


def congestion_score(now: datetime, weather: Weather | None = None) -> int:
    score = time_congestion_score(now)
    if weather is not None:
        score += weather_delta(weather)
    return int(clamp(score, 0, 100))


def adjust_lot(lot: ParkingLot, congestion: int) -> ParkingLot:
    if lot.estimate_source != "heuristic" or lot.total <= 0:
        return lot
    total = lot.total
    congestion = int(clamp(congestion, 0, 100))
    max_drop = round_half_up(total * MAX_DROP_RATIO)
    drop = round_half_up(congestion / 100 * max_drop)
    current = lot.free if lot.free is not None else round_half_up(total * DEFAULT_FREE_RATIO)
    current = int(clamp(current, 0, total))
    free = int(clamp(current - drop, 0, total))
    return replace(
        lot,
        free=free,
        occupied=total - free,
        status=heuristic_status(free, total),
        congestion_score=congestion,
    )


def adjust(lots: Iterable[ParkingLot], congestion: int) -> list[ParkingLot]:
    """Lower free counts of heuristic lots by up to 35% of capacity.

    Live and virtual lots pass through untouched.
    """
    return [adjust_lot(lot, congestion) for lot in lots]
