"""Heuristic occupancy model for lots without live or virtual data.

The estimate combines a lot kind (downtown, hospital, transit, generic),
a time-of-day peak factor and a small noise term. The noise is drawn from
a seeded generator keyed on the lot id and a 15 second time bucket, so
repeated calls inside one bucket return identical values:

* ``fnv1a_32`` hashes ``"<lot_id>|<bucket>"`` over UTF-16 code units.
* ``mulberry32`` turns the hash into a float in ``[0, 1)``.

Both are 32-bit integer algorithms; all intermediate values are masked to
32 bits.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from .util import clamp, round_half_up

LotKind = Literal["downtown", "hospital", "transit", "generic"]

BUCKET_SECONDS = 15
NOISE_SPAN = 0.12
NO_CAPACITY_CONFIDENCE = 0.2

_MASK_32 = 0xFFFFFFFF
_FNV_OFFSET_BASIS = 0x811C9DC5
_FNV_PRIME = 0x01000193
_MULBERRY_INCREMENT = 0x6D2B79F5

HOSPITAL_KEYWORDS = ("hospital", "civic", "general", "queensway")
TRANSIT_KEYWORDS = ("station", "o-train", "park and ride", "park & ride")
DOWNTOWN_KEYWORDS = ("slater", "queen", "bank", "rideau", "byward")

# (south, north, west, east)
DOWNTOWN_BOUNDS = (45.415, 45.43, -75.71, -75.68)


@dataclass(frozen=True, slots=True)
class KindProfile:
    base: float
    peak_boost: float
    min_ratio: float
    max_ratio: float


KIND_PROFILES: dict[LotKind, KindProfile] = {
    "downtown": KindProfile(base=0.55, peak_boost=0.3, min_ratio=0.25, max_ratio=0.95),
    "hospital": KindProfile(base=0.5, peak_boost=0.25, min_ratio=0.2, max_ratio=0.9),
    "transit": KindProfile(base=0.35, peak_boost=0.35, min_ratio=0.1, max_ratio=0.95),
    "generic": KindProfile(base=0.4, peak_boost=0.2, min_ratio=0.1, max_ratio=0.85),
}


@dataclass(frozen=True, slots=True)
class Estimate:
    occupied: int
    confidence: float


def fnv1a_32(text: str) -> int:
    data = text.encode("utf-16-le")
    value = _FNV_OFFSET_BASIS
    for index in range(0, len(data), 2):
        value ^= data[index] | (data[index + 1] << 8)
        value = (value * _FNV_PRIME) & _MASK_32
    return value


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK_32


def mulberry32(seed: int):
    """Return a generator function yielding floats in ``[0, 1)``."""
    state = seed & _MASK_32

    def next_float() -> float:
        nonlocal state
        state = (state + _MULBERRY_INCREMENT) & _MASK_32
        x = _imul(state ^ (state >> 15), 1 | state)
        x ^= (x + _imul(x ^ (x >> 7), 61 | x)) & _MASK_32
        return ((x ^ (x >> 14)) & _MASK_32) / 4294967296

    return next_float


def time_bucket(now: datetime, seconds: int = BUCKET_SECONDS) -> int:
    return math.floor(now.timestamp() * 1000) // (seconds * 1000)


def detect_lot_kind(name: str, lat: float | None, lng: float | None) -> LotKind:
    lowered = name.lower()
    if any(keyword in lowered for keyword in HOSPITAL_KEYWORDS):
        return "hospital"
    if any(keyword in lowered for keyword in TRANSIT_KEYWORDS):
        return "transit"
    if lat is not None and lng is not None:
        south, north, west, east = DOWNTOWN_BOUNDS
        if south <= lat <= north and west <= lng <= east:
            return "downtown"
    if any(keyword in lowered for keyword in DOWNTOWN_KEYWORDS):
        return "downtown"
    return "generic"


def peak_factor(now: datetime) -> float:
    hour = now.hour
    if now.weekday() < 5:
        if 7 <= hour <= 10:
            return 1.0
        if 15 <= hour <= 18:
            return 0.9
        if 11 <= hour <= 14:
            return 0.7
        if 19 <= hour <= 22:
            return 0.6
        return 0.45
    if 11 <= hour <= 17:
        return 0.85
    if 18 <= hour <= 22:
        return 0.65
    return 0.4


def estimate(
    lot_id: str,
    name: str,
    capacity: int,
    lat: float | None,
    lng: float | None,
    now: datetime,
) -> Estimate:
    """Estimate occupied spaces and a confidence for one lot at ``now``.

    ``now`` should be in the lot's local time; its hour and weekday drive
    the peak factor.
    """
    if capacity <= 0:
        return Estimate(occupied=0, confidence=NO_CAPACITY_CONFIDENCE)

    profile = KIND_PROFILES[detect_lot_kind(name, lat, lng)]
    factor = peak_factor(now)

    rand = mulberry32(fnv1a_32(f"{lot_id}|{time_bucket(now)}"))
    noise = (rand() - 0.5) * NOISE_SPAN

    ratio = clamp(
        profile.base + profile.peak_boost * (factor - 0.5) + noise,
        profile.min_ratio,
        profile.max_ratio,
    )
    occupied = int(clamp(round_half_up(ratio * capacity), 0, capacity))

    capacity_factor = clamp(capacity / 200, 0.2, 1.0)
    peak_confidence = clamp(factor, 0.4, 1.0)
    confidence = clamp(0.25 + 0.35 * peak_confidence + 0.2 * capacity_factor, 0.25, 0.75)
    return Estimate(occupied=occupied, confidence=confidence)
