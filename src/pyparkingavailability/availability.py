"""Availability bands derived from free and total counts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .util import clamp, round_half_up, safe_number

AvailabilityLevel = Literal["available", "moderate", "busy", "unknown"]

AVAILABLE_THRESHOLD = 60
MODERATE_THRESHOLD = 30


@dataclass(frozen=True, slots=True)
class Availability:
    level: AvailabilityLevel
    pct: int | None

    @property
    def is_full(self) -> bool:
        return self.pct == 0

    @property
    def has_data(self) -> bool:
        return self.level != "unknown"


UNKNOWN = Availability(level="unknown", pct=None)


def level_for_pct(pct: int) -> AvailabilityLevel:
    if pct >= AVAILABLE_THRESHOLD:
        return "available"
    if pct >= MODERATE_THRESHOLD:
        return "moderate"
    return "busy"


def classify(free: int | None, total: int | None) -> Availability:
    """Classify a lot into an availability band.

    Missing counts or a non-positive total yield the ``unknown`` band with
    no percentage, so callers can render "no data" instead of 0% or 100%.
    """
    if total is None or total <= 0 or free is None:
        return UNKNOWN
    pct = int(clamp(round_half_up(100 * free / total), 0, 100))
    return Availability(level=level_for_pct(pct), pct=pct)


def confidence_pct(confidence: float | None) -> int:
    """Convert a 0-1 (or already 0-100) confidence into an integer percentage."""
    value = safe_number(confidence)
    if value is None:
        return 0
    pct = value if value > 1 else value * 100
    return int(clamp(round_half_up(pct), 0, 100))
