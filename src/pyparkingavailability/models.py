"""Public data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from .availability import Availability, classify, confidence_pct

EstimateSource = Literal["live", "virtual", "heuristic"]
LotStatus = Literal["available", "busy"]
ProviderKind = Literal["lots", "weather", "geocode"]


@dataclass(frozen=True, slots=True)
class ProviderInfo:
    id: str
    name: str
    kind: ProviderKind


@dataclass(frozen=True, slots=True)
class Coordinates:
    lat: float
    lng: float


@dataclass(frozen=True, slots=True)
class LotCounts:
    total: int
    free: int | None
    occupied: int | None


@dataclass(frozen=True, slots=True)
class LotRecord:
    """A raw data-source row with field aliases resolved."""

    id: str
    name: str
    address: str
    external_id: str | None
    capacity: int
    api_available: int | None
    api_occupied: int | None
    virtual_occupied: int | None
    api_status: str | None
    coordinates: Coordinates | None
    data_mode: str | None
    updated_at: datetime | None


@dataclass(frozen=True, slots=True)
class ParkingLot:
    id: str
    name: str
    total: int
    free: int | None
    occupied: int | None
    status: LotStatus | None
    confidence: float
    estimate_source: EstimateSource
    last_updated: datetime
    address: str = ""
    coordinates: Coordinates | None = None
    external_id: str | None = None
    data_mode: str | None = None
    congestion_score: int | None = None

    @property
    def availability(self) -> Availability:
        return classify(self.free, self.total)

    @property
    def has_data(self) -> bool:
        return self.total > 0 and self.free is not None

    @property
    def confidence_pct(self) -> int:
        return confidence_pct(self.confidence)


@dataclass(frozen=True, slots=True)
class Weather:
    temp: float
    rain: bool
    snow: bool


@dataclass(frozen=True, slots=True)
class GeocodeResult:
    found: bool
    lat: float | None = None
    lng: float | None = None
    display_name: str | None = None


@dataclass(frozen=True, slots=True)
class LotMatch:
    lot: ParkingLot
    distance_km: float | None = None
