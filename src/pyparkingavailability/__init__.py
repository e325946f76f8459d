"""pyParkingAvailability package."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .availability import Availability, classify
from .client import Client
from .config import MonitorConfig
from .congestion import adjust, congestion_score
from .estimator import Estimate, estimate
from .exceptions import (
    ConfigError,
    NetworkError,
    ProviderError,
    PyParkingAvailabilityError,
    RequestTimeoutError,
    ValidationError,
)
from .merge import dedup_lots, merge
from .models import (
    Coordinates,
    GeocodeResult,
    LotCounts,
    LotMatch,
    LotRecord,
    ParkingLot,
    ProviderInfo,
    Weather,
)
from .monitor import ParkingMonitor
from .normalize import normalize_counts, parse_record
from .resolver import resolve, resolve_all, tick
from .search import filter_lots, search_lots

try:
    __version__ = version("pyparkingavailability")
except PackageNotFoundError:  # pragma: no cover - not installed
    __version__ = "0.0.0"

__all__ = [
    "Availability",
    "Client",
    "ConfigError",
    "Coordinates",
    "Estimate",
    "GeocodeResult",
    "LotCounts",
    "LotMatch",
    "LotRecord",
    "MonitorConfig",
    "NetworkError",
    "ParkingLot",
    "ParkingMonitor",
    "ProviderError",
    "ProviderInfo",
    "PyParkingAvailabilityError",
    "RequestTimeoutError",
    "ValidationError",
    "Weather",
    "__version__",
    "adjust",
    "classify",
    "congestion_score",
    "dedup_lots",
    "estimate",
    "filter_lots",
    "merge",
    "normalize_counts",
    "parse_record",
    "resolve",
    "resolve_all",
    "search_lots",
    "tick",
]
