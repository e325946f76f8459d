"""Raw row adapter and count normalization.

Data sources disagree on column names (``map_available`` in the app view,
``available`` in the legacy table, ``free`` in mock rows). All aliasing
happens here, once; everything downstream works on :class:`LotRecord`
and :class:`LotCounts`.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from .exceptions import ValidationError
from .models import Coordinates, LotCounts, LotRecord
from .util import clamp, parse_timestamp, safe_count, safe_number

ID_FIELDS = ("map_id", "id", "lot_id")
NAME_FIELDS = ("map_name", "name")
ADDRESS_FIELDS = ("map_address", "address")
EXTERNAL_ID_FIELDS = ("ottawa_lot_id", "external_id", "facility_id")
CAPACITY_FIELDS = ("map_capacity", "capacity", "total")
AVAILABLE_FIELDS = ("map_available", "api_available", "available", "free")
OCCUPIED_FIELDS = ("api_occupied", "occupied")
VIRTUAL_OCCUPIED_FIELDS = ("virtual_occupied", "map_virtual_occupied")
STATUS_FIELDS = ("map_status", "api_status", "status")
LAT_FIELDS = ("map_lat", "lat", "latitude")
LNG_FIELDS = ("map_lng", "lng", "lon", "longitude")
DATA_MODE_FIELDS = ("map_data_mode", "data_mode")
UPDATED_AT_FIELDS = ("map_updated_at", "updated_at", "created_at")


def _first(raw: Mapping[str, Any], fields: tuple[str, ...]) -> Any:
    for field in fields:
        value = raw.get(field)
        if value is not None:
            return value
    return None


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _coordinates(raw: Mapping[str, Any]) -> Coordinates | None:
    lat = safe_number(_first(raw, LAT_FIELDS))
    lng = safe_number(_first(raw, LNG_FIELDS))
    nested = raw.get("coordinates")
    if (lat is None or lng is None) and isinstance(nested, Mapping):
        lat = safe_number(nested.get("lat"))
        lng = safe_number(nested.get("lng"))
    if lat is None or lng is None:
        return None
    return Coordinates(lat=lat, lng=lng)


def _timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=UTC)
    if not isinstance(value, str):
        return None
    try:
        return parse_timestamp(value)
    except ValidationError:
        return None


def capacity_of(raw: Mapping[str, Any]) -> int:
    capacity = safe_count(_first(raw, CAPACITY_FIELDS))
    return capacity if capacity is not None else 0


def normalize_counts(raw: Mapping[str, Any]) -> LotCounts:
    """Return canonical ``total``/``free``/``occupied`` for a raw row.

    Unknown counts stay ``None``; a zero would read as a full lot.
    """
    if not isinstance(raw, Mapping):
        return LotCounts(total=0, free=None, occupied=None)
    total = capacity_of(raw)
    if total <= 0:
        return LotCounts(total=0, free=None, occupied=None)
    available = safe_count(_first(raw, AVAILABLE_FIELDS))
    if available is not None:
        free = int(clamp(available, 0, total))
        return LotCounts(total=total, free=free, occupied=total - free)
    occupied = safe_count(_first(raw, OCCUPIED_FIELDS))
    if occupied is not None:
        occupied = int(clamp(occupied, 0, total))
        return LotCounts(total=total, free=total - occupied, occupied=occupied)
    return LotCounts(total=total, free=None, occupied=None)


def parse_record(raw: Mapping[str, Any]) -> LotRecord | None:
    """Map a raw row onto :class:`LotRecord`; rows without id or name yield None."""
    if not isinstance(raw, Mapping):
        return None
    lot_id = _text(_first(raw, ID_FIELDS))
    name = _text(_first(raw, NAME_FIELDS))
    if lot_id is None or name is None:
        return None
    return LotRecord(
        id=lot_id,
        name=name,
        address=_text(_first(raw, ADDRESS_FIELDS)) or "",
        external_id=_text(_first(raw, EXTERNAL_ID_FIELDS)),
        capacity=capacity_of(raw),
        api_available=safe_count(_first(raw, AVAILABLE_FIELDS)),
        api_occupied=safe_count(_first(raw, OCCUPIED_FIELDS)),
        virtual_occupied=safe_count(_first(raw, VIRTUAL_OCCUPIED_FIELDS)),
        api_status=_text(_first(raw, STATUS_FIELDS)),
        coordinates=_coordinates(raw),
        data_mode=(_text(_first(raw, DATA_MODE_FIELDS)) or "").lower() or None,
        updated_at=_timestamp(_first(raw, UPDATED_AT_FIELDS)),
    )
