"""Keyword, address and distance search over resolved lots."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable, Sequence
from typing import Protocol

from .const import KNOWN_ADDRESSES, NEIGHBOURHOOD_KEYWORDS, POSTAL_PREFIXES, SEARCH_STOPWORDS
from .exceptions import PyParkingAvailabilityError
from .models import GeocodeResult, LotMatch, ParkingLot
from .util import normalize_lot_name

_LOGGER = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0
GEOCODE_FALLBACK_MAX_RESULTS = 2

_POSTAL_RE = re.compile(r"^[a-zA-Z]\d[a-zA-Z]")
_WHITESPACE_RE = re.compile(r"\s+")


class Geocoder(Protocol):
    async def geocode(self, query: str) -> GeocodeResult: ...


def distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return round(EARTH_RADIUS_KM * c, 2)


def normalize_word(word: str) -> str:
    lowered = word.lower().strip()
    if len(lowered) > 3 and lowered.endswith("s"):
        return lowered[:-1]
    return lowered


def normalize_query(query: str) -> tuple[str, list[str]]:
    term = query.lower().strip()
    words = [normalize_word(word) for word in _WHITESPACE_RE.split(term)]
    return term, [word for word in words if word and word not in SEARCH_STOPWORDS]


def is_postal_code(value: str) -> bool:
    compact = _WHITESPACE_RE.sub("", value)
    return len(compact) >= 3 and _POSTAL_RE.match(compact) is not None


def lookup_address(term: str) -> tuple[float, float] | None:
    if not term:
        return None
    if term in KNOWN_ADDRESSES:
        return KNOWN_ADDRESSES[term]
    multi_word = " " in term
    for key, coords in KNOWN_ADDRESSES.items():
        if key in term or (multi_word and term in key):
            return coords
    return None


def lookup_postal_code(value: str) -> tuple[float, float] | None:
    prefix = _WHITESPACE_RE.sub("", value).lower()[:3]
    return POSTAL_PREFIXES.get(prefix)


def _searchable_text(lot: ParkingLot) -> str:
    return f"{lot.name} {lot.address}".lower()


def _by_free_desc(matches: Iterable[LotMatch]) -> list[LotMatch]:
    return sorted(
        matches,
        key=lambda match: match.lot.free if match.lot.free is not None else -1,
        reverse=True,
    )


def _by_distance(lots: Iterable[ParkingLot], lat: float, lng: float) -> list[LotMatch]:
    matches = [
        LotMatch(
            lot=lot,
            distance_km=distance_km(lat, lng, lot.coordinates.lat, lot.coordinates.lng),
        )
        for lot in lots
        if lot.coordinates is not None
    ]
    return sorted(matches, key=lambda match: match.distance_km or 0.0)


def filter_lots(
    lots: Sequence[ParkingLot],
    query: str = "",
    *,
    only_available: bool = False,
) -> list[ParkingLot]:
    """Filter lots for display.

    "City parking" variants of a lot that also exists with a city lot id
    are hidden. ``only_available`` keeps lots with known counts and at
    least one free space.
    """
    official_names = {normalize_lot_name(lot.name) for lot in lots if lot.external_id}
    term, words = normalize_query(query)
    result: list[ParkingLot] = []
    for lot in lots:
        is_variant = "city parking" in lot.name.lower()
        if not lot.external_id and is_variant and normalize_lot_name(lot.name) in official_names:
            continue
        if only_available and not (lot.has_data and (lot.free or 0) > 0):
            continue
        if term and words:
            text = _searchable_text(lot)
            if not all(word in text for word in words):
                continue
        result.append(lot)
    return result


async def search_lots(
    lots: Sequence[ParkingLot],
    query: str,
    geocoder: Geocoder | None = None,
) -> list[LotMatch]:
    """Search lots by keyword, known address, postal code or geocoded place.

    A known address or postal prefix ranks every lot with coordinates by
    distance. Geocoding is only attempted when the keyword search finds at
    most two lots; failures fall back to the keyword results.
    """
    if not query.strip():
        return []
    term, words = normalize_query(query)
    coords = lookup_address(term)
    if coords is None and is_postal_code(query):
        coords = lookup_postal_code(query)

    if coords is not None:
        return _by_distance(lots, *coords)
    if not words:
        return _by_free_desc(LotMatch(lot=lot) for lot in lots)

    results: list[ParkingLot] = []
    for lot in lots:
        text = _searchable_text(lot)
        all_words = all(word in text for word in words)
        partial = term in text or any(
            keyword in term and keyword in text for keyword in NEIGHBOURHOOD_KEYWORDS
        )
        if all_words or partial:
            results.append(lot)

    if geocoder is not None and len(results) <= GEOCODE_FALLBACK_MAX_RESULTS:
        try:
            found = await geocoder.geocode(query)
        except PyParkingAvailabilityError as exc:
            _LOGGER.warning("Geocoding %r failed, using keyword results: %s", query, exc)
        else:
            if found.found and found.lat is not None and found.lng is not None:
                return _by_distance(lots, found.lat, found.lng)

    return _by_free_desc(LotMatch(lot=lot) for lot in results)
