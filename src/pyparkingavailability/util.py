"""Shared utilities for coercion and normalization."""

from __future__ import annotations

import math
import re
from datetime import UTC, datetime
from typing import Any

from .exceptions import ValidationError

_PARENTHESIZED_RE = re.compile(r"\(.*?\)")
_WHITESPACE_RE = re.compile(r"\s+")


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded towards +infinity."""
    return math.floor(value + 0.5)


def safe_number(value: Any) -> float | None:
    """Return a finite float for numeric-looking input, else None."""
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (OverflowError, ValueError):
        # Includes integers beyond float range.
        return None
    if not math.isfinite(number):
        return None
    return number


def safe_count(value: Any) -> int | None:
    """Return a non-negative integer count, or None when the value is unusable."""
    number = safe_number(value)
    if number is None:
        return None
    return max(0, math.floor(number))


def normalize_lot_name(name: str) -> str:
    lowered = name.lower()
    lowered = _PARENTHESIZED_RE.sub("", lowered)
    lowered = lowered.replace("city parking", "")
    return _WHITESPACE_RE.sub(" ", lowered).strip()


def parse_timestamp(value: str) -> datetime:
    if not isinstance(value, str) or not value:
        raise ValidationError("Timestamp must be a non-empty string.")
    raw = value.strip()
    if raw.endswith("Z"):
        raw = f"{raw[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError as exc:
        raise ValidationError("Timestamp is not a valid ISO 8601 value.") from exc
    if parsed.tzinfo is None:
        # Database timestamps without an offset are stored in UTC.
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def format_utc_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        raise ValidationError("Timestamp must include timezone information.")
    normalized = value.astimezone(UTC).replace(microsecond=0)
    return normalized.isoformat().replace("+00:00", "Z")
