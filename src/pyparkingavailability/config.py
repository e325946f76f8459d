"""Monitor configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .exceptions import ConfigError

MIN_FETCH_INTERVAL = 5.0
MAX_FETCH_INTERVAL = 60.0

ENV_PREFIX = "PARKING_"
DEFAULT_TIMEZONE = "America/Toronto"


@dataclass(frozen=True, slots=True)
class MonitorConfig:
    lot_provider: str = "supabase"
    weather_provider: str | None = "weather_relay"
    geocode_provider: str | None = "nominatim"
    supabase_url: str | None = None
    supabase_key: str | None = None
    weather_url: str | None = None
    geocode_url: str | None = None
    fetch_interval: float = 60.0
    tick_interval: float = 15.0
    weather_interval: float = 600.0
    request_timeout: float = 10.0
    retry_count: int = 0
    timezone: str = DEFAULT_TIMEZONE

    def __post_init__(self) -> None:
        if not self.lot_provider:
            raise ConfigError("lot_provider is required.")
        if not MIN_FETCH_INTERVAL <= self.fetch_interval <= MAX_FETCH_INTERVAL:
            raise ConfigError(
                f"fetch_interval must be between {MIN_FETCH_INTERVAL:g} "
                f"and {MAX_FETCH_INTERVAL:g} seconds."
            )
        for name in ("tick_interval", "weather_interval", "request_timeout"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive.")
        if self.retry_count < 0:
            raise ConfigError("retry_count must not be negative.")
        if self.lot_provider == "supabase" and not self.supabase_url:
            raise ConfigError("supabase_url is required for the supabase provider.")
        if self.weather_provider == "weather_relay" and not self.weather_url:
            raise ConfigError("weather_url is required for the weather_relay provider.")
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ConfigError(f"Unknown timezone {self.timezone!r}.") from exc

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> MonitorConfig:
        """Build a config from ``PARKING_*`` and ``SUPABASE_*`` variables."""
        env = os.environ if environ is None else environ

        def text(name: str) -> str | None:
            value = env.get(name)
            if value is None:
                return None
            return value.strip() or None

        def number(name: str, default: float) -> float:
            value = text(name)
            if value is None:
                return default
            try:
                return float(value)
            except ValueError as exc:
                raise ConfigError(f"{name} must be a number.") from exc

        def provider(name: str, default: str | None) -> str | None:
            value = env.get(name)
            if value is None:
                return default
            value = value.strip().lower()
            return None if value in ("", "none", "off") else value

        data_mode = (text(f"{ENV_PREFIX}DATA_MODE") or "api").lower()
        lot_provider = text(f"{ENV_PREFIX}LOT_PROVIDER") or (
            "mock" if data_mode == "mock" else "supabase"
        )
        return cls(
            lot_provider=lot_provider,
            weather_provider=provider(f"{ENV_PREFIX}WEATHER_PROVIDER", "weather_relay"),
            geocode_provider=provider(f"{ENV_PREFIX}GEOCODE_PROVIDER", "nominatim"),
            supabase_url=text("SUPABASE_URL"),
            supabase_key=text("SUPABASE_ANON_KEY"),
            weather_url=text(f"{ENV_PREFIX}WEATHER_URL"),
            geocode_url=text(f"{ENV_PREFIX}GEOCODE_URL"),
            fetch_interval=number(f"{ENV_PREFIX}FETCH_INTERVAL", 60.0),
            tick_interval=number(f"{ENV_PREFIX}TICK_INTERVAL", 15.0),
            weather_interval=number(f"{ENV_PREFIX}WEATHER_INTERVAL", 600.0),
            request_timeout=number(f"{ENV_PREFIX}REQUEST_TIMEOUT", 10.0),
            retry_count=int(number(f"{ENV_PREFIX}RETRY_COUNT", 0)),
            timezone=text(f"{ENV_PREFIX}TIMEZONE") or DEFAULT_TIMEZONE,
        )
