"""Runtime owner of the lot collection and its refresh timers."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import datetime, tzinfo
from zoneinfo import ZoneInfo
from typing import Any

import aiohttp

from .client import Client
from .config import DEFAULT_TIMEZONE, MonitorConfig
from .congestion import adjust, congestion_score
from .exceptions import ConfigError, PyParkingAvailabilityError
from .merge import merge
from .models import LotMatch, ParkingLot, Weather
from .provider.base import BaseProvider, GeocodeProvider, LotProvider, WeatherProvider
from .resolver import resolve_all, tick
from .search import filter_lots, search_lots

_LOGGER = logging.getLogger(__name__)

NoticeCallback = Callable[[str, PyParkingAvailabilityError], None]
UpdateCallback = Callable[[tuple[ParkingLot, ...]], None]

LOTS_NOTICE = "Failed to load parking data"


class ParkingMonitor:
    """Keeps resolved lots current.

    Three timers share one collection: a fetch loop that refetches and
    merges, a heuristic tick that re-estimates heuristic lots without a
    network call, and a weather loop feeding the congestion score. Every
    update swaps in a new tuple, so readers never see a half-applied tick.
    """

    def __init__(
        self,
        lot_provider: LotProvider,
        *,
        weather_provider: WeatherProvider | None = None,
        geocoder: GeocodeProvider | None = None,
        fetch_interval: float = 60.0,
        tick_interval: float = 15.0,
        weather_interval: float = 600.0,
        tz: tzinfo | None = None,
        clock: Callable[[], datetime] | None = None,
        on_notice: NoticeCallback | None = None,
        on_update: UpdateCallback | None = None,
    ) -> None:
        self._lot_provider = lot_provider
        self._weather_provider = weather_provider
        self._geocoder = geocoder
        self._fetch_interval = fetch_interval
        self._tick_interval = tick_interval
        self._weather_interval = weather_interval
        self._tz = tz if tz is not None else ZoneInfo(DEFAULT_TIMEZONE)
        self._clock = clock
        self._on_notice = on_notice
        self._on_update = on_update
        self._lots: tuple[ParkingLot, ...] = ()
        self._weather: Weather | None = None
        self._fetch_lock = asyncio.Lock()
        self._tasks: list[asyncio.Task[None]] = []
        self._client: Client | None = None
        self.last_error: PyParkingAvailabilityError | None = None

    @classmethod
    async def from_config(
        cls,
        config: MonitorConfig,
        *,
        client: Client | None = None,
        on_notice: NoticeCallback | None = None,
        on_update: UpdateCallback | None = None,
    ) -> ParkingMonitor:
        """Build a monitor and its providers; an internally created client is owned."""
        owns_client = client is None
        if client is None:
            client = Client(
                timeout=aiohttp.ClientTimeout(total=config.request_timeout),
                retry_count=config.retry_count,
            )
        try:
            lot_options: dict[str, Any] = {}
            if config.lot_provider == "supabase":
                lot_options = {"base_url": config.supabase_url, "api_key": config.supabase_key}
            lot_provider = _require(
                await client.get_provider(config.lot_provider, **lot_options),
                LotProvider,
            )
            weather_provider = None
            if config.weather_provider:
                weather_provider = _require(
                    await client.get_provider(config.weather_provider, base_url=config.weather_url),
                    WeatherProvider,
                )
            geocoder = None
            if config.geocode_provider:
                geocoder = _require(
                    await client.get_provider(config.geocode_provider, base_url=config.geocode_url),
                    GeocodeProvider,
                )
        except Exception:
            if owns_client:
                await client.aclose()
            raise
        monitor = cls(
            lot_provider,
            weather_provider=weather_provider,
            geocoder=geocoder,
            fetch_interval=config.fetch_interval,
            tick_interval=config.tick_interval,
            weather_interval=config.weather_interval,
            tz=config.tzinfo,
            on_notice=on_notice,
            on_update=on_update,
        )
        if owns_client:
            monitor._client = client
        return monitor

    async def __aenter__(self) -> ParkingMonitor:
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    @property
    def lots(self) -> tuple[ParkingLot, ...]:
        return self._lots

    @property
    def weather(self) -> Weather | None:
        return self._weather

    @property
    def running(self) -> bool:
        return bool(self._tasks)

    def now(self) -> datetime:
        if self._clock is not None:
            return self._clock()
        return datetime.now(self._tz)

    def congestion(self, now: datetime | None = None) -> int:
        return congestion_score(now or self.now(), self._weather)

    async def start(self) -> None:
        """Load weather and lots once, then start the timers."""
        if self._tasks:
            return
        await self.refresh_weather()
        await self.refresh()
        self._tasks = [
            asyncio.create_task(
                self._run_periodic(self._fetch_interval, self.refresh, "fetch"),
                name="parking-fetch",
            ),
            asyncio.create_task(
                self._run_periodic(self._tick_interval, self._tick_async, "tick"),
                name="parking-tick",
            ),
        ]
        if self._weather_provider is not None:
            self._tasks.append(
                asyncio.create_task(
                    self._run_periodic(self._weather_interval, self.refresh_weather, "weather"),
                    name="parking-weather",
                )
            )
        _LOGGER.debug("Parking monitor started with %s lots", len(self._lots))

    async def aclose(self) -> None:
        """Stop the timers, cancel in-flight requests and release the client."""
        tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        _LOGGER.debug("Parking monitor stopped")

    async def refresh(self) -> bool:
        """Refetch lots and merge them; returns False when skipped or failed.

        A refresh that starts while another is in flight is skipped. On
        failure the previous lots are kept.
        """
        if self._fetch_lock.locked():
            _LOGGER.debug("Lot fetch already in flight, skipping")
            return False
        async with self._fetch_lock:
            try:
                rows = await self._lot_provider.fetch_lots()
            except PyParkingAvailabilityError as exc:
                self._report(LOTS_NOTICE, exc)
                return False
            now = self.now()
            fresh = adjust(resolve_all(rows, now), self.congestion(now))
            self._set_lots(merge(self._lots, fresh))
            self.last_error = None
            return True

    def tick(self) -> None:
        """Advance heuristic lots to the current time."""
        now = self.now()
        self._set_lots(adjust(tick(self._lots, now), self.congestion(now)))

    async def refresh_weather(self) -> Weather | None:
        if self._weather_provider is None:
            return None
        try:
            self._weather = await self._weather_provider.get_weather()
        except PyParkingAvailabilityError as exc:
            _LOGGER.warning("Weather unavailable, using time-only congestion: %s", exc)
            self._weather = None
        return self._weather

    def filter(self, query: str = "", *, only_available: bool = False) -> list[ParkingLot]:
        return filter_lots(self._lots, query, only_available=only_available)

    async def search(self, query: str) -> list[LotMatch]:
        return await search_lots(self._lots, query, self._geocoder)

    async def _tick_async(self) -> None:
        self.tick()

    async def _run_periodic(
        self,
        interval: float,
        action: Callable[[], Awaitable[Any]],
        name: str,
    ) -> None:
        while True:
            await asyncio.sleep(interval)
            try:
                await action()
            except Exception:
                _LOGGER.exception("Parking monitor %s timer failed", name)

    def _set_lots(self, lots: Sequence[ParkingLot]) -> None:
        self._lots = tuple(lots)
        if self._on_update is not None:
            self._on_update(self._lots)

    def _report(self, message: str, exc: PyParkingAvailabilityError) -> None:
        self.last_error = exc
        _LOGGER.warning("%s: %s", message, exc)
        if self._on_notice is not None:
            self._on_notice(message, exc)


def _require(provider: BaseProvider, expected: type[BaseProvider]) -> Any:
    if not isinstance(provider, expected):
        raise ConfigError(f"Provider {provider.provider_id} has the wrong kind.")
    return provider
