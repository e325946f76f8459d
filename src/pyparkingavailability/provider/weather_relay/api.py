"""Weather relay provider."""

from __future__ import annotations

import logging
from typing import Any

from ...exceptions import ProviderError
from ...models import Weather
from ...util import safe_number
from ..base import WeatherProvider
from .const import DEFAULT_HEADERS, WEATHER_ENDPOINT

_LOGGER = logging.getLogger(__name__)


class Provider(WeatherProvider):
    """Reads ``{temp, rain, snow}`` from the application's weather relay."""

    async def get_weather(self) -> Weather:
        """Return the current weather."""
        _LOGGER.debug("Provider %s get_weather started", self.provider_id)
        data = await self._request_json("GET", WEATHER_ENDPOINT, headers=dict(DEFAULT_HEADERS))
        weather = self._map_weather(data)
        _LOGGER.debug("Provider %s get_weather completed", self.provider_id)
        return weather

    def _map_weather(self, data: Any) -> Weather:
        if not isinstance(data, dict):
            raise ProviderError("Provider response included invalid weather data.")
        temp = safe_number(data.get("temp"))
        if temp is None:
            raise ProviderError("Provider response is missing a temperature.")
        return Weather(
            temp=temp,
            rain=data.get("rain") is True,
            snow=data.get("snow") is True,
        )
