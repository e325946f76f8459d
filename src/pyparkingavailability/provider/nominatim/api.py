"""Nominatim geocoding provider."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from ...exceptions import ProviderError, ValidationError
from ...models import GeocodeResult
from ...util import safe_number
from ..base import GeocodeProvider
from ..loader import ProviderManifest
from .const import DEFAULT_BASE_URL, DEFAULT_CITY_CONTEXT, DEFAULT_HEADERS, SEARCH_ENDPOINT

_LOGGER = logging.getLogger(__name__)


class Provider(GeocodeProvider):
    """Geocodes free text inside a fixed city context."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        manifest: ProviderManifest,
        *,
        base_url: str | None = None,
        api_uri: str | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        retry_count: int = 0,
        city_context: str = DEFAULT_CITY_CONTEXT,
    ) -> None:
        """Initialize the provider."""
        super().__init__(
            session,
            manifest,
            base_url=base_url or DEFAULT_BASE_URL,
            api_uri=api_uri,
            timeout=timeout,
            retry_count=retry_count,
        )
        self._city_context = city_context.strip()

    async def geocode(self, query: str) -> GeocodeResult:
        """Return the best match for ``query`` within the city context."""
        if not isinstance(query, str) or not query.strip():
            raise ValidationError("query must be a non-empty string.")
        _LOGGER.debug("Provider %s geocode started", self.provider_id)
        text = query.strip()
        if self._city_context:
            text = f"{text}, {self._city_context}"
        params = {"q": text, "format": "json", "addressdetails": "1", "limit": "1"}
        data = await self._request_json(
            "GET",
            SEARCH_ENDPOINT,
            params=params,
            headers=dict(DEFAULT_HEADERS),
        )
        result = self._map_result(data)
        _LOGGER.debug("Provider %s geocode completed (found=%s)", self.provider_id, result.found)
        return result

    def _map_result(self, data: Any) -> GeocodeResult:
        if not isinstance(data, list):
            raise ProviderError("Provider response included invalid geocode data.")
        if not data or not isinstance(data[0], dict):
            return GeocodeResult(found=False)
        first = data[0]
        lat = safe_number(first.get("lat"))
        lng = safe_number(first.get("lon"))
        if lat is None or lng is None:
            return GeocodeResult(found=False)
        display_name = first.get("display_name")
        return GeocodeResult(
            found=True,
            lat=lat,
            lng=lng,
            display_name=display_name if isinstance(display_name, str) else None,
        )
