"""Supabase REST provider for the parking app view."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from ...exceptions import ProviderError, ValidationError
from ..base import LotProvider
from ..loader import ProviderManifest
from .const import (
    DEFAULT_API_URI,
    DEFAULT_HEADERS,
    PARKING_VIEW_COLUMNS,
    PARKING_VIEW_ENDPOINT,
    PARKING_VIEW_ORDER,
)

_LOGGER = logging.getLogger(__name__)


class Provider(LotProvider):
    """Reads lot rows from the ``parking_app_view`` through PostgREST."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        manifest: ProviderManifest,
        *,
        base_url: str | None = None,
        api_uri: str | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        retry_count: int = 0,
        api_key: str | None = None,
    ) -> None:
        """Initialize the provider."""
        if api_uri is None:
            api_uri = DEFAULT_API_URI
        super().__init__(
            session,
            manifest,
            base_url=base_url,
            api_uri=api_uri,
            timeout=timeout,
            retry_count=retry_count,
        )
        if api_key is not None and (not isinstance(api_key, str) or not api_key.strip()):
            raise ValidationError("api_key must be a non-empty string.")
        self._api_key = api_key.strip() if api_key else None

    async def fetch_lots(self) -> list[dict[str, Any]]:
        """Return raw rows of the parking view."""
        _LOGGER.debug("Provider %s fetch_lots started", self.provider_id)
        params = {
            "select": ",".join(PARKING_VIEW_COLUMNS),
            "order": PARKING_VIEW_ORDER,
        }
        data = await self._request_json(
            "GET",
            PARKING_VIEW_ENDPOINT,
            params=params,
            headers=self._build_headers(),
        )
        rows = self._map_rows(data)
        _LOGGER.debug("Provider %s fetch_lots completed (%s rows)", self.provider_id, len(rows))
        return rows

    def _build_headers(self) -> dict[str, str]:
        headers = dict(DEFAULT_HEADERS)
        if self._api_key:
            headers["apikey"] = self._api_key
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    def _map_rows(self, data: Any) -> list[dict[str, Any]]:
        if not isinstance(data, list):
            raise ProviderError("Provider response included invalid lot data.")
        return [row for row in data if isinstance(row, dict) and row.get("map_id") is not None]
