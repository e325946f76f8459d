"""Provider base classes and shared request behavior."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import aiohttp

from ..exceptions import NetworkError, ProviderError, RequestTimeoutError, ValidationError
from ..models import GeocodeResult, ProviderInfo, ProviderKind, Weather
from .loader import ProviderManifest

DEFAULT_TIMEOUT = aiohttp.ClientTimeout(total=10)


class BaseProvider(ABC):
    """Base class for provider implementations."""

    kind: ProviderKind

    def __init__(
        self,
        session: aiohttp.ClientSession,
        manifest: ProviderManifest,
        *,
        base_url: str | None = None,
        api_uri: str | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        retry_count: int = 0,
    ) -> None:
        if session is None:
            raise ValidationError("Session is required.")
        if manifest.kind != self.kind:
            raise ProviderError(f"Provider {manifest.id} is not a {self.kind} provider.")
        self._session = session
        self._manifest = manifest
        self._base_url = self._normalize_base_url(base_url)
        self._api_uri = self._normalize_api_uri(api_uri)
        self._timeout = timeout or DEFAULT_TIMEOUT
        self._retry_count = max(0, retry_count)

    @property
    def provider_id(self) -> str:
        return self._manifest.id

    @property
    def provider_name(self) -> str:
        return self._manifest.name

    @property
    def info(self) -> ProviderInfo:
        return ProviderInfo(
            id=self._manifest.id,
            name=self._manifest.name,
            kind=self._manifest.kind,
        )

    def _build_url(self, path: str) -> str:
        if not isinstance(path, str) or not path:
            raise ValidationError("Path must be a non-empty string.")
        if path.startswith("http://") or path.startswith("https://"):
            raise ValidationError("Use relative paths when building provider requests.")
        if self._base_url is None:
            raise ValidationError("base_url is required to build provider requests.")
        normalized_path = path if path.startswith("/") else f"/{path}"
        return f"{self._base_url}{self._api_uri}{normalized_path}"

    async def _request_json(self, method: str, path: str, **kwargs: Any) -> Any:
        url = self._build_url(path)
        return await self._request(method, url, expect_json=True, **kwargs)

    async def _request_text(self, method: str, path: str, **kwargs: Any) -> str:
        url = self._build_url(path)
        return await self._request(method, url, expect_json=False, **kwargs)

    async def _request(self, method: str, url: str, *, expect_json: bool, **kwargs: Any) -> Any:
        retries = self._retry_count if method.upper() == "GET" else 0
        attempts = retries + 1
        timeout = kwargs.pop("timeout", None) or self._timeout
        last_error: Exception | None = None
        for attempt in range(attempts):
            try:
                async with self._session.request(
                    method,
                    url,
                    timeout=timeout,
                    **kwargs,
                ) as response:
                    self._raise_for_status(response)
                    if expect_json:
                        try:
                            return await response.json()
                        except (aiohttp.ContentTypeError, ValueError) as exc:
                            raise ProviderError("Response did not contain valid JSON.") from exc
                    return await response.text()
            except TimeoutError as exc:
                last_error = exc
                if attempt >= attempts - 1:
                    raise RequestTimeoutError("Request timed out.") from exc
            except aiohttp.ClientError as exc:
                last_error = exc
                if attempt >= attempts - 1:
                    raise NetworkError("Network request failed.") from exc
        if last_error is not None:
            raise NetworkError("Network request failed.") from last_error
        raise ProviderError("Request failed.")

    def _raise_for_status(self, response: aiohttp.ClientResponse) -> None:
        if 200 <= response.status < 300:
            return
        if response.status == 404:
            raise ProviderError(
                "Provider resource was not found.",
                error_code="not_found",
            )
        raise ProviderError(f"Provider request failed with status {response.status}.")

    def _normalize_base_url(self, base_url: str | None) -> str | None:
        if base_url is None:
            return None
        if not isinstance(base_url, str) or not base_url.strip():
            raise ValidationError("base_url must be a non-empty string.")
        return base_url.strip().rstrip("/")

    def _normalize_api_uri(self, api_uri: str | None) -> str:
        if api_uri is None:
            return ""
        if not isinstance(api_uri, str):
            raise ValidationError("api_uri must be a string.")
        normalized = api_uri.strip().strip("/")
        if not normalized:
            return ""
        return f"/{normalized}"


class LotProvider(BaseProvider):
    """Source of raw parking lot rows."""

    kind: ProviderKind = "lots"

    @abstractmethod
    async def fetch_lots(self) -> list[dict[str, Any]]:
        """Return raw lot rows."""


class WeatherProvider(BaseProvider):
    """Source of current weather conditions."""

    kind: ProviderKind = "weather"

    @abstractmethod
    async def get_weather(self) -> Weather:
        """Return the current weather."""


class GeocodeProvider(BaseProvider):
    """Resolves free-text places to coordinates."""

    kind: ProviderKind = "geocode"

    @abstractmethod
    async def geocode(self, query: str) -> GeocodeResult:
        """Return coordinates for a query."""
