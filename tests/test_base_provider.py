from __future__ import annotations

import aiohttp
import pytest

from pyparkingavailability.exceptions import (
    NetworkError,
    ProviderError,
    RequestTimeoutError,
    ValidationError,
)
from pyparkingavailability.provider.base import LotProvider
from pyparkingavailability.provider.loader import ProviderManifest


class _FakeResponse:
    def __init__(
        self,
        *,
        status: int = 200,
        json_data: object | None = None,
        text_data: str = "",
        json_error: Exception | None = None,
    ) -> None:
        self.status = status
        self._json_data = json_data
        self._text_data = text_data
        self._json_error = json_error

    async def json(self) -> object:
        if self._json_error is not None:
            raise self._json_error
        return self._json_data

    async def text(self) -> str:
        return self._text_data


class _FakeRequestContext:
    def __init__(self, response: _FakeResponse) -> None:
        self._response = response

    async def __aenter__(self) -> _FakeResponse:
        return self._response

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        return False


class _SequenceSession:
    def __init__(self, results: list[object]) -> None:
        self._results = results
        self.calls = 0

    def request(self, method: str, url: str, **kwargs) -> _FakeRequestContext:
        self.calls += 1
        result = self._results[self.calls - 1]
        if isinstance(result, Exception):
            raise result
        return _FakeRequestContext(result)


class _DummyProvider(LotProvider):
    async def fetch_lots(self) -> list[dict]:
        return []


def _manifest(kind: str = "lots") -> ProviderManifest:
    return ProviderManifest(id="dummy", name="Dummy", kind=kind)  # type: ignore[arg-type]


def test_provider_info() -> None:
    provider = _DummyProvider(_SequenceSession([]), _manifest(), base_url="https://example.com")
    assert provider.provider_id == "dummy"
    assert provider.provider_name == "Dummy"
    assert provider.info.kind == "lots"


def test_manifest_kind_must_match() -> None:
    with pytest.raises(ProviderError):
        _DummyProvider(_SequenceSession([]), _manifest("weather"), base_url="https://example.com")


def test_session_is_required() -> None:
    with pytest.raises(ValidationError):
        _DummyProvider(None, _manifest(), base_url="https://example.com")  # type: ignore[arg-type]


def test_build_url_validation() -> None:
    provider = _DummyProvider(
        _SequenceSession([]),
        _manifest(),
        base_url="https://example.com/",
        api_uri="/rest/v1/",
    )
    assert provider._build_url("/path") == "https://example.com/rest/v1/path"
    assert provider._build_url("path") == "https://example.com/rest/v1/path"
    with pytest.raises(ValidationError):
        provider._build_url("")
    with pytest.raises(ValidationError):
        provider._build_url("https://example.com/absolute")


def test_build_url_requires_base_url() -> None:
    provider = _DummyProvider(_SequenceSession([]), _manifest(), base_url=None)
    with pytest.raises(ValidationError):
        provider._build_url("path")


def test_normalize_base_url_rejects_blank() -> None:
    with pytest.raises(ValidationError):
        _DummyProvider(_SequenceSession([]), _manifest(), base_url="   ")


def test_normalize_api_uri() -> None:
    provider = _DummyProvider(_SequenceSession([]), _manifest(), base_url="https://example.com")
    assert provider._normalize_api_uri(None) == ""
    assert provider._normalize_api_uri(" /api/v1/ ") == "/api/v1"
    with pytest.raises(ValidationError):
        provider._normalize_api_uri(123)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_request_json_retries_get() -> None:
    session = _SequenceSession(
        [
            aiohttp.ClientError("boom"),
            _FakeResponse(json_data=[{"map_id": 1}]),
        ]
    )
    provider = _DummyProvider(
        session,
        _manifest(),
        base_url="https://example.com",
        retry_count=1,
    )
    result = await provider._request_json("GET", "/path")
    assert result == [{"map_id": 1}]
    assert session.calls == 2


@pytest.mark.asyncio
async def test_request_json_no_retry_on_post() -> None:
    session = _SequenceSession([aiohttp.ClientError("boom")])
    provider = _DummyProvider(
        session,
        _manifest(),
        base_url="https://example.com",
        retry_count=2,
    )
    with pytest.raises(NetworkError):
        await provider._request_json("POST", "/path")
    assert session.calls == 1


@pytest.mark.asyncio
async def test_request_json_timeout() -> None:
    session = _SequenceSession([TimeoutError()])
    provider = _DummyProvider(session, _manifest(), base_url="https://example.com")
    with pytest.raises(RequestTimeoutError):
        await provider._request_json("GET", "/path")


@pytest.mark.asyncio
async def test_request_json_invalid_response() -> None:
    session = _SequenceSession([_FakeResponse(json_error=ValueError("bad"))])
    provider = _DummyProvider(session, _manifest(), base_url="https://example.com")
    with pytest.raises(ProviderError):
        await provider._request_json("GET", "/path")


@pytest.mark.asyncio
async def test_request_text_not_found() -> None:
    session = _SequenceSession([_FakeResponse(status=404)])
    provider = _DummyProvider(session, _manifest(), base_url="https://example.com")
    with pytest.raises(ProviderError) as exc_info:
        await provider._request_text("GET", "/path")
    assert exc_info.value.error_code == "not_found"


@pytest.mark.asyncio
async def test_request_text_provider_error() -> None:
    session = _SequenceSession([_FakeResponse(status=500)])
    provider = _DummyProvider(session, _manifest(), base_url="https://example.com")
    with pytest.raises(ProviderError):
        await provider._request_text("GET", "/path")


@pytest.mark.asyncio
async def test_request_text_success() -> None:
    session = _SequenceSession([_FakeResponse(text_data="ok")])
    provider = _DummyProvider(session, _manifest(), base_url="https://example.com")
    assert await provider._request_text("GET", "/path") == "ok"
