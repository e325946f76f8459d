from datetime import UTC, datetime

import aiohttp
import pytest

from pyparkingavailability.provider.loader import ProviderManifest
from pyparkingavailability.provider.mock.api import Provider
from pyparkingavailability.provider.mock.const import DEMO_LOTS
from pyparkingavailability.resolver import resolve_all

NOW = datetime(2024, 1, 2, 15, 0, tzinfo=UTC)


@pytest.mark.asyncio
async def test_demo_rows_cover_every_tier() -> None:
    async with aiohttp.ClientSession() as session:
        provider = Provider(session, ProviderManifest(id="mock", name="Demo lots", kind="lots"))
        rows = await provider.fetch_lots()

    assert len(rows) == len(DEMO_LOTS)

    lots = {lot.id: lot for lot in resolve_all(rows, NOW)}
    assert lots["demo-a"].estimate_source == "live"
    assert (lots["demo-a"].free, lots["demo-a"].status) == (10, "available")
    assert (lots["demo-b"].free, lots["demo-b"].status) == (0, "busy")
    assert lots["p1"].estimate_source == "virtual"
    assert (lots["p1"].free, lots["p1"].occupied) == (110, 310)
    assert lots["p2"].estimate_source == "heuristic"
    assert lots["p6"].estimate_source == "heuristic"

    rows[0]["free"] = 999
    assert DEMO_LOTS[0]["free"] == 10
