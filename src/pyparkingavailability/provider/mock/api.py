"""Mock provider serving static demo rows."""

from __future__ import annotations

from typing import Any

from ..base import LotProvider
from .const import DEMO_LOTS


class Provider(LotProvider):
    """Serves :data:`DEMO_LOTS` without touching the network."""

    async def fetch_lots(self) -> list[dict[str, Any]]:
        return [dict(row) for row in DEMO_LOTS]
