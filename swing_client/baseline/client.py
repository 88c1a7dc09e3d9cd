"""Baseline API client."""

from swing_client.base import BaseClient


class BaselineClient(BaseClient):
    """Client for the baseline returns endpoints."""

    async def timeline(self, cycles: list[int], regions: str | list[str] = "ALL") -> dict[str, list[dict]]:
        """GET /timeline?years=..&states=.. - raw unit returns keyed by cycle."""
        states = regions if isinstance(regions, str) else ",".join(regions)
        return await self._get(
            "timeline",
            params={"years": ",".join(str(c) for c in cycles), "states": states},
        )

    async def cycle(self, cycle: int, regions: str | list[str] = "ALL") -> list[dict]:
        """Raw unit returns for a single cycle."""
        data = await self.timeline([cycle], regions)
        rows = data.get(str(cycle)) if isinstance(data, dict) else None
        return rows if isinstance(rows, list) else []
