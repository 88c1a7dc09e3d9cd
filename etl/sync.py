"""Main sync orchestration."""

import asyncio

from loguru import logger

from app.repositories.baseline import BaselineRepository
from app.repositories.db import get_write_connection
from etl.load import store
from etl.parse import parse_timeline
from etl.validation import validate_cycle
from swing_client import BaselineClient, safe_request
from settings import BASELINE_API_URL, MAX_CONCURRENT


async def fetch_timeline(
    cycles: list[int],
    regions: str | list[str] = "ALL",
    base_url: str = BASELINE_API_URL,
) -> dict:
    """Raw timeline payload for the cycles; empty dict if the API is unavailable."""
    async with BaselineClient(base_url=base_url, max_concurrent=MAX_CONCURRENT) as client:
        data = await safe_request(client.timeline(cycles, regions), {})
    if not isinstance(data, dict):
        logger.error("Unexpected timeline payload type: {}", type(data).__name__)
        return {}
    return data


async def sync_cycles(
    repo: BaselineRepository,
    cycles: list[int],
    regions: str | list[str] = "ALL",
    base_url: str = BASELINE_API_URL,
) -> dict[int, dict]:
    """Fetch, parse and store the given cycles, then validate each."""
    logger.info("Syncing cycles {} (regions={})", cycles, regions)
    payload = await fetch_timeline(cycles, regions, base_url)
    if not payload:
        logger.warning("No baselines received")
        return {}

    parsed = parse_timeline(payload)
    stats = store(repo, parsed)

    for cycle in stats:
        result = validate_cycle(repo.connection, cycle)
        if result["valid"]:
            logger.info("Validation OK {}: {}", cycle, result["stats"])
        else:
            logger.warning("Validation issues {}: {}", cycle, result["issues"])
    return stats


def sync_all(cycles: list[int], regions: str | list[str] = "ALL") -> dict[int, dict]:
    """Main sync entry point."""
    conn = get_write_connection()
    try:
        repo = BaselineRepository(read_only=False, conn=conn)
        stats = asyncio.run(sync_cycles(repo, cycles, regions))
    finally:
        conn.close()
    logger.info("Sync complete!")
    return stats
