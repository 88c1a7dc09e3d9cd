"""Load parsed baselines into the store (batch files and live updates)."""

import json
from pathlib import Path

import polars as pl
from loguru import logger
from pydantic import ValidationError

from app.repositories.baseline import BaselineRepository
from etl.parse import ParseResult, parse_record, parse_records, parse_timeline


def store(repo: BaselineRepository, parsed: dict[int, ParseResult]) -> dict[int, dict]:
    """Write parsed cycles; returns per-cycle loaded/dropped counts."""
    stats = {}
    for cycle, result in sorted(parsed.items()):
        if not result.records:
            logger.warning("Cycle {}: nothing to load ({} dropped)", cycle, result.dropped)
            stats[cycle] = {"loaded": 0, "dropped": result.dropped}
            continue
        repo.upsert_units(result.units)
        loaded = repo.replace_records(result.records)
        stats[cycle] = {"loaded": loaded, "dropped": result.dropped}
        logger.info("Cycle {}: {} records loaded, {} dropped", cycle, loaded, result.dropped)
    return stats


def read_file(path: str | Path, cycle: int | None = None) -> dict[int, ParseResult]:
    """Parse a JSON timeline/list or a CSV file of one cycle."""
    path = Path(path)
    if path.suffix.lower() == ".csv":
        if cycle is None:
            raise ValueError(f"{path.name}: CSV baselines need an explicit cycle")
        rows = pl.read_csv(path, infer_schema_length=0).to_dicts()
        return {cycle: parse_records(rows, cycle)}

    payload = json.loads(path.read_text())
    if isinstance(payload, dict):
        return parse_timeline(payload)
    if cycle is None:
        raise ValueError(f"{path.name}: list payload needs an explicit cycle")
    return {cycle: parse_records(payload, cycle)}


def load_file(repo: BaselineRepository, path: str | Path, cycle: int | None = None) -> dict[int, dict]:
    """Read and store a baseline file."""
    logger.info("Loading baseline file {}", path)
    return store(repo, read_file(path, cycle))


def apply_update(repo: BaselineRepository, raw: dict, cycle: int) -> bool:
    """Apply one streamed row as an atomic replacement. False if malformed."""
    try:
        record, unit = parse_record(raw, cycle)
    except ValidationError as e:
        logger.warning("Live update dropped: {}", e.errors()[0]["msg"])
        return False
    repo.upsert_units([unit])
    repo.replace_record(record)
    logger.debug("Live update: {} cycle {} ({} votes)", record.unit_code, cycle, record.total_votes)
    return True
