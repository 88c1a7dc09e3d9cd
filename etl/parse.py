"""Validated parse of raw feed payloads into strict baseline records."""

from dataclasses import dataclass, field

from loguru import logger
from pydantic import ValidationError

from app.models.baseline import BaselineRecord, Unit
from swing_client.baseline import RawBaselineSchema

DEFAULT_UNIT_NAME = "County"


@dataclass
class ParseResult:
    """Accepted records/units and how many raw rows were dropped."""

    records: list[BaselineRecord] = field(default_factory=list)
    units: list[Unit] = field(default_factory=list)
    dropped: int = 0

    def extend(self, other: "ParseResult") -> None:
        self.records.extend(other.records)
        self.units.extend(other.units)
        self.dropped += other.dropped


def parse_record(raw: dict, cycle: int) -> tuple[BaselineRecord, Unit]:
    """One raw row -> (record, unit). Raises pydantic ValidationError if malformed."""
    row = RawBaselineSchema.model_validate(raw)
    record = BaselineRecord(
        unit_code=row.code,
        cycle=cycle,
        total_votes=row.total_votes,
        votes_by_party=row.party_votes(),
    )
    unit = Unit(code=row.code, parent_region=row.region, name=row.name or DEFAULT_UNIT_NAME)
    return record, unit


def parse_records(payload: list, cycle: int) -> ParseResult:
    """Parse a cycle's rows; malformed rows are counted and skipped.

    A unit seen twice keeps its last row.
    """
    records: dict[str, BaselineRecord] = {}
    units: dict[str, Unit] = {}
    dropped = 0

    for raw in payload if isinstance(payload, list) else []:
        if not isinstance(raw, dict):
            dropped += 1
            continue
        try:
            record, unit = parse_record(raw, cycle)
        except ValidationError as e:
            dropped += 1
            logger.debug("Dropped row in cycle {}: {}", cycle, e.errors()[0]["msg"])
            continue
        records[record.unit_code] = record
        units[unit.code] = unit

    if dropped:
        logger.warning("Cycle {}: dropped {} malformed rows, kept {}", cycle, dropped, len(records))
    return ParseResult(records=list(records.values()), units=list(units.values()), dropped=dropped)


def parse_timeline(payload: dict) -> dict[int, ParseResult]:
    """``{"2016": [...], "2020": [...]}`` -> ParseResult per cycle. Non-year keys are ignored."""
    result = {}
    for key, rows in (payload or {}).items():
        try:
            cycle = int(key)
        except (TypeError, ValueError):
            logger.warning("Ignoring non-cycle key {!r}", key)
            continue
        result[cycle] = parse_records(rows, cycle)
    return result
