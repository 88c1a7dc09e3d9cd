"""Baseline repository - the only owner of historical vote data."""

import json

import polars as pl
from loguru import logger

from app.models.baseline import BaselineRecord, Unit
from app.repositories.base import BaseRepository


class BaselineRepository(BaseRepository):
    """Units and per-cycle vote returns.

    Reads are cached per cycle. Writes replace whole ``(unit, cycle)`` rows
    inside a transaction, so a reader never observes a half-updated unit.
    """

    def get_cycles(self) -> list[int]:
        """Cycles with any baseline data, ascending."""

        def fetch():
            rows = self.fetchall("SELECT DISTINCT cycle FROM baseline ORDER BY cycle")
            return [int(r[0]) for r in rows]

        return self._cached("cycles", fetch)

    def get_units(self, region: str | None = None) -> list[Unit]:
        """Units, optionally restricted to one parent region."""

        def fetch():
            rows = self.fetchall("SELECT code, parent_region, name FROM unit ORDER BY code")
            return [Unit(code=r[0], parent_region=r[1], name=r[2] or "") for r in rows]

        units = self._cached("units", fetch)
        if region is None:
            return units
        return [u for u in units if u.parent_region == region]

    def get_regions(self) -> list[str]:
        """Distinct parent region codes."""
        return sorted({u.parent_region for u in self.get_units()})

    def get_cycle(self, cycle: int) -> dict[str, BaselineRecord]:
        """All records of one cycle: {unit_code: record}."""

        def fetch():
            rows = self.fetchall(
                "SELECT unit_code, cycle, total_votes, votes_by_party FROM baseline WHERE cycle = ?",
                [cycle],
            )
            result = {r[0]: self._to_record(r) for r in rows}
            logger.debug("get_cycle({}): {} records", cycle, len(result))
            return result

        return self._cached(f"cycle_{cycle}", fetch)

    def get_by_cycle(self, cycles: list[int] | None = None) -> dict[int, dict[str, BaselineRecord]]:
        """{cycle: {unit_code: record}} for the given (default all) cycles."""
        wanted = cycles if cycles is not None else self.get_cycles()
        return {c: self.get_cycle(c) for c in sorted(wanted)}

    def get_history(self, unit_code: str) -> list[BaselineRecord]:
        """One unit's records across cycles, ascending."""
        rows = self.fetchall(
            """
            SELECT unit_code, cycle, total_votes, votes_by_party
            FROM baseline WHERE unit_code = ? ORDER BY cycle
            """,
            [unit_code],
        )
        return [self._to_record(r) for r in rows]

    def count(self, cycle: int | None = None) -> int:
        if cycle is None:
            return self.fetchone("SELECT COUNT(*) FROM baseline")[0]
        return self.fetchone("SELECT COUNT(*) FROM baseline WHERE cycle = ?", [cycle])[0]

    def upsert_units(self, units: list[Unit]) -> int:
        """Insert or replace unit metadata."""
        self._require_writable()
        latest = {u.code: u for u in units}
        if not latest:
            return 0

        units_df = pl.DataFrame(
            [{"code": u.code, "parent_region": u.parent_region, "name": u.name} for u in latest.values()]
        )
        with self.transaction(units_df=units_df):
            self.execute("INSERT OR REPLACE INTO unit SELECT * FROM units_df")
        logger.info("Units: {} upserted", len(latest))
        return len(latest)

    def replace_records(self, records: list[BaselineRecord]) -> int:
        """Atomically replace the given (unit, cycle) rows. Last duplicate wins."""
        self._require_writable()
        latest = {(r.unit_code, r.cycle): r for r in records}
        if not latest:
            return 0

        records_df = pl.DataFrame(
            [
                {
                    "unit_code": r.unit_code,
                    "cycle": r.cycle,
                    "total_votes": r.total_votes,
                    "votes_by_party": json.dumps(r.votes_by_party, sort_keys=True),
                }
                for r in latest.values()
            ]
        )
        with self.transaction(records_df=records_df):
            self.execute("INSERT OR REPLACE INTO baseline SELECT * FROM records_df")
        logger.info("Baseline: {} records replaced", len(latest))
        return len(latest)

    def replace_record(self, record: BaselineRecord) -> None:
        """Single live update, applied as one atomic row replacement."""
        self.replace_records([record])

    def delete_cycle(self, cycle: int) -> int:
        """Drop all records of a cycle."""
        self._require_writable()
        n = self.count(cycle)
        with self.transaction():
            self.execute("DELETE FROM baseline WHERE cycle = ?", [cycle])
        logger.info("Cycle {}: {} records deleted", cycle, n)
        return n

    @staticmethod
    def _to_record(row) -> BaselineRecord:
        votes = row[3]
        if isinstance(votes, str):
            votes = json.loads(votes)
        return BaselineRecord(
            unit_code=row[0],
            cycle=int(row[1]),
            total_votes=int(row[2]),
            votes_by_party={k: int(v) for k, v in (votes or {}).items()},
        )
