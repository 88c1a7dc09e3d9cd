"""Shared fixtures - in-memory baseline store."""

import pytest

from app.models.baseline import BaselineRecord, Unit
from app.repositories import BaselineRepository, memory_connection

UNITS = [
    Unit(code="19001", parent_region="19", name="Adair"),
    Unit(code="19003", parent_region="19", name="Adams"),
    Unit(code="55001", parent_region="55", name="Adams"),
    Unit(code="55003", parent_region="55", name="Ashland"),
]

# (unit, cycle, total, gop, dem)
RETURNS = [
    ("19001", 2016, 1000, 600, 380),
    ("19001", 2020, 1100, 640, 430),
    ("19001", 2024, 1200, 700, 470),
    ("19003", 2016, 400, 180, 200),
    ("19003", 2020, 420, 240, 170),
    ("19003", 2024, 400, 150, 240),
    ("55001", 2016, 2000, 900, 1000),
    ("55001", 2020, 2100, 1000, 1050),
    ("55001", 2024, 2200, 1150, 1000),
    ("55003", 2016, 0, 0, 0),
    ("55003", 2020, 800, 300, 480),
    ("55003", 2024, 900, 320, 550),
]


def record(code: str, cycle: int, total: int, gop: int, dem: int) -> BaselineRecord:
    return BaselineRecord(unit_code=code, cycle=cycle, total_votes=total, votes_by_party={"GOP": gop, "DEM": dem})


@pytest.fixture
def repo():
    conn = memory_connection()
    yield BaselineRepository(read_only=False, conn=conn)
    conn.close()


@pytest.fixture
def seeded_repo(repo):
    repo.upsert_units(UNITS)
    repo.replace_records([record(*r) for r in RETURNS])
    return repo
