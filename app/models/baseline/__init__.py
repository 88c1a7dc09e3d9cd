"""Baseline domain models - units, cycles and vote returns."""

from app.models.baseline.baseline import BASELINE_DDL
from app.models.baseline.entities import BaselineRecord, Party, Unit
from app.models.baseline.unit import UNIT_DDL

__all__ = [
    "UNIT_DDL",
    "BASELINE_DDL",
    "Party",
    "Unit",
    "BaselineRecord",
]
