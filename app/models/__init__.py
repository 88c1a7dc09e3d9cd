"""Models package - DDL and entities for all domains."""

from app.models.baseline import (
    BASELINE_DDL,
    UNIT_DDL,
    BaselineRecord,
    Party,
    Unit,
)
from app.models.common import BaseEntity
from app.models.projection import (
    AggregateResult,
    ExtrusionMode,
    LocalSwing,
    ProjectedUnitResult,
    SolverMode,
    SolverResult,
    SwingScenario,
    UnitEncoding,
)

ALL_DDL = [
    UNIT_DDL,
    BASELINE_DDL,
]

__all__ = [
    # Common
    "BaseEntity",
    # Baseline
    "UNIT_DDL",
    "BASELINE_DDL",
    "Party",
    "Unit",
    "BaselineRecord",
    # Projection
    "SwingScenario",
    "ProjectedUnitResult",
    "AggregateResult",
    "LocalSwing",
    "SolverResult",
    "SolverMode",
    "ExtrusionMode",
    "UnitEncoding",
    # All DDL
    "ALL_DDL",
]
