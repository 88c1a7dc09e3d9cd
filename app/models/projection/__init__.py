"""Projection domain models - scenarios, projections, aggregates, solver output."""

from app.models.projection.entities import (
    AggregateResult,
    ElectoralTally,
    ExtrusionMode,
    LocalSwing,
    ProjectedUnitResult,
    SolverMode,
    SolverResult,
    SwingScenario,
    UnitEncoding,
)

__all__ = [
    "SwingScenario",
    "ProjectedUnitResult",
    "AggregateResult",
    "ElectoralTally",
    "LocalSwing",
    "SolverResult",
    "SolverMode",
    "ExtrusionMode",
    "UnitEncoding",
]
