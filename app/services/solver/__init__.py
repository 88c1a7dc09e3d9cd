"""Targeted outcome solver."""

from app.services.solver.solver import TargetedOutcomeSolver, parse_target

__all__ = [
    "TargetedOutcomeSolver",
    "parse_target",
]
