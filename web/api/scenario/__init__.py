"""Scenario API."""

from web.api.scenario.views import evaluate_scenario, get_cycles, solve_target

__all__ = [
    "get_cycles",
    "evaluate_scenario",
    "solve_target",
]
