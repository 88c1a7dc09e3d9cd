"""Scenario evaluation service."""

from app.services.scenario.service import ScenarioService

__all__ = [
    "ScenarioService",
]
