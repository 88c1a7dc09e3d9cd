"""Swing projection - transform, aggregation and scenario evaluation."""

from app.services.projection.service import ProjectionService
from app.services.projection.transform import (
    aggregate,
    aggregate_by_region,
    electoral_tally,
    project,
    project_all,
)

__all__ = [
    "ProjectionService",
    "project",
    "project_all",
    "aggregate",
    "aggregate_by_region",
    "electoral_tally",
]
