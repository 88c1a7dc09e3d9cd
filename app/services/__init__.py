"""Services package - service class exports."""

from app.services.elasticity import ElasticityEstimator
from app.services.encoding import VisualEncodingMapper
from app.services.projection import ProjectionService
from app.services.scenario import ScenarioService
from app.services.solver import TargetedOutcomeSolver

__all__ = [
    "ElasticityEstimator",
    "ProjectionService",
    "ScenarioService",
    "TargetedOutcomeSolver",
    "VisualEncodingMapper",
]
