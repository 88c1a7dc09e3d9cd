"""Elasticity services."""

from app.services.elasticity.estimator import ElasticityEstimator, estimate_elasticity

__all__ = [
    "ElasticityEstimator",
    "estimate_elasticity",
]
