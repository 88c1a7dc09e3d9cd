"""Baseline repositories."""

from app.repositories.baseline.baseline import BaselineRepository

__all__ = [
    "BaselineRepository",
]
