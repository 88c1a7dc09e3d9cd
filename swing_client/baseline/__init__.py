"""Baseline API client."""

from swing_client.baseline.client import BaselineClient
from swing_client.baseline.schemas import RawBaselineSchema

__all__ = [
    "BaselineClient",
    "RawBaselineSchema",
]
