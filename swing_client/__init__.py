"""Baseline API client package."""

from swing_client.base import BaseClient, safe_request
from swing_client.baseline import BaselineClient, RawBaselineSchema

__all__ = [
    # Base
    "BaseClient",
    "safe_request",
    # Clients
    "BaselineClient",
    "RawBaselineSchema",
]
