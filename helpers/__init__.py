"""Shared helpers - pure numeric formulas."""

from helpers import formulas

__all__ = [
    "formulas",
]
