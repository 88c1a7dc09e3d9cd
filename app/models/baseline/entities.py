"""Baseline domain entities - units and historical returns."""

from dataclasses import dataclass, field
from enum import StrEnum

from app.models.common import BaseEntity


class Party(StrEnum):
    """Major-party tags. Margin is GOP minus DEM."""

    GOP = "GOP"
    DEM = "DEM"


@dataclass(frozen=True)
class Unit(BaseEntity):
    """Geographic reporting entity (county or riding)."""

    code: str
    parent_region: str
    name: str = ""


@dataclass(frozen=True)
class BaselineRecord(BaseEntity):
    """One unit's result for one election cycle.

    ``total_votes`` is the authoritative turnout. Party counts may under-sum it,
    the residual being third-party vote.
    """

    unit_code: str
    cycle: int
    total_votes: int
    votes_by_party: dict[str, int] = field(default_factory=dict)

    @property
    def gop_votes(self) -> int:
        return self.votes_by_party.get(Party.GOP, 0)

    @property
    def dem_votes(self) -> int:
        return self.votes_by_party.get(Party.DEM, 0)

    @property
    def reporting(self) -> bool:
        return self.total_votes > 0
