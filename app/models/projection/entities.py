"""Projection domain entities - scenarios and derived results."""

from dataclasses import dataclass, field, replace
from enum import StrEnum

from app.models.baseline import Party
from app.models.common import BaseEntity
from settings import FLIP_THRESHOLD_PP, MAX_SWING_PP, TURNOUT_FACTOR_MAX, TURNOUT_FACTOR_MIN


class SolverMode(StrEnum):
    """How the targeted solver spreads the required shift across units."""

    UNIFORM = "uniform"
    ELASTIC = "elastic"


class ExtrusionMode(StrEnum):
    """Which quantity drives unit extrusion height."""

    MARGIN = "margin"
    TURNOUT = "turnout"
    HYBRID = "hybrid"


def _sign(x: float) -> int:
    return (x > 0) - (x < 0)


@dataclass(frozen=True)
class SwingScenario(BaseEntity):
    """User-authored what-if: global party deltas, per-unit overrides, turnout shift."""

    party_delta_pp: dict[str, float] = field(default_factory=dict)
    local_overrides: dict[str, dict[str, float]] = field(default_factory=dict)
    turnout_shift_pct: float = 0.0

    @classmethod
    def linked(cls, net_swing_pp: float, turnout_shift_pct: float = 0.0) -> "SwingScenario":
        """Single net-swing control: GOP moves +S/2, DEM moves -S/2."""
        gop = max(-MAX_SWING_PP, min(MAX_SWING_PP, net_swing_pp / 2))
        dem = max(-MAX_SWING_PP, min(MAX_SWING_PP, -net_swing_pp / 2))
        return cls(
            party_delta_pp={Party.GOP.value: gop, Party.DEM.value: dem},
            turnout_shift_pct=turnout_shift_pct,
        )

    @property
    def turnout_factor(self) -> float:
        factor = 1 + self.turnout_shift_pct / 100
        return max(TURNOUT_FACTOR_MIN, min(TURNOUT_FACTOR_MAX, factor))

    @property
    def has_global_delta(self) -> bool:
        return any(v != 0 for v in self.party_delta_pp.values())

    @property
    def has_local_overrides(self) -> bool:
        return any(v != 0 for deltas in self.local_overrides.values() for v in deltas.values())

    @property
    def is_active(self) -> bool:
        """True when projected margins should replace baseline margins."""
        return self.has_global_delta or self.has_local_overrides

    def delta_for(self, unit_code: str, party: str) -> float:
        """Global plus local delta (pp) for one party in one unit."""
        local = self.local_overrides.get(unit_code, {})
        return self.party_delta_pp.get(party, 0.0) + local.get(party, 0.0)

    def without_local_overrides(self) -> "SwingScenario":
        return replace(self, local_overrides={})

    def with_local_overrides(self, overrides: dict[str, dict[str, float]]) -> "SwingScenario":
        return replace(self, local_overrides=dict(overrides))


@dataclass(frozen=True)
class ProjectedUnitResult(BaseEntity):
    """Baseline vs projected margin and shares for one unit."""

    unit_code: str
    base_margin: float
    new_margin: float
    base_shares: dict[str, float]
    new_shares: dict[str, float]
    total_votes: int = 0

    @property
    def swing(self) -> float:
        return self.new_margin - self.base_margin

    @property
    def is_flip(self) -> bool:
        """Leader changed and the move is larger than rounding noise."""
        return (
            _sign(self.base_margin) != _sign(self.new_margin)
            and abs(self.base_margin - self.new_margin) > FLIP_THRESHOLD_PP
        )

    def margin(self, use_projected: bool) -> float:
        return self.new_margin if use_projected else self.base_margin


@dataclass(frozen=True)
class AggregateResult(BaseEntity):
    """Turnout-weighted summary for a region or the whole scope.

    ``units_reporting == 0`` means "no data", not a tied race.
    """

    total_turnout: int
    turnout_weighted_margin: float
    units_counted: int
    units_reporting: int = 0
    flips: int = 0
    region: str | None = None

    @property
    def has_data(self) -> bool:
        return self.total_turnout > 0


@dataclass(frozen=True)
class LocalSwing(BaseEntity):
    """Per-unit party adjustment produced by the solver (pp)."""

    dem_pp: float
    gop_pp: float

    @property
    def margin_delta(self) -> float:
        return self.gop_pp - self.dem_pp


@dataclass(frozen=True)
class SolverResult(BaseEntity):
    """Outcome of one targeted solve."""

    per_unit_local_swing: dict[str, LocalSwing]
    achieved_delta: float
    max_unit_delta: float
    requested_delta: float = 0.0
    current_margin: float = 0.0
    target_margin: float = 0.0
    mode: SolverMode = SolverMode.UNIFORM
    applied: bool = True

    def unit_delta(self, unit_code: str) -> float:
        """Margin change allocated to a unit; 0 when the unit got nothing."""
        swing = self.per_unit_local_swing.get(unit_code)
        return swing.margin_delta if swing else 0.0

    def as_local_overrides(self) -> dict[str, dict[str, float]]:
        """Shape accepted by ``SwingScenario.with_local_overrides``."""
        return {
            code: {Party.GOP.value: s.gop_pp, Party.DEM.value: s.dem_pp}
            for code, s in self.per_unit_local_swing.items()
        }

    @property
    def status(self) -> str:
        label = "Elastic" if self.mode == SolverMode.ELASTIC else "Uniform"
        if not self.applied:
            return f"Already within {self.requested_delta:.2f} pp of target; no solver applied."
        return (
            f"{label} distribution: applied unit swings to move margin by "
            f"{self.requested_delta:.2f} pp (max unit Δ {self.max_unit_delta:.2f} pp)."
        )


@dataclass(frozen=True)
class UnitEncoding(BaseEntity):
    """Renderer-facing encoding of one unit; carries no drawing knowledge."""

    unit_code: str
    margin: float
    bucket: int
    fill_rgba: tuple[int, int, int, int]
    line_rgba: tuple[int, int, int, int]
    height: float


@dataclass(frozen=True)
class ElectoralTally(BaseEntity):
    """Electoral votes won per party from region winners.

    ``tipping_region`` is the region that carries the winner past the
    threshold; it is None when nobody reaches it.
    """

    gop_ev: int
    dem_ev: int
    tied_ev: int
    votes_to_win: int
    tipping_region: str | None = None
    region_winners: dict[str, str | None] = field(default_factory=dict)

    @property
    def winner(self) -> str | None:
        if self.gop_ev >= self.votes_to_win:
            return Party.GOP.value
        if self.dem_ev >= self.votes_to_win:
            return Party.DEM.value
        return None

    @property
    def tied(self) -> bool:
        return self.winner is None
