"""Scenario API request/response schemas."""

from pydantic import BaseModel, Field

from app.models.projection import ExtrusionMode, SolverMode, SwingScenario


class ScenarioRequest(BaseModel):
    """Scenario as built by the UI controls.

    ``net_swing_pp`` (linked sliders) overrides ``party_delta_pp`` when set.
    """

    party_delta_pp: dict[str, float] = {}
    local_overrides: dict[str, dict[str, float]] = {}
    turnout_shift_pct: float = 0.0
    net_swing_pp: float | None = None
    cycle: int | None = None
    region: str | None = None
    extrusion_mode: ExtrusionMode = ExtrusionMode.MARGIN
    hybrid_weight: float = Field(default=50.0, ge=0, le=100)

    def to_scenario(self) -> SwingScenario:
        if self.net_swing_pp is not None:
            base = SwingScenario.linked(self.net_swing_pp, self.turnout_shift_pct)
        else:
            base = SwingScenario(
                party_delta_pp=dict(self.party_delta_pp),
                turnout_shift_pct=self.turnout_shift_pct,
            )
        return base.with_local_overrides(self.local_overrides)


class SolveRequest(ScenarioRequest):
    """Targeted outcome request. Target is kept raw so bad input can be reported."""

    target_margin: float | str
    mode: SolverMode = SolverMode.ELASTIC


class UnitItem(BaseModel):
    """Projected unit with its visual encoding."""

    unit_code: str
    base_margin: float
    new_margin: float
    swing: float
    flipped: bool
    total_votes: int
    bucket: int
    fill_rgba: list[int]
    line_rgba: list[int]
    height: float


class AggregateItem(BaseModel):
    """Aggregate for a region or overall."""

    region: str | None
    total_turnout: int
    margin: float
    units_counted: int
    units_reporting: int
    flips: int
    has_data: bool


class ElectoralItem(BaseModel):
    """Electoral votes over all regions, regardless of the requested region."""

    gop_ev: int
    dem_ev: int
    tied_ev: int
    tied: bool
    winner: str | None
    tipping_region: str | None


class ScenarioResponse(BaseModel):
    """Evaluated scenario."""

    cycle: int | None
    active: bool
    overall: AggregateItem
    regions: list[AggregateItem]
    units: list[UnitItem]
    electoral: ElectoralItem


class SolveResponse(BaseModel):
    """Solver outcome; ``ok`` is False when the request could not be solved."""

    ok: bool
    status: str
    applied: bool = False
    achieved_delta: float = 0.0
    max_unit_delta: float = 0.0
    local_overrides: dict[str, dict[str, float]] = {}
    scenario: ScenarioResponse | None = None


class CyclesResponse(BaseModel):
    """Available baseline cycles and regions."""

    cycles: list[int]
    regions: list[str]
    current: int | None
