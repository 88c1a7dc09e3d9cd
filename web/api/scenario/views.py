"""Scenario API views - thin layer over services."""

from loguru import logger

from app.container import container
from app.errors import SwingError
from app.models.projection import AggregateResult, ElectoralTally
from web.api.errors import validate_cycle, validate_region

from .schemas import (
    AggregateItem,
    CyclesResponse,
    ElectoralItem,
    ScenarioRequest,
    ScenarioResponse,
    SolveRequest,
    SolveResponse,
    UnitItem,
)


def _aggregate_item(agg: AggregateResult) -> AggregateItem:
    return AggregateItem(
        region=agg.region,
        total_turnout=agg.total_turnout,
        margin=agg.turnout_weighted_margin,
        units_counted=agg.units_counted,
        units_reporting=agg.units_reporting,
        flips=agg.flips,
        has_data=agg.has_data,
    )


def _electoral_item(tally: ElectoralTally) -> ElectoralItem:
    return ElectoralItem(
        gop_ev=tally.gop_ev,
        dem_ev=tally.dem_ev,
        tied_ev=tally.tied_ev,
        tied=tally.tied,
        winner=tally.winner,
        tipping_region=tally.tipping_region,
    )


def _validate(request: ScenarioRequest) -> None:
    repo = container.baseline_repo
    validate_cycle(request.cycle, repo.get_cycles())
    validate_region(request.region, repo.get_regions())


def get_cycles() -> CyclesResponse:
    """Get available cycles and regions."""
    repo = container.baseline_repo
    cycles = repo.get_cycles()
    return CyclesResponse(
        cycles=cycles,
        regions=repo.get_regions(),
        current=cycles[-1] if cycles else None,
    )


def evaluate_scenario(request: ScenarioRequest) -> ScenarioResponse:
    """Project a scenario and encode it for rendering."""
    _validate(request)
    data = container.scenarios.evaluate(
        request.to_scenario(),
        cycle=request.cycle,
        region=request.region,
        extrusion_mode=request.extrusion_mode,
        hybrid_weight=request.hybrid_weight,
    )

    units = [
        UnitItem(
            unit_code=code,
            base_margin=res.base_margin,
            new_margin=res.new_margin,
            swing=res.swing,
            flipped=res.is_flip,
            total_votes=res.total_votes,
            bucket=data["encodings"][code].bucket,
            fill_rgba=list(data["encodings"][code].fill_rgba),
            line_rgba=list(data["encodings"][code].line_rgba),
            height=data["encodings"][code].height,
        )
        for code, res in sorted(data["units"].items())
    ]

    return ScenarioResponse(
        cycle=data["cycle"],
        active=data["active"],
        overall=_aggregate_item(data["overall"]),
        regions=[_aggregate_item(a) for a in data["regions"].values()],
        units=units,
        electoral=_electoral_item(data["electoral"]),
    )


def solve_target(request: SolveRequest) -> SolveResponse:
    """Run the targeted solver; engine errors come back as a status message."""
    _validate(request)
    try:
        result, scenario = container.scenarios.solve(
            request.to_scenario(),
            request.target_margin,
            mode=request.mode,
            cycle=request.cycle,
            region=request.region,
        )
    except SwingError as e:
        logger.warning("Solver rejected request: {}", e.message)
        return SolveResponse(ok=False, status=e.message)

    evaluated = evaluate_scenario(
        request.model_copy(
            update={
                "local_overrides": scenario.local_overrides,
                "party_delta_pp": scenario.party_delta_pp,
                "net_swing_pp": None,
            }
        )
    )
    return SolveResponse(
        ok=True,
        status=result.status,
        applied=result.applied,
        achieved_delta=result.achieved_delta,
        max_unit_delta=result.max_unit_delta,
        local_overrides=scenario.local_overrides,
        scenario=evaluated,
    )
