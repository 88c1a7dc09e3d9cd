"""Scenario service - evaluation and targeted solving for the rendering layer."""

from loguru import logger

from app.models.projection import ExtrusionMode, SolverMode, SolverResult, SwingScenario
from app.repositories.baseline import BaselineRepository
from app.services.encoding import VisualEncodingMapper
from app.services.projection import ProjectionService
from app.services.solver import TargetedOutcomeSolver


class ScenarioService:
    """Single entry point the caller invokes whenever its inputs change."""

    def __init__(
        self,
        baseline_repo: BaselineRepository,
        projection: ProjectionService,
        solver: TargetedOutcomeSolver,
        encoder: VisualEncodingMapper,
    ):
        self._baseline = baseline_repo
        self._projection = projection
        self._solver = solver
        self._encoder = encoder
        logger.debug("ScenarioService initialized")

    def evaluate(
        self,
        scenario: SwingScenario,
        cycle: int | None = None,
        region: str | None = None,
        extrusion_mode: ExtrusionMode = ExtrusionMode.MARGIN,
        hybrid_weight: float = 50.0,
    ) -> dict:
        """Units with encodings, aggregates and the electoral tally for one scenario."""
        cycle = cycle if cycle is not None else self._projection.latest_cycle()
        results = self._projection.project(scenario, cycle, region)
        encodings = self._encoder.encode(results, scenario, extrusion_mode, hybrid_weight)
        regions = self._projection.by_region(scenario, cycle)
        if region is not None:
            regions = {k: v for k, v in regions.items() if k == region}
        overall = self._projection.aggregate(scenario, cycle, region)
        electoral = self._projection.electoral_tally(scenario, cycle)

        logger.info(
            "Evaluated cycle {} ({} units): margin {:.2f} pp, {} flips",
            cycle,
            len(results),
            overall.turnout_weighted_margin,
            overall.flips,
        )
        return {
            "cycle": cycle,
            "active": scenario.is_active,
            "units": results,
            "encodings": encodings,
            "regions": regions,
            "overall": overall,
            "electoral": electoral,
        }

    def solve(
        self,
        scenario: SwingScenario,
        target_margin: float | str,
        mode: SolverMode | str = SolverMode.ELASTIC,
        cycle: int | None = None,
        region: str | None = None,
    ) -> tuple[SolverResult, SwingScenario]:
        """Solve for a target and return the scenario with the allocation applied.

        Prior local overrides are replaced; a no-op solve clears them. Engine
        errors propagate to the caller.
        """
        cycle = cycle if cycle is not None else self._projection.latest_cycle()
        result = self._solver.solve(
            scope=self._projection.scope(region),
            baseline_by_cycle=self._baseline.get_by_cycle(),
            current_scenario=scenario,
            target_margin=target_margin,
            mode=mode,
            base_cycle=cycle,
        )
        return result, scenario.with_local_overrides(result.as_local_overrides())
