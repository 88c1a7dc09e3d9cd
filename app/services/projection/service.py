"""Projection service - scenario evaluation over the stored baseline."""

from loguru import logger

from app.models.baseline import Unit
from app.models.projection import AggregateResult, ElectoralTally, ProjectedUnitResult, SwingScenario
from app.repositories.baseline import BaselineRepository
from app.services.projection import transform
from settings.electoral import ELECTORAL_VOTES, VOTES_TO_WIN


class ProjectionService:
    """Projects one baseline cycle under a scenario and summarizes it.

    Nothing here is cached: every call recomputes from the current baseline.
    """

    def __init__(self, baseline_repo: BaselineRepository):
        self._baseline = baseline_repo
        logger.debug("ProjectionService initialized")

    def latest_cycle(self) -> int | None:
        cycles = self._baseline.get_cycles()
        return cycles[-1] if cycles else None

    def scope(self, region: str | None = None) -> list[Unit]:
        return self._baseline.get_units(region)

    def project(
        self,
        scenario: SwingScenario,
        cycle: int | None = None,
        region: str | None = None,
    ) -> dict[str, ProjectedUnitResult]:
        """Projected result per unit code for one cycle (default latest)."""
        cycle = cycle if cycle is not None else self.latest_cycle()
        if cycle is None:
            logger.warning("No baseline cycles loaded")
            return {}

        records = self._baseline.get_cycle(cycle)
        if region is not None:
            codes = {u.code for u in self.scope(region)}
            records = {c: r for c, r in records.items() if c in codes}
        return transform.project_all(records, scenario)

    def aggregate(
        self,
        scenario: SwingScenario,
        cycle: int | None = None,
        region: str | None = None,
    ) -> AggregateResult:
        """Turnout-weighted summary for a region, or all units when region is None."""
        results = self.project(scenario, cycle, region)
        return transform.aggregate(self.scope(region), results, scenario.is_active, region=region)

    def by_region(self, scenario: SwingScenario, cycle: int | None = None) -> dict[str, AggregateResult]:
        """Aggregate per parent region."""
        results = self.project(scenario, cycle)
        summary = transform.aggregate_by_region(self.scope(), results, scenario.is_active)
        logger.info("Projected {} units into {} regions", len(results), len(summary))
        return summary

    def flipped_units(
        self,
        scenario: SwingScenario,
        cycle: int | None = None,
        region: str | None = None,
    ) -> list[str]:
        """Unit codes whose leader changes under the scenario."""
        return sorted(code for code, res in self.project(scenario, cycle, region).items() if res.is_flip)

    def electoral_tally(
        self,
        scenario: SwingScenario,
        cycle: int | None = None,
        weights: dict[str, int] | None = None,
        votes_to_win: int = VOTES_TO_WIN,
    ) -> ElectoralTally:
        """Electoral votes per party from the per-region projection.

        ``weights`` maps parent region to electoral votes (default: state FIPS).
        """
        weights = ELECTORAL_VOTES if weights is None else weights
        tally = transform.electoral_tally(self.by_region(scenario, cycle), weights, votes_to_win)
        logger.info(
            "Electoral tally GOP {} / DEM {} / tied {} (tipping {})",
            tally.gop_ev,
            tally.dem_ev,
            tally.tied_ev,
            tally.tipping_region,
        )
        return tally
