"""Elasticity estimator - historical margin volatility per unit."""

from loguru import logger

from app.models.baseline import BaselineRecord
from app.repositories.baseline import BaselineRepository
from helpers import formulas
from settings import ELASTICITY_DIVISOR, ELASTICITY_MAX, ELASTICITY_MIN


def estimate_elasticity(
    unit_code: str,
    cycles_ascending: list[BaselineRecord],
    divisor: float = ELASTICITY_DIVISOR,
    lo: float = ELASTICITY_MIN,
    hi: float = ELASTICITY_MAX,
) -> float:
    """Scalar in [lo, hi]; 1.0 when fewer than two cycles have turnout.

    ``divisor`` and the bounds are tuning values.
    """
    margins = [
        formulas.margin(*formulas.vote_shares(r.gop_votes, r.dem_votes, r.total_votes))
        for r in sorted(cycles_ascending, key=lambda r: r.cycle)
        if r.unit_code == unit_code and r.total_votes > 0
    ]
    return formulas.elasticity(margins, divisor, lo, hi)


class ElasticityEstimator:
    """Memoized elasticity keyed by unit code and that unit's per-cycle returns.

    The key holds (cycle, total, gop, dem) for every cycle used, so two baselines
    that share years but differ in votes never share an entry. The memo is also
    dropped whenever the repository revision moves.
    """

    def __init__(self, baseline_repo: BaselineRepository):
        self._baseline = baseline_repo
        self._memo: dict[tuple[str, tuple[tuple[int, int, int, int], ...]], float] = {}
        self._revision = baseline_repo.revision
        logger.debug("ElasticityEstimator initialized")

    def invalidate(self) -> None:
        self._memo.clear()
        self._revision = self._baseline.revision
        logger.debug("Elasticity cache invalidated")

    def _check_revision(self) -> None:
        if self._baseline.revision != self._revision:
            self.invalidate()

    def profile(
        self,
        unit_code: str,
        baseline_by_cycle: dict[int, dict[str, BaselineRecord]] | None = None,
    ) -> float:
        """Elasticity of one unit over the given (default: all stored) cycles."""
        return self.profiles([unit_code], baseline_by_cycle)[unit_code]

    def profiles(
        self,
        unit_codes: list[str],
        baseline_by_cycle: dict[int, dict[str, BaselineRecord]] | None = None,
    ) -> dict[str, float]:
        """Elasticity for each unit code."""
        self._check_revision()
        if baseline_by_cycle is None:
            baseline_by_cycle = self._baseline.get_by_cycle()
        cycles = sorted(baseline_by_cycle)

        result = {}
        misses = 0
        for code in unit_codes:
            history = [baseline_by_cycle[c][code] for c in cycles if code in baseline_by_cycle[c]]
            key = (code, tuple((r.cycle, r.total_votes, r.gop_votes, r.dem_votes) for r in history))
            if key not in self._memo:
                self._memo[key] = estimate_elasticity(code, history)
                misses += 1
            result[code] = self._memo[key]

        if misses:
            logger.debug("Elasticity: {} computed, {} cached over cycles {}", misses, len(unit_codes) - misses, cycles)
        return result
