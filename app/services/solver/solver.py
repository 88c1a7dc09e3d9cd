"""Targeted outcome solver - per-unit swings that hit an aggregate margin."""

from math import isfinite

from loguru import logger

from app.errors import EmptyScopeError, InvalidTargetError
from app.models.baseline import BaselineRecord, Unit
from app.models.projection import LocalSwing, SolverMode, SolverResult, SwingScenario
from app.services.elasticity import ElasticityEstimator
from app.services.projection.transform import aggregate, project_all
from helpers import formulas
from settings import SOLVER_TOLERANCE_PP


def parse_target(value: float | int | str) -> float:
    """Target margin in pp from a number or numeric text."""
    try:
        target = float(str(value).strip())
    except (TypeError, ValueError):
        raise InvalidTargetError(f"Enter a numeric target margin in pp (e.g. 1.5), got {value!r}") from None
    if not isfinite(target):
        raise InvalidTargetError(f"Target margin must be finite, got {value!r}")
    return target


class TargetedOutcomeSolver:
    """Closed-form proportional allocation of a margin shift across a scope.

    Each unit moves ``delta * e_i / sum(w_i * e_i)`` where ``w_i`` is its turnout
    share and ``e_i`` its elasticity (1 in uniform mode), so the turnout-weighted
    mean of unit moves equals ``delta``. The move is split evenly between the two
    major parties; minor-party share is not reallocated.
    """

    def __init__(self, estimator: ElasticityEstimator, tolerance: float = SOLVER_TOLERANCE_PP):
        self._estimator = estimator
        self._tolerance = tolerance
        logger.debug("TargetedOutcomeSolver initialized")

    def solve(
        self,
        scope: list[Unit],
        baseline_by_cycle: dict[int, dict[str, BaselineRecord]],
        current_scenario: SwingScenario,
        target_margin: float | str,
        mode: SolverMode | str = SolverMode.ELASTIC,
        base_cycle: int | None = None,
    ) -> SolverResult:
        """Allocation moving the scope's margin to ``target_margin``.

        Raises InvalidTargetError for a non-finite target and EmptyScopeError when
        the scope has no turnout in the base cycle.
        """
        target = parse_target(target_margin)
        mode = SolverMode(mode)

        if base_cycle is None:
            base_cycle = max(baseline_by_cycle) if baseline_by_cycle else None
        cycle_records = baseline_by_cycle.get(base_cycle, {}) if base_cycle is not None else {}
        records = {u.code: cycle_records[u.code] for u in scope if u.code in cycle_records}
        total = sum(max(0, r.total_votes) for r in records.values())
        if not records or total <= 0:
            raise EmptyScopeError(f"No baseline turnout for {len(scope)} units in cycle {base_cycle}")

        no_local = current_scenario.without_local_overrides()
        current = aggregate(
            scope, project_all(records, no_local), use_projected=no_local.has_global_delta
        ).turnout_weighted_margin
        delta = target - current

        if abs(delta) < self._tolerance:
            logger.info("Already within {:.2f} pp of target {:.2f}; no allocation", delta, target)
            return SolverResult(
                per_unit_local_swing={},
                achieved_delta=0.0,
                max_unit_delta=0.0,
                requested_delta=delta,
                current_margin=current,
                target_margin=target,
                mode=mode,
                applied=False,
            )

        codes = list(records)
        weights = [max(0, records[c].total_votes) / total for c in codes]
        if mode == SolverMode.ELASTIC:
            profile = self._estimator.profiles(codes, baseline_by_cycle)
            elasticities = [profile[c] for c in codes]
            unit_deltas = formulas.allocate_swing(weights, elasticities, delta)
        else:
            # sum(w_i) == 1, so every unit moves by exactly delta
            unit_deltas = [delta] * len(codes)
        local = {c: LocalSwing(dem_pp=-d / 2, gop_pp=d / 2) for c, d in zip(codes, unit_deltas)}
        achieved = sum(w * d for w, d in zip(weights, unit_deltas))
        max_abs = max(abs(d) for d in unit_deltas)

        logger.info(
            "{} solve: {:.2f} -> {:.2f} pp over {} units (max unit Δ {:.2f} pp)",
            mode.value,
            current,
            target,
            len(codes),
            max_abs,
        )
        return SolverResult(
            per_unit_local_swing=local,
            achieved_delta=achieved,
            max_unit_delta=max_abs,
            requested_delta=delta,
            current_margin=current,
            target_margin=target,
            mode=mode,
            applied=True,
        )
