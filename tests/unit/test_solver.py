"""Tests for the targeted outcome solver."""

import math

import pytest

from app.errors import EmptyScopeError, InvalidTargetError
from app.models.baseline import Unit
from app.models.projection import SolverMode, SwingScenario
from app.services.elasticity import ElasticityEstimator
from app.services.projection import aggregate, project_all
from app.services.solver import TargetedOutcomeSolver, parse_target
from tests.conftest import record

# margins +25 / -25 with turnout 216 / 184 -> weighted margin exactly 2.0
PAIR = [Unit("A", "R"), Unit("B", "R")]
PAIR_BASELINE = {2024: {"A": record("A", 2024, 216, 135, 81), "B": record("B", 2024, 184, 69, 115)}}

# elasticities 0.5 / 2.5 / 1.5
TRIO = [Unit("X", "R"), Unit("Y", "R"), Unit("Z", "R")]
TRIO_BASELINE = {
    2020: {
        "X": record("X", 2020, 500, 250, 250),
        "Y": record("Y", 2020, 1000, 500, 500),
        "Z": record("Z", 2020, 2000, 1000, 1000),
    },
    2024: {
        "X": record("X", 2024, 500, 250, 250),
        "Y": record("Y", 2024, 1000, 550, 450),
        "Z": record("Z", 2024, 2000, 1000, 900),
    },
}


@pytest.fixture
def solver(repo):
    return TargetedOutcomeSolver(ElasticityEstimator(repo))


def reprojected_margin(units, baseline, scenario) -> float:
    records = baseline[max(baseline)]
    return aggregate(units, project_all(records, scenario), use_projected=True).turnout_weighted_margin


class TestParseTarget:
    def test_numeric_text(self):
        assert parse_target(" 1.5 ") == 1.5
        assert parse_target(-3) == -3.0

    @pytest.mark.parametrize("value", ["abc", "", "nan", math.nan, math.inf, "-inf"])
    def test_rejected(self, value):
        with pytest.raises(InvalidTargetError):
            parse_target(value)


class TestUniform:
    def test_every_unit_moves_by_delta(self, solver):
        result = solver.solve(PAIR, PAIR_BASELINE, SwingScenario(), 5.0, mode=SolverMode.UNIFORM)
        assert result.current_margin == 2.0
        assert result.requested_delta == 3.0
        assert result.unit_delta("A") == 3.0
        assert result.unit_delta("B") == 3.0
        assert abs(result.achieved_delta - 3.0) < 1e-12
        assert result.max_unit_delta == 3.0

    def test_split_between_parties(self, solver):
        result = solver.solve(PAIR, PAIR_BASELINE, SwingScenario(), 5.0, mode="uniform")
        swing = result.per_unit_local_swing["A"]
        assert swing.gop_pp == 1.5
        assert swing.dem_pp == -1.5

    def test_global_delta_counts_toward_current(self, solver):
        result = solver.solve(PAIR, PAIR_BASELINE, SwingScenario.linked(2), 5.0, mode=SolverMode.UNIFORM)
        assert abs(result.current_margin - 4.0) < 1e-9
        assert abs(result.requested_delta - 1.0) < 1e-9

    def test_local_overrides_ignored(self, solver):
        plain = solver.solve(PAIR, PAIR_BASELINE, SwingScenario(), 5.0, mode=SolverMode.UNIFORM)
        overridden = solver.solve(
            PAIR,
            PAIR_BASELINE,
            SwingScenario(local_overrides={"A": {"GOP": 12.0, "DEM": -12.0}}),
            5.0,
            mode=SolverMode.UNIFORM,
        )
        assert overridden.per_unit_local_swing == plain.per_unit_local_swing


class TestElastic:
    def test_weighted_mean_matches_delta(self, solver):
        result = solver.solve(TRIO, TRIO_BASELINE, SwingScenario(), 1.0)
        weights = {"X": 500 / 3500, "Y": 1000 / 3500, "Z": 2000 / 3500}
        achieved = sum(weights[c] * result.unit_delta(c) for c in weights)
        assert abs(achieved - result.requested_delta) < 1e-9
        assert abs(result.achieved_delta - result.requested_delta) < 1e-9

    def test_volatile_units_move_more(self, solver):
        result = solver.solve(TRIO, TRIO_BASELINE, SwingScenario(), 1.0)
        x, y, z = (abs(result.unit_delta(c)) for c in "XYZ")
        assert y > z > x
        assert abs(y / x - 5.0) < 1e-9
        assert result.max_unit_delta == y

    def test_applying_allocation_hits_target(self, solver):
        result = solver.solve(TRIO, TRIO_BASELINE, SwingScenario(), 1.0)
        scenario = SwingScenario().with_local_overrides(result.as_local_overrides())
        assert abs(reprojected_margin(TRIO, TRIO_BASELINE, scenario) - 1.0) < 1e-9

    def test_applying_on_top_of_global_delta(self, solver):
        base = SwingScenario.linked(-3)
        result = solver.solve(TRIO, TRIO_BASELINE, base, 2.5)
        scenario = base.with_local_overrides(result.as_local_overrides())
        assert abs(reprojected_margin(TRIO, TRIO_BASELINE, scenario) - 2.5) < 1e-9

    def test_explicit_base_cycle(self, solver):
        # 2020 margins are all 0
        result = solver.solve(TRIO, TRIO_BASELINE, SwingScenario(), 2.0, base_cycle=2020)
        assert result.current_margin == 0.0
        assert result.requested_delta == 2.0

    def test_solver_reused_across_baselines(self, repo):
        units = [Unit("A", "R"), Unit("B", "R")]
        volatile = {
            2020: {"A": record("A", 2020, 100, 50, 50), "B": record("B", 2020, 100, 50, 50)},
            2024: {"A": record("A", 2024, 100, 70, 30), "B": record("B", 2024, 100, 50, 50)},
        }
        stable = {
            2020: {"A": record("A", 2020, 100, 70, 30), "B": record("B", 2020, 100, 50, 50)},
            2024: {"A": record("A", 2024, 100, 70, 30), "B": record("B", 2024, 100, 50, 50)},
        }
        solver = TargetedOutcomeSolver(ElasticityEstimator(repo))
        first = solver.solve(units, volatile, SwingScenario(), 25.0)
        assert first.per_unit_local_swing["A"].gop_pp > first.per_unit_local_swing["B"].gop_pp

        reused = solver.solve(units, stable, SwingScenario(), 25.0)
        fresh = TargetedOutcomeSolver(ElasticityEstimator(repo)).solve(units, stable, SwingScenario(), 25.0)
        assert reused.per_unit_local_swing == fresh.per_unit_local_swing
        assert abs(reused.per_unit_local_swing["A"].gop_pp - 2.5) < 1e-9
        assert abs(reused.per_unit_local_swing["B"].gop_pp - 2.5) < 1e-9


class TestPreconditions:
    def test_noop_within_tolerance(self, solver):
        result = solver.solve(PAIR, PAIR_BASELINE, SwingScenario(), 2.03)
        assert not result.applied
        assert result.per_unit_local_swing == {}
        assert result.unit_delta("A") == 0.0
        assert result.status.startswith("Already within")

    def test_empty_scope(self, solver):
        with pytest.raises(EmptyScopeError):
            solver.solve([], PAIR_BASELINE, SwingScenario(), 5.0)

    def test_scope_without_records(self, solver):
        with pytest.raises(EmptyScopeError):
            solver.solve([Unit("Q", "R")], PAIR_BASELINE, SwingScenario(), 5.0)

    def test_zero_turnout_scope(self, solver, seeded_repo):
        units = seeded_repo.get_units("55")
        baseline = seeded_repo.get_by_cycle([2016])
        with pytest.raises(EmptyScopeError):
            solver.solve([u for u in units if u.code == "55003"], baseline, SwingScenario(), 5.0)

    def test_no_baseline(self, solver):
        with pytest.raises(EmptyScopeError):
            solver.solve(PAIR, {}, SwingScenario(), 5.0)

    def test_invalid_target_checked_first(self, solver):
        with pytest.raises(InvalidTargetError):
            solver.solve([], {}, SwingScenario(), "abc")

    def test_applied_status(self, solver):
        result = solver.solve(PAIR, PAIR_BASELINE, SwingScenario(), 5.0, mode=SolverMode.UNIFORM)
        assert result.status.startswith("Uniform distribution")
