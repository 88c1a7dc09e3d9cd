"""Tests for the scenario API views wired through the container."""

import pytest

from app.container import container
from app.repositories import BaselineRepository, memory_connection
from web.api.errors import NotFoundError, ValidationError
from web.api.scenario import evaluate_scenario, get_cycles, solve_target
from web.api.scenario.schemas import ScenarioRequest, SolveRequest


@pytest.fixture
def api(seeded_repo):
    container.reset()
    container.init(baseline_repo=seeded_repo)
    yield container
    container.reset()


class TestCycles:
    def test_cycles(self, api):
        resp = get_cycles()
        assert resp.cycles == [2016, 2020, 2024]
        assert resp.regions == ["19", "55"]
        assert resp.current == 2024


class TestEvaluate:
    def test_baseline(self, api):
        resp = evaluate_scenario(ScenarioRequest())
        assert resp.cycle == 2024
        assert not resp.active
        assert [u.unit_code for u in resp.units] == ["19001", "19003", "55001", "55003"]
        assert resp.overall.total_turnout == 4700
        assert [r.region for r in resp.regions] == ["19", "55"]
        assert all(u.swing == 0 for u in resp.units)
        assert (resp.electoral.gop_ev, resp.electoral.dem_ev) == (6, 10)
        assert resp.electoral.tied
        assert resp.electoral.winner is None

    def test_net_swing(self, api):
        base = evaluate_scenario(ScenarioRequest()).overall.margin
        resp = evaluate_scenario(ScenarioRequest(net_swing_pp=-10, extrusion_mode="turnout"))
        assert resp.active
        assert abs(resp.overall.margin - (base - 10)) < 1e-9
        assert resp.overall.flips == 1
        flipped = [u.unit_code for u in resp.units if u.flipped]
        assert flipped == ["55001"]
        assert len(resp.units[0].fill_rgba) == 4

    def test_region_and_cycle(self, api):
        resp = evaluate_scenario(ScenarioRequest(cycle=2016, region="55"))
        # tally always covers every region
        assert resp.electoral.gop_ev == 6
        assert resp.cycle == 2016
        assert [r.region for r in resp.regions] == ["55"]
        assert resp.overall.units_reporting == 1
        assert resp.overall.total_turnout == 2000

    def test_cycle_out_of_range(self, api):
        with pytest.raises(ValidationError):
            evaluate_scenario(ScenarioRequest(cycle=1800))

    def test_cycle_not_loaded(self, api):
        with pytest.raises(NotFoundError):
            evaluate_scenario(ScenarioRequest(cycle=2012))

    def test_unknown_region(self, api):
        with pytest.raises(NotFoundError):
            evaluate_scenario(ScenarioRequest(region="99"))


class TestSolve:
    def test_invalid_target(self, api):
        resp = solve_target(SolveRequest(target_margin="abc"))
        assert not resp.ok
        assert "numeric" in resp.status
        assert resp.scenario is None

    def test_uniform_region_target(self, api):
        resp = solve_target(SolveRequest(target_margin="0", region="19", mode="uniform"))
        assert resp.ok and resp.applied
        assert abs(resp.achieved_delta + 8.75) < 1e-9
        assert set(resp.local_overrides) == {"19001", "19003"}
        assert abs(resp.scenario.overall.margin) < 1e-9

    def test_elastic_target(self, api):
        resp = solve_target(SolveRequest(target_margin=1.0, net_swing_pp=2))
        assert resp.ok
        assert abs(resp.scenario.overall.margin - 1.0) < 1e-9
        assert resp.status.startswith("Elastic distribution")

    def test_noop_clears_overrides(self, api):
        current = evaluate_scenario(ScenarioRequest()).overall.margin
        resp = solve_target(
            SolveRequest(target_margin=current + 0.01, local_overrides={"19001": {"GOP": 5.0}})
        )
        assert resp.ok and not resp.applied
        assert resp.local_overrides == {}
        assert not resp.scenario.active


class TestContainer:
    def test_reset_keeps_instances_until_init(self, seeded_repo):
        conn = memory_connection()
        other = BaselineRepository(conn=conn)
        try:
            container.reset()
            container.init(baseline_repo=seeded_repo)
            container.reset()
            assert container.baseline_repo is seeded_repo
            container.init(baseline_repo=other)
            assert container.baseline_repo is other
            assert get_cycles().cycles == []
        finally:
            container.reset()
            conn.close()
