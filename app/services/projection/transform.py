"""Swing transform and aggregation over domain entities. Pure, never raises."""

from collections import defaultdict

from app.models.baseline import BaselineRecord, Party, Unit
from app.models.projection import AggregateResult, ElectoralTally, ProjectedUnitResult, SwingScenario
from helpers import formulas
from settings.electoral import TIE_MARGIN_PP


def project(record: BaselineRecord, scenario: SwingScenario) -> ProjectedUnitResult:
    """Apply a scenario to one unit's baseline.

    A unit with no turnout is not yet reporting: zero margins and shares.
    """
    if record.total_votes <= 0:
        zero = {Party.GOP.value: 0.0, Party.DEM.value: 0.0}
        return ProjectedUnitResult(
            unit_code=record.unit_code,
            base_margin=0.0,
            new_margin=0.0,
            base_shares=dict(zero),
            new_shares=dict(zero),
            total_votes=0,
        )

    g0, d0 = formulas.vote_shares(record.gop_votes, record.dem_votes, record.total_votes)
    g, d = formulas.shares_after_swing(
        g0,
        d0,
        scenario.delta_for(record.unit_code, Party.GOP),
        scenario.delta_for(record.unit_code, Party.DEM),
    )
    return ProjectedUnitResult(
        unit_code=record.unit_code,
        base_margin=formulas.margin(g0, d0),
        new_margin=formulas.margin(g, d),
        base_shares={Party.GOP.value: g0, Party.DEM.value: d0},
        new_shares={Party.GOP.value: g, Party.DEM.value: d},
        total_votes=record.total_votes,
    )


def project_all(records: dict[str, BaselineRecord], scenario: SwingScenario) -> dict[str, ProjectedUnitResult]:
    return {code: project(rec, scenario) for code, rec in records.items()}


def aggregate(
    units: list[Unit],
    results: dict[str, ProjectedUnitResult],
    use_projected: bool,
    region: str | None = None,
) -> AggregateResult:
    """Turnout-weighted margin over ``units``.

    Units without a result or with zero turnout carry no weight. An empty scope
    yields margin 0 and turnout 0, which callers read as "no data".
    """
    margins, weights = [], []
    counted = flips = 0
    for unit in units:
        res = results.get(unit.code)
        if res is None:
            continue
        counted += 1
        flips += res.is_flip
        margins.append(res.margin(use_projected))
        weights.append(max(0, res.total_votes))

    weighted, total = formulas.weighted_margin(margins, weights)
    return AggregateResult(
        total_turnout=int(total),
        turnout_weighted_margin=weighted,
        units_counted=counted,
        units_reporting=sum(1 for w in weights if w > 0),
        flips=flips,
        region=region,
    )


def aggregate_by_region(
    units: list[Unit],
    results: dict[str, ProjectedUnitResult],
    use_projected: bool,
) -> dict[str, AggregateResult]:
    """One aggregate per parent region."""
    by_region: dict[str, list[Unit]] = defaultdict(list)
    for unit in units:
        by_region[unit.parent_region].append(unit)
    return {
        region: aggregate(members, results, use_projected, region=region)
        for region, members in sorted(by_region.items())
    }


def region_winner(margin: float, tie_margin: float = TIE_MARGIN_PP) -> str | None:
    if margin > tie_margin:
        return Party.GOP.value
    if margin < -tie_margin:
        return Party.DEM.value
    return None


def electoral_tally(
    regions: dict[str, AggregateResult],
    weights: dict[str, int],
    votes_to_win: int,
) -> ElectoralTally:
    """Award each weighted region's votes to the party leading its aggregate.

    Regions missing from ``regions`` or without turnout count as tied. The
    tipping region is found by walking the winner's regions from safest to
    closest until its running total reaches ``votes_to_win``.
    """
    margins: dict[str, float] = {}
    for region in weights:
        agg = regions.get(region)
        margins[region] = agg.turnout_weighted_margin if agg is not None and agg.has_data else 0.0

    winners = {region: region_winner(m) for region, m in margins.items()}
    totals = {Party.GOP.value: 0, Party.DEM.value: 0}
    tied_ev = 0
    for region, party in winners.items():
        if party is None:
            tied_ev += weights[region]
        else:
            totals[party] += weights[region]

    tipping = None
    leader = next((p for p in totals if totals[p] >= votes_to_win), None)
    if leader is not None:
        # safest first: GOP by margin descending, DEM ascending
        sign = 1 if leader == Party.GOP.value else -1
        running = 0
        for region in sorted((r for r, p in winners.items() if p == leader), key=lambda r: -sign * margins[r]):
            running += weights[region]
            if running >= votes_to_win:
                tipping = region
                break

    return ElectoralTally(
        gop_ev=totals[Party.GOP.value],
        dem_ev=totals[Party.DEM.value],
        tied_ev=tied_ev,
        votes_to_win=votes_to_win,
        tipping_region=tipping,
        region_winners=winners,
    )
