"""Pure math formulas - no I/O, no state, easily testable."""
from math import isfinite

import numpy as np

MARGIN_BUCKETS = (1, 5, 10, 20, 30)
MARGIN_EXTRUSION_CAP = 40.0
TURNOUT_NORM_CAP = 1.2


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def vote_shares(gop: int, dem: int, total: int) -> tuple[float, float]:
    """(gop_share, dem_share) of total turnout. Total is floored at 1."""
    t = max(1, total or 0)
    return (gop or 0) / t, (dem or 0) / t


def margin(gop_share: float, dem_share: float) -> float:
    """Signed margin in pp, positive favors GOP."""
    return (gop_share - dem_share) * 100


def shares_after_swing(
    gop_share: float, dem_share: float, gop_pp: float, dem_pp: float
) -> tuple[float, float]:
    """Additive swing, clamp each share to [0, 1], then rescale so GOP + DEM <= 1.

    Overflow is taken out of third-party share first; rescaling keeps the
    GOP:DEM ratio.
    """
    g = clamp(gop_share + gop_pp / 100, 0.0, 1.0)
    d = clamp(dem_share + dem_pp / 100, 0.0, 1.0)
    both = g + d
    if both > 1:
        scale = 1 / both
        g, d = g * scale, d * scale
    return g, d


def weighted_margin(margins: list[float], weights: list[float]) -> tuple[float, float]:
    """Weighted mean margin and total weight. Non-positive weights are skipped."""
    total = 0.0
    acc = 0.0
    for m, w in zip(margins, weights):
        if w <= 0:
            continue
        total += w
        acc += m * w
    return (acc / total if total else 0.0), total


def mean_abs_change(values: list[float]) -> float:
    if len(values) < 2:
        return 0.0
    return sum(abs(b - a) for a, b in zip(values, values[1:])) / (len(values) - 1)


def elasticity(margins: list[float], divisor: float = 5.0, lo: float = 0.5, hi: float = 3.0) -> float:
    """Historical volatility coefficient from margins in ascending cycle order.

    Fewer than two margins is neutral (1.0). More volatile units score higher.
    """
    if len(margins) < 2:
        return 1.0
    return clamp(lo + mean_abs_change(margins) / divisor, lo, hi)


def allocate_swing(weights: list[float], elasticities: list[float], delta: float) -> list[float]:
    """Per-unit margin change whose weighted mean is exactly ``delta``.

    ``weights`` are turnout shares summing to 1. Each unit moves
    ``delta * e_i / sum(w_i * e_i)``.
    """
    denom = sum(w * e for w, e in zip(weights, elasticities))
    if denom <= 0:
        denom = 1.0
    return [delta * e / denom for e in elasticities]


def margin_to_bucket(abs_margin: float) -> int:
    """Bucket 0-5 for |margin|: <1, 1-5, 5-10, 10-20, 20-30, >=30."""
    m = abs(abs_margin)
    for i, threshold in enumerate(MARGIN_BUCKETS):
        if m < threshold:
            return i
    return len(MARGIN_BUCKETS)


def margin_to_extrusion(margin_pp: float, base_height: float = 1000.0, range_height: float = 18000.0) -> float:
    """Linear ramp on |margin|, capped at 40pp."""
    mag = min(MARGIN_EXTRUSION_CAP, abs(margin_pp))
    return base_height + (mag / MARGIN_EXTRUSION_CAP) * range_height


def turnout_to_extrusion(
    total_votes: float,
    turnout_factor: float,
    p95: float,
    base_height: float = 1000.0,
    range_height: float = 18000.0,
) -> float:
    """Scaled turnout normalized to the 95th percentile, capped at 1.2x."""
    tf = clamp(turnout_factor, 0.5, 1.5)
    scaled = max(0, total_votes or 0) * tf
    norm = min(TURNOUT_NORM_CAP, scaled / p95 if p95 > 0 else 0.0)
    return base_height + norm * range_height


def hybrid_extrusion(margin_height: float, turnout_height: float, weight_pct: float) -> float:
    """Blend: weight_pct (0-100) of margin height, the rest turnout height."""
    w = clamp(weight_pct, 0, 100) / 100
    return w * margin_height + (1 - w) * turnout_height


def turnout_p95(totals: list[float]) -> float:
    """Linear-interpolated 95th percentile of positive, finite totals (floor 1)."""
    valid = [t for t in totals if isfinite(t) and t > 0]
    if not valid:
        return 1.0
    return max(1.0, float(np.percentile(valid, 95)))
