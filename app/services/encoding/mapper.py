"""Visual encoding - margin/turnout to color bucket, color and extrusion height."""

from math import isfinite

from loguru import logger

from app.models.projection import ExtrusionMode, ProjectedUnitResult, SwingScenario, UnitEncoding
from helpers import formulas
from settings import BASE_HEIGHT, RANGE_HEIGHT

# Six bins: <1, 1-5, 5-10, 10-20, 20-30, 30+
GOP_PALETTE = ("#FFC4C4", "#FFA0A0", "#FF7070", "#E03B2F", "#B51400", "#730900")
DEM_PALETTE = ("#B7C8FF", "#8FAEFF", "#5D90FF", "#2D6BFF", "#0047D6", "#001E5C")
NEUTRAL = (100, 116, 139)
DEFAULT_ALPHA = 235

RGBA = tuple[int, int, int, int]


def hex_to_rgba(h: str, alpha: int = DEFAULT_ALPHA) -> RGBA:
    """'#RRGGBB' or '#RGB' to an RGBA tuple; neutral slate on bad input."""
    s = h.lstrip("#")
    if len(s) == 3:
        s = "".join(c * 2 for c in s)
    try:
        n = int(s, 16)
    except ValueError:
        return (*NEUTRAL, alpha)
    return ((n >> 16) & 255, (n >> 8) & 255, n & 255, alpha)


def margin_color(margin_pp: float, alpha: int = DEFAULT_ALPHA) -> RGBA:
    """GOP palette for margin >= 0, DEM palette otherwise, shade by bucket."""
    if not isfinite(margin_pp):
        return (*NEUTRAL, alpha)
    palette = GOP_PALETTE if margin_pp >= 0 else DEM_PALETTE
    return hex_to_rgba(palette[formulas.margin_to_bucket(abs(margin_pp))], alpha)


def swing_halo_color(swing_pp: float, active: bool) -> RGBA:
    """Outline showing direction and size of the swing."""
    if not active:
        return (255, 255, 255, 180)
    a = 120 + round(min(100, abs(swing_pp) * 10))
    return (220, 38, 38, a) if swing_pp >= 0 else (37, 99, 235, a)


class VisualEncodingMapper:
    """Maps projected unit results to bucket, colors and extrusion height."""

    def __init__(self, base_height: float = BASE_HEIGHT, range_height: float = RANGE_HEIGHT):
        self._base = base_height
        self._range = range_height

    def margin_to_bucket(self, abs_margin: float) -> int:
        return formulas.margin_to_bucket(abs_margin)

    def margin_to_extrusion(self, margin_pp: float) -> float:
        return formulas.margin_to_extrusion(margin_pp, self._base, self._range)

    def turnout_to_extrusion(self, total_votes: float, turnout_factor: float, p95: float) -> float:
        return formulas.turnout_to_extrusion(total_votes, turnout_factor, p95, self._base, self._range)

    def height(
        self,
        margin_pp: float,
        total_votes: float,
        turnout_factor: float,
        p95: float,
        mode: ExtrusionMode = ExtrusionMode.MARGIN,
        hybrid_weight: float = 50.0,
    ) -> float:
        """Extrusion height for the selected mode."""
        if mode == ExtrusionMode.MARGIN:
            return self.margin_to_extrusion(margin_pp)
        turnout_h = self.turnout_to_extrusion(total_votes, turnout_factor, p95)
        if mode == ExtrusionMode.TURNOUT:
            return turnout_h
        return formulas.hybrid_extrusion(self.margin_to_extrusion(margin_pp), turnout_h, hybrid_weight)

    def encode(
        self,
        results: dict[str, ProjectedUnitResult],
        scenario: SwingScenario,
        mode: ExtrusionMode = ExtrusionMode.MARGIN,
        hybrid_weight: float = 50.0,
        alpha: int = DEFAULT_ALPHA,
    ) -> dict[str, UnitEncoding]:
        """Encode every unit; p95 is taken over the units being encoded."""
        mode = ExtrusionMode(mode)
        active = scenario.is_active
        p95 = formulas.turnout_p95([r.total_votes for r in results.values()])
        alpha = int(formulas.clamp(alpha, 30, 255))

        encoded = {}
        for code, res in results.items():
            m = res.margin(active)
            encoded[code] = UnitEncoding(
                unit_code=code,
                margin=m,
                bucket=self.margin_to_bucket(abs(m)),
                fill_rgba=margin_color(m, alpha),
                line_rgba=swing_halo_color(res.swing, active),
                height=self.height(m, res.total_votes, scenario.turnout_factor, p95, mode, hybrid_weight),
            )
        logger.debug("Encoded {} units (mode={}, p95={:.0f})", len(encoded), mode.value, p95)
        return encoded
