"""Tests for visual encoding."""

from app.models.projection import ExtrusionMode, ProjectedUnitResult, SwingScenario
from app.services.encoding import VisualEncodingMapper, hex_to_rgba, margin_color, swing_halo_color


def result(code: str, margin: float, new_margin: float, total: int) -> ProjectedUnitResult:
    return ProjectedUnitResult(
        unit_code=code,
        base_margin=margin,
        new_margin=new_margin,
        base_shares={},
        new_shares={},
        total_votes=total,
    )


class TestColors:
    def test_hex(self):
        assert hex_to_rgba("#E03B2F") == (224, 59, 47, 235)
        assert hex_to_rgba("#fff", 10) == (255, 255, 255, 10)

    def test_bad_hex_is_neutral(self):
        assert hex_to_rgba("#zzzzzz", 100) == (100, 116, 139, 100)

    def test_margin_color_by_side_and_bucket(self):
        assert margin_color(12) == (224, 59, 47, 235)
        assert margin_color(-0.5) == (183, 200, 255, 235)
        assert margin_color(-45, alpha=90) == (0, 30, 92, 90)

    def test_tie_uses_gop_palette(self):
        assert margin_color(0) == hex_to_rgba("#FFC4C4")

    def test_halo(self):
        assert swing_halo_color(8, active=False) == (255, 255, 255, 180)
        assert swing_halo_color(3, active=True) == (220, 38, 38, 150)
        assert swing_halo_color(-20, active=True) == (37, 99, 235, 220)


class TestVisualEncodingMapper:
    mapper = VisualEncodingMapper()

    def test_height_modes(self):
        assert self.mapper.height(-20, 500, 1.0, 1000, ExtrusionMode.MARGIN) == 10000
        assert self.mapper.height(-20, 500, 1.0, 1000, ExtrusionMode.TURNOUT) == 10000
        assert self.mapper.height(40, 0, 1.0, 1000, ExtrusionMode.HYBRID, hybrid_weight=25) == 5500

    def test_custom_heights(self):
        assert VisualEncodingMapper(base_height=0, range_height=100).margin_to_extrusion(20) == 50

    def test_encode_inactive_uses_baseline(self):
        results = {"A": result("A", 12, -3, 100)}
        enc = self.mapper.encode(results, SwingScenario())["A"]
        assert enc.margin == 12
        assert enc.bucket == 3
        assert enc.fill_rgba == margin_color(12)
        assert enc.line_rgba == (255, 255, 255, 180)

    def test_encode_active_uses_projection(self):
        results = {"A": result("A", 12, -3, 100)}
        enc = self.mapper.encode(results, SwingScenario.linked(-15))["A"]
        assert enc.margin == -3
        assert enc.bucket == 1
        assert enc.line_rgba == (37, 99, 235, 220)

    def test_encode_turnout_scaled_by_p95(self):
        results = {c: result(c, 5, 5, t) for c, t in zip("ABCDE", [10, 20, 30, 40, 50])}
        enc = self.mapper.encode(results, SwingScenario(turnout_shift_pct=20), mode="turnout")
        # p95 = 48, factor 1.2
        assert abs(enc["C"].height - (1000 + 30 * 1.2 / 48 * 18000)) < 1e-6
        assert enc["E"].height == 1000 + 1.2 * 18000

    def test_alpha_clamped(self):
        enc = self.mapper.encode({"A": result("A", 2, 2, 10)}, SwingScenario(), alpha=5)
        assert enc["A"].fill_rgba[3] == 30

    def test_empty(self):
        assert self.mapper.encode({}, SwingScenario()) == {}
