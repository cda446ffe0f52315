"""Renderer drawing, checked against a recording stand-in for dearpygui."""

import math

import pytest

from layout import LabelSide, MIN_ARROW_LINEAR, MIN_ARROW_VERTICAL
from renderer import C_FRICTION, C_NORMAL, C_WHITE, ForceArrow, arc_points, tint


def _length(p0, p1):
    return math.hypot(p1[0] - p0[0], p1[1] - p0[1])


class TestForceArrow:

    def test_halo_then_colored_shaft_then_head(self, canvas, fake_dpg):
        canvas.draw_force_arrow((100, 100), (300, 100), C_FRICTION, "Ff = 9.8 N", LabelSide.RIGHT)
        names = [c[0] for c in fake_dpg.calls]
        assert names[:3] == ["draw_line", "draw_line", "draw_triangle"]
        halo, shaft = fake_dpg.named("draw_line")
        assert halo[2]["color"] == C_WHITE and halo[2]["thickness"] == 7
        assert shaft[2]["color"] == C_FRICTION and shaft[2]["thickness"] == 5
        assert all(c[2]["parent"] == "test_canvas" for c in fake_dpg.calls)

    def test_head_points_along_shaft(self, canvas, fake_dpg):
        canvas.draw_force_arrow((100, 100), (100, 300), C_NORMAL, "W", LabelSide.BELOW)
        tip, p1, p2 = fake_dpg.named("draw_triangle")[0][1]
        assert tip == pytest.approx((100, 300))
        # both back corners sit above the tip for a downward arrow
        assert p1[1] < 300 and p2[1] < 300
        assert p1[0] + p2[0] == pytest.approx(200)

    def test_short_arrow_is_stretched_to_floor(self, canvas, fake_dpg):
        canvas.draw_force_arrow((100, 100), (100, 90), C_NORMAL, "N = 4.0 N", LabelSide.ABOVE,
                                MIN_ARROW_VERTICAL)
        p0, p1 = fake_dpg.named("draw_line")[1][1]
        assert _length(p0, p1) == pytest.approx(MIN_ARROW_VERTICAL)
        assert p1[0] == pytest.approx(100)
        assert p1[1] < 100

    def test_zero_arrow_draws_only_its_label(self, canvas, fake_dpg):
        placed = canvas.draw_force_arrow((50, 50), (50, 50), C_NORMAL, "N = 0.0 N", LabelSide.ABOVE)
        assert fake_dpg.named("draw_line") == []
        assert fake_dpg.named("draw_triangle") == []
        assert len(fake_dpg.named("draw_rectangle")) == 1
        assert placed.rect.bottom == pytest.approx(30)

    def test_label_box_uses_tinted_fill(self, canvas, fake_dpg):
        placed = canvas.draw_force_arrow((0, 0), (200, 0), C_FRICTION, "abc", LabelSide.RIGHT)
        rect = fake_dpg.named("draw_rectangle")[0]
        assert rect[2]["fill"] == tint(C_FRICTION)
        assert rect[1] == ((placed.rect.x, placed.rect.y), (placed.rect.right, placed.rect.bottom))
        text = fake_dpg.named("draw_text")[0]
        assert text[1][1] == "abc"

    def test_labels_avoid_each_other_within_a_frame(self, canvas):
        arrows = [
            ForceArrow("first", 100, 300, 100, 100, C_NORMAL, LabelSide.ABOVE),
            ForceArrow("second", 100, 300, 100, 100, C_NORMAL, LabelSide.ABOVE),
        ]
        a, b = canvas.draw_arrows(arrows)
        assert a.nudges == 0
        assert not a.rect.overlaps(b.rect)

    def test_begin_frame_resets_label_set(self, canvas, fake_dpg):
        canvas.draw_force_arrow((0, 0), (200, 0), C_FRICTION, "x", LabelSide.RIGHT)
        canvas.begin_frame()
        assert len(canvas.labels) == 0
        assert fake_dpg.calls[-1][0] == "delete_item"
        placed = canvas.draw_force_arrow((0, 0), (200, 0), C_FRICTION, "x", LabelSide.RIGHT)
        assert placed.nudges == 0

    def test_arrow_record_is_drawn_with_its_floor(self, canvas, fake_dpg):
        short = ForceArrow("f", 100, 100, 110, 100, C_FRICTION, LabelSide.RIGHT)
        canvas.draw_arrows([short])
        p0, p1 = fake_dpg.named("draw_line")[1][1]
        assert _length(p0, p1) == pytest.approx(MIN_ARROW_LINEAR)
        assert fake_dpg.named("draw_line")[1][2]["color"] == C_FRICTION
        assert fake_dpg.named("draw_text")[0][1][1] == "f"


class TestDashes:

    def test_dash_pattern(self, canvas, fake_dpg):
        canvas.draw_dashed_path([(0, 0), (30, 0)], dash=10, gap=5)
        segs = [c[1] for c in fake_dpg.named("draw_line")]
        assert segs == [((0.0, 0.0), (10.0, 0.0)), ((15.0, 0.0), (25.0, 0.0))]

    def test_phase_slides_dashes_forward(self, canvas, fake_dpg):
        canvas.draw_dashed_path([(0, 0), (30, 0)], dash=10, gap=5, phase=5)
        starts = [c[1][0][0] for c in fake_dpg.named("draw_line")]
        assert starts == pytest.approx([5.0, 20.0])

    def test_pattern_continues_across_corners(self, canvas, fake_dpg):
        canvas.draw_dashed_path([(0, 0), (12, 0), (12, 18)], dash=10, gap=5)
        segs = [c[1] for c in fake_dpg.named("draw_line")]
        # gap runs from 10 to 15, so the second leg starts 3px in
        assert segs[0] == ((0.0, 0.0), (10.0, 0.0))
        assert segs[1][0] == pytest.approx((12.0, 3.0))
        assert segs[1][1] == pytest.approx((12.0, 13.0))


def test_arc_points_span_the_requested_angles():
    pts = arc_points((0, 0), 10, math.pi, math.pi / 2, n=4)
    assert len(pts) == 5
    assert pts[0] == pytest.approx((-10, 0))
    assert pts[-1] == pytest.approx((0, 10), abs=1e-9)


def test_measure_text_falls_back_without_a_frame(canvas):
    assert canvas.measure_text("abcd", 10) == pytest.approx(4 * 10 * 0.6)
