# Scenario scenes: parameters, latest result, animation and drawing

import logging
import math
from dataclasses import replace
from typing import Dict, List, Tuple

from pymunk import Vec2d

from animation import BlockMotion, FrameLoop, RopeMotion
from layout import LabelSide, MIN_ARROW_LINEAR, MIN_ARROW_VERTICAL
from physics import (
    ConnectedParams,
    Direction,
    G,
    SingleBodyParams,
    SurfaceKind,
    SystemDirection,
    SystemKind,
    check_prediction,
    classify_connected,
    classify_single,
    solve_connected,
    solve_single_body,
)
from renderer import (
    C_APPLIED,
    C_BLOCK_A,
    C_BLOCK_A_EDGE,
    C_BLOCK_B,
    C_BLOCK_B_EDGE,
    C_FRICTION,
    C_GROUND,
    C_GROUND_SMOOTH,
    C_INK,
    C_NORMAL,
    C_ROPE_ACTIVE,
    C_SLOPE,
    C_TENSION,
    C_WARN,
    C_WEIGHT,
    ForceArrow,
    Renderer,
    arc_points,
)

log = logging.getLogger(__name__)

# ---------- Single body geometry ----------
SB_GROUND_FRAC = 0.65
SB_BLOCK = 140.0
SB_MARGIN = 100.0
SB_LINEAR_SCALE = 3.0   # px per N
SB_VERTICAL_SCALE = 2.2

# ---------- Connected bodies geometry ----------
CB_FORCE_SCALE = 2.0
PULLEY_GROUND_FRAC = 0.6
PULLEY_DROP = 80.0
PULLEY_R = 20.0
PULLEY_BLOCK = 50.0
INCLINE_GROUND_FRAC = 0.7
INCLINE_X = 100.0
INCLINE_LEN = 200.0
INCLINE_BLOCK = 40.0
INCLINE_PULLEY_R = 15.0
TABLE_GROUND_FRAC = 0.6
TABLE_BLOCK = 50.0


def _num(v: float) -> str:
    return f"{v:g}"


SINGLE_TONES = {Direction.RIGHT: "positive", Direction.LEFT: "negative", Direction.NONE: "zero"}
CONNECTED_TONES = {
    SystemDirection.A_RIGHT_B_DOWN: "positive",
    SystemDirection.A_LEFT_B_UP: "negative",
    SystemDirection.NONE: "zero",
}


class SingleBodyScene:
    """Block on a horizontal surface pulled by one applied force."""

    title = "Chapter 7, Part 1: Single Body"

    def __init__(self, renderer: Renderer, params: SingleBodyParams = None):
        self.R = renderer
        self.params = (params or SingleBodyParams()).clamped()
        self.motion = BlockMotion()
        self.result = None
        self.recompute()
        self.loop = FrameLoop(self.step, name="single-body")

    # ----- Parameters -----
    def update(self, **changes) -> None:
        self.params = replace(self.params, **changes).clamped()
        self.recompute()

    def recompute(self) -> None:
        self.result = solve_single_body(self.params)
        self.motion.wiggle = self.result.vertical_imbalance

    # ----- Geometry -----
    @property
    def ground_y(self) -> float:
        return self.R.h * SB_GROUND_FRAC

    def bounds(self) -> Tuple[float, float]:
        return SB_MARGIN, self.R.w - SB_BLOCK - SB_MARGIN

    def block_center(self) -> Tuple[float, float]:
        top = self.ground_y - SB_BLOCK - self.motion.lift()
        return self.motion.x + SB_BLOCK * 0.5, top + SB_BLOCK * 0.5

    def arrows(self) -> List[ForceArrow]:
        """Applied, friction, normal, weight, in that order."""
        p, r = self.params, self.result
        cx, cy = self.block_center()
        out = []
        if p.applied_force > 0:
            rad = math.radians(p.force_angle)
            ex = cx + p.applied_force * SB_LINEAR_SCALE * math.cos(rad)
            ey = cy - p.applied_force * SB_LINEAR_SCALE * math.sin(rad)
            out.append(ForceArrow(f"F = {_num(p.applied_force)} N @ {_num(p.force_angle)} deg",
                                  cx, cy, ex, ey, C_APPLIED, LabelSide.RIGHT, MIN_ARROW_LINEAR))
        if p.surface is SurfaceKind.ROUGH and r.friction_force > 0:
            sign = -1 if r.applied_x > 0 else 1
            ex = cx + sign * r.friction_force * SB_LINEAR_SCALE
            side = LabelSide.LEFT if sign < 0 else LabelSide.RIGHT
            out.append(ForceArrow(f"Ff = {r.friction_force:.1f} N", cx, cy, ex, cy,
                                  C_FRICTION, side, MIN_ARROW_LINEAR))
        out.append(ForceArrow(f"N = {r.normal_force:.1f} N", cx, cy,
                              cx, cy - r.normal_force * SB_VERTICAL_SCALE,
                              C_NORMAL, LabelSide.ABOVE, MIN_ARROW_VERTICAL))
        out.append(ForceArrow(f"W = {r.weight:.1f} N", cx, cy,
                              cx, cy + r.weight * SB_VERTICAL_SCALE,
                              C_WEIGHT, LabelSide.BELOW, MIN_ARROW_VERTICAL))
        return out

    # ----- Frame -----
    def step(self, dt: float) -> None:
        lo, hi = self.bounds()
        self.motion.advance(self.result.acceleration, lo, hi, dt)
        self.draw()

    def draw(self) -> None:
        R = self.R
        R.begin_frame()
        gy = self.ground_y
        rough = self.params.surface is SurfaceKind.ROUGH
        R.draw_ground(gy, C_GROUND if rough else C_GROUND_SMOOTH, thickness=4)
        if rough:
            R.draw_hatching(gy)

        R.draw_shadow(self.motion.x, gy, SB_BLOCK)
        R.draw_block(self.block_center(), SB_BLOCK, C_BLOCK_A, C_BLOCK_A_EDGE,
                     lines=(f"{_num(self.params.mass)} kg",))
        R.draw_arrows(self.arrows())

        R.draw_text((20, 20), f"Surface: {self.params.surface.value.upper()}", color=C_INK)
        if self.result.vertical_imbalance:
            R.draw_text((20, 45), "! Net vertical force != 0", color=C_WARN)

    # ----- Prediction -----
    def actual_direction(self) -> Direction:
        return classify_single(self.result.acceleration)

    def feedback(self, predicted) -> Tuple[bool, str]:
        p, r = self.params, self.result
        actual = self.actual_direction()
        if check_prediction(predicted, r.acceleration):
            where = {Direction.RIGHT: "to the right", Direction.LEFT: "to the left",
                     Direction.NONE: "is zero"}[actual]
            return True, (f"Correct! The net force is {r.net_force:.2f} N {where}.\n"
                          f"Acceleration = sum F / m = {r.acceleration:.2f} m/s^2")
        if p.surface is SurfaceKind.ROUGH:
            hint = (f"Check sum Fx. Applied force (horizontal) = {r.applied_x:.2f} N, "
                    f"Friction = {r.friction_force:.2f} N")
        else:
            hint = ("With no friction, only the applied force matters. "
                    f"Horizontal component = {r.applied_x:.2f} N")
        return False, f"Not quite. {hint}"

    def readout(self) -> Dict[str, str]:
        return {
            "Acceleration": f"{self.result.acceleration:.2f} m/s^2",
            "Net Force": f"{self.result.net_force:.2f} N",
        }

    def readout_tones(self) -> Dict[str, str]:
        """Sign of each readout value, with anything under 0.01 counted as zero."""
        return {
            "Acceleration": SINGLE_TONES[classify_single(self.result.acceleration)],
            "Net Force": SINGLE_TONES[classify_single(self.result.net_force)],
        }


class ConnectedScene:
    """Two blocks sharing one cable in one of three arrangements."""

    title = "Chapter 7, Part 2: Connected Bodies"

    def __init__(self, renderer: Renderer, params: ConnectedParams = None):
        self.R = renderer
        self.params = (params or ConnectedParams()).clamped()
        self.rope = RopeMotion()
        self.result = None
        self.recompute()
        self.loop = FrameLoop(self.step, name="connected-bodies")

    def update(self, **changes) -> None:
        self.params = replace(self.params, **changes).clamped()
        self.recompute()

    def recompute(self) -> None:
        self.result = solve_connected(self.params)

    # ----- Frame -----
    def step(self, dt: float) -> None:
        self.rope.advance(self.result.acceleration)
        self.draw()

    def rope_color(self):
        return C_ROPE_ACTIVE if self.result.acceleration != 0 else C_INK

    def draw(self) -> None:
        self.R.begin_frame()
        kind = self.params.system
        if kind is SystemKind.PULLEY_TABLE_HANGING:
            arrows = self._draw_pulley_system()
        elif kind is SystemKind.INCLINE_HANGING:
            arrows = self._draw_incline_system()
        elif kind is SystemKind.TWO_ON_TABLE:
            arrows = self._draw_table_system()
        else:
            raise ValueError(f"unknown system kind: {kind!r}")
        self.R.draw_arrows(arrows)

    def _hanging_arrows(self, center) -> List[ForceArrow]:
        r = self.result
        bx, by = center
        return [
            ForceArrow(f"T = {r.tension:.1f} N", bx, by, bx, by - r.tension * CB_FORCE_SCALE,
                       C_TENSION, LabelSide.LEFT),
            ForceArrow(f"WB = {r.weight_b:.1f} N", bx, by, bx, by + r.weight_b * CB_FORCE_SCALE,
                       C_WEIGHT, LabelSide.RIGHT),
        ]

    def _friction_sign(self) -> int:
        # opposes the motion, or the pull when the system stays put
        return 1 if self.result.acceleration < -1e-9 else -1

    def _draw_pulley_system(self) -> List[ForceArrow]:
        R, p, r = self.R, self.params, self.result
        gy = R.h * PULLEY_GROUND_FRAC
        R.draw_ground(gy)
        px, py = R.w * 0.65, gy - PULLEY_DROP
        R.draw_pulley((px, py), PULLEY_R)

        s = PULLEY_BLOCK
        a_center = Vec2d(px - 150 + s * 0.5, gy - s * 0.5)
        b_top = py + PULLEY_R + 40
        b_center = Vec2d(px, b_top + s * 0.5)
        R.draw_block(a_center, s, C_BLOCK_A, C_BLOCK_A_EDGE, lines=("A", f"{_num(p.mass_a)}kg"))
        R.draw_block(b_center, s, C_BLOCK_B, C_BLOCK_B_EDGE, lines=("B", f"{_num(p.mass_b)}kg"))

        path = [(a_center.x + s * 0.5, a_center.y), (px - PULLEY_R, py)]
        path += arc_points((px, py), PULLEY_R, math.pi, math.pi * 0.5)[1:]
        path.append((px, b_top))
        R.draw_dashed_path(path, self.rope_color(), dash=10, gap=5, phase=self.rope.offset)

        ax, ay = a_center
        arrows = [
            ForceArrow(f"T = {r.tension:.1f} N", ax, ay, ax + r.tension * CB_FORCE_SCALE, ay,
                       C_TENSION, LabelSide.ABOVE),
        ]
        if r.friction_force > 0:
            sign = self._friction_sign()
            arrows.append(ForceArrow(f"Ff = {r.friction_force:.1f} N", ax, ay,
                                     ax + sign * r.friction_force * CB_FORCE_SCALE, ay,
                                     C_FRICTION, LabelSide.LEFT if sign < 0 else LabelSide.RIGHT))
        return arrows + self._hanging_arrows(b_center)

    def _draw_incline_system(self) -> List[ForceArrow]:
        R, p, r = self.R, self.params, self.result
        gy = R.h * INCLINE_GROUND_FRAC
        R.draw_ground(gy)
        theta = math.radians(p.incline_angle)
        up = Vec2d(math.cos(theta), -math.sin(theta))
        outward = Vec2d(-math.sin(theta), -math.cos(theta))
        foot = Vec2d(INCLINE_X, gy)
        top = foot + up * INCLINE_LEN
        R.draw_incline(foot, top)

        s = INCLINE_BLOCK
        a_center = foot + up * (INCLINE_LEN * 0.4) + outward * (s * 0.5)
        R.draw_block(a_center, s, C_BLOCK_A, C_BLOCK_A_EDGE, angle=-theta,
                     lines=(f"A {_num(p.mass_a)}kg",))

        pr = INCLINE_PULLEY_R
        px, py = top.x + 40, top.y
        R.draw_pulley((px, py), pr)
        b_top = py + pr + 30
        b_center = Vec2d(px + pr, b_top + s * 0.5)
        R.draw_block(b_center, s, C_BLOCK_B, C_BLOCK_B_EDGE, lines=(f"B {_num(p.mass_b)}kg",))

        front = a_center + up * (s * 0.5)
        path = [tuple(front), (px, py - pr)]
        path += arc_points((px, py), pr, -math.pi * 0.5, 0.0)[1:]
        path.append((px + pr, b_top))
        R.draw_dashed_path(path, self.rope_color(), dash=8, gap=4, phase=self.rope.offset, thickness=2)

        ax, ay = a_center
        t_end = a_center + up * (r.tension * CB_FORCE_SCALE)
        arrows = [ForceArrow(f"T = {r.tension:.1f} N", ax, ay, t_end.x, t_end.y,
                             C_TENSION, LabelSide.ABOVE)]
        if r.friction_force > 0:
            f_end = a_center + up * (self._friction_sign() * r.friction_force * CB_FORCE_SCALE)
            arrows.append(ForceArrow(f"Ff = {r.friction_force:.1f} N", ax, ay, f_end.x, f_end.y,
                                     C_FRICTION, LabelSide.LEFT))
        if r.slope_component > 0:
            s_end = a_center - up * (r.slope_component * CB_FORCE_SCALE)
            arrows.append(ForceArrow(f"mg sin = {r.slope_component:.1f} N", ax, ay, s_end.x, s_end.y,
                                     C_SLOPE, LabelSide.BELOW))
        return arrows + self._hanging_arrows(b_center)

    def _draw_table_system(self) -> List[ForceArrow]:
        R, p, r = self.R, self.params, self.result
        gy = R.h * TABLE_GROUND_FRAC
        R.draw_ground(gy)
        s = TABLE_BLOCK
        a_center = Vec2d(R.w * 0.3 + s * 0.5, gy - s * 0.5)
        b_center = Vec2d(R.w * 0.6 + s * 0.5, gy - s * 0.5)
        R.draw_block(a_center, s, C_BLOCK_A, C_BLOCK_A_EDGE, lines=(f"A {_num(p.mass_a)}kg",))
        R.draw_block(b_center, s, C_BLOCK_B, C_BLOCK_B_EDGE, lines=(f"B {_num(p.mass_b)}kg",))
        R.draw_dashed_path([(a_center.x + s * 0.5, a_center.y), (b_center.x - s * 0.5, b_center.y)],
                           C_INK, dash=8, gap=4, phase=self.rope.offset)

        ax, ay = a_center
        bx, by = b_center
        arrows = [
            ForceArrow(f"T = {r.tension:.1f} N", ax, ay, ax + r.tension * CB_FORCE_SCALE, ay,
                       C_TENSION, LabelSide.ABOVE),
            ForceArrow(f"T = {r.tension:.1f} N", bx, by, bx - r.tension * CB_FORCE_SCALE, by,
                       C_TENSION, LabelSide.ABOVE),
        ]
        sign = self._friction_sign()
        for name, (cx, cy), m in (("FfA", (ax, ay), p.mass_a), ("FfB", (bx, by), p.mass_b)):
            f = p.friction * m * G
            if f > 0:
                arrows.append(ForceArrow(f"{name} = {f:.1f} N", cx, cy, cx + sign * f * CB_FORCE_SCALE, cy,
                                         C_FRICTION, LabelSide.BELOW))
        return arrows

    # ----- Prediction -----
    def actual_direction(self) -> SystemDirection:
        return classify_connected(self.result.acceleration)

    def feedback(self, predicted: SystemDirection) -> Tuple[bool, str]:
        p, r = self.params, self.result
        if check_prediction(SystemDirection(predicted), r.acceleration):
            return True, (f"Correct! The system accelerates at {abs(r.acceleration):.2f} m/s^2.\n"
                          f"Tension in the cable: {r.tension:.2f} N")
        kind = p.system
        if kind is SystemKind.PULLEY_TABLE_HANGING:
            hint = (f"Compare the pulling forces: Weight of B = {r.weight_b:.1f} N "
                    f"vs Friction on A = {r.friction_force:.1f} N")
        elif kind is SystemKind.INCLINE_HANGING:
            hint = (f"Compare: Weight of B = {r.weight_b:.1f} N vs (Component of A down slope "
                    f"+ Friction) = {r.slope_component + r.friction_force:.1f} N")
        else:
            hint = "Re-evaluate the pulling forces considering both masses and friction"
        return False, f"Not quite. {hint}"

    def readout(self) -> Dict[str, str]:
        return {
            "Acceleration (a)": f"{self.result.acceleration:.2f} m/s^2",
            "Tension (T)": f"{self.result.tension:.2f} N",
        }

    def readout_tones(self) -> Dict[str, str]:
        return {
            "Acceleration (a)": CONNECTED_TONES[classify_connected(self.result.acceleration)],
            "Tension (T)": CONNECTED_TONES[classify_connected(self.result.tension)],
        }
