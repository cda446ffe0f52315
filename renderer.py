# Force diagram renderer

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

import dearpygui.dearpygui as dpg
from pymunk import Vec2d

from layout import LabelLayout, LabelSide, MIN_ARROW_LINEAR, enforce_min_length

log = logging.getLogger(__name__)

# ---------- Colors ----------
C_WHITE = (255, 255, 255, 255)
C_INK = (56, 56, 56, 255)
C_GROUND = (211, 211, 211, 255)
C_GROUND_SMOOTH = (229, 229, 229, 255)
C_HATCH = (160, 160, 160, 255)
C_INCLINE = (160, 160, 160, 255)
C_SHADOW = (0, 0, 0, 26)
C_PULLEY_RIM = (136, 136, 136, 255)
C_BLOCK_A = (0, 122, 255, 255)
C_BLOCK_A_EDGE = (0, 95, 163, 255)
C_BLOCK_B = (33, 173, 147, 255)
C_BLOCK_B_EDGE = (26, 138, 117, 255)
C_ROPE_ACTIVE = (255, 110, 108, 255)
C_WARN = (255, 110, 108, 255)

C_APPLIED = (33, 173, 147, 255)
C_FRICTION = (255, 110, 108, 255)
C_NORMAL = (0, 122, 255, 255)
C_WEIGHT = (230, 190, 0, 255)
C_TENSION = (124, 58, 237, 255)
C_SLOPE = (234, 88, 12, 255)

# ---------- Config ----------
HALO_THICKNESS = 7
SHAFT_THICKNESS = 5
HEAD_LEN = 15.0
HEAD_SPREAD = math.pi / 6
LABEL_FONT = 14
BASE_FONT = 13
CHAR_W_RATIO = 0.6


# ---------- Arrow model ----------
@dataclass
class ForceArrow:
    label: str
    x1: float
    y1: float
    x2: float
    y2: float
    color: Tuple[int, int, int, int]
    side: LabelSide
    floor: float = MIN_ARROW_LINEAR


def tint(color, amount: float = 0.1, alpha: int = 242):
    """Near-white fill carrying a hint of `color`."""
    r, g, b = color[:3]
    return (
        int(255 + (r - 255) * amount),
        int(255 + (g - 255) * amount),
        int(255 + (b - 255) * amount),
        alpha,
    )


def arc_points(center, r: float, a0: float, a1: float, n: int = 12) -> List[Tuple[float, float]]:
    """Points along a circular arc in screen space (y grows downward)."""
    cx, cy = center
    pts = []
    for i in range(n + 1):
        a = a0 + (a1 - a0) * i / n
        pts.append((cx + r * math.cos(a), cy + r * math.sin(a)))
    return pts


class Renderer:
    def __init__(self, tag: str, width: int, height: int):
        self.tag = tag
        self.w = width
        self.h = height
        self.font_size = LABEL_FONT
        self.labels = LabelLayout()

    # ---------- Frame ----------
    def clear(self):
        try:
            dpg.delete_item(self.tag, children_only=True)
        except Exception as e:
            log.warning("Could not clear drawlist %s: %s", self.tag, e)

    def begin_frame(self):
        """Wipe the drawlist and forget last frame's label boxes."""
        self.clear()
        self.labels.reset()

    # ---------- Text ----------
    def measure_text(self, text: str, size: float = None) -> float:
        size = float(size or self.font_size)
        try:
            dims = dpg.get_text_size(text)
        except Exception:
            dims = None
        # get_text_size has no answer until the first frame is rendered
        if dims and dims[0] > 0:
            return float(dims[0]) * size / BASE_FONT
        return len(text) * size * CHAR_W_RATIO

    def draw_text(self, pos, text: str, color=C_INK, size: float = None, center: bool = False):
        size = size or self.font_size
        x, y = pos
        if center:
            x -= self.measure_text(text, size) * 0.5
            y -= size * 0.5
        dpg.draw_text((x, y), text, color=color, size=size, parent=self.tag)

    # ---------- Scenery ----------
    def draw_ground(self, ground_y: float, color=C_GROUND, thickness: float = None):
        bottom = self.h if thickness is None else ground_y + thickness
        dpg.draw_rectangle((0, ground_y), (self.w, bottom), color=color, fill=color, parent=self.tag)

    def draw_hatching(self, ground_y: float, spacing: int = 15, depth: float = 8):
        for x in range(0, int(self.w), spacing):
            dpg.draw_line((x, ground_y), (x + depth, ground_y + depth), color=C_HATCH,
                          thickness=2, parent=self.tag)

    def draw_block(self, center, size: float, fill, edge, angle: float = 0.0, lines: Sequence[str] = ()):
        """Square block centered at `center`, rotated by `angle` (radians, screen space)."""
        c = Vec2d(*center)
        half = size * 0.5
        corners = [Vec2d(-half, -half), Vec2d(half, -half), Vec2d(half, half), Vec2d(-half, half)]
        pts = [tuple(c + v.rotated(angle)) for v in corners]
        pts.append(pts[0])
        dpg.draw_polygon(pts, color=edge, fill=fill, thickness=3, parent=self.tag)
        n = len(lines)
        for i, line in enumerate(lines):
            dy = (i - (n - 1) * 0.5) * (self.font_size + 1)
            self.draw_text((c.x, c.y + dy), line, color=C_WHITE, center=True)

    def draw_shadow(self, x: float, ground_y: float, width: float):
        dpg.draw_rectangle((x + 5, ground_y + 5), (x + 5 + width, ground_y + 13),
                           color=C_SHADOW, fill=C_SHADOW, parent=self.tag)

    def draw_pulley(self, center, r: float):
        dpg.draw_circle(center, r, color=C_PULLEY_RIM, fill=C_INK, thickness=2, parent=self.tag)

    def draw_incline(self, foot, top):
        fx, fy = foot
        tx, ty = top
        dpg.draw_triangle((fx, fy), (tx, ty), (tx, fy), color=C_INCLINE, fill=C_INCLINE, parent=self.tag)
        dpg.draw_line((fx, fy), (tx, ty), color=C_INK, thickness=3, parent=self.tag)

    # ---------- Dashed helpers ----------
    def _draw_dashed_line_screen(self, p0s, p1s, color, dash=6, gap=6, phase=0.0, start=0.0, thickness=1):
        """Dash one segment; `start` is the path distance at p0s. Returns the distance at p1s."""
        x0, y0 = p0s
        x1, y1 = p1s
        dx = x1 - x0
        dy = y1 - y0
        dist = (dx*dx + dy*dy) ** 0.5
        if dist <= 1e-6:
            return start
        ux = dx / dist
        uy = dy / dist
        period = dash + gap
        t = 0.0
        while t < dist:
            p = (start + t - phase) % period
            if p < dash:
                t_end = min(dist, t + dash - p)
                sx = x0 + ux * t
                sy = y0 + uy * t
                ex = x0 + ux * t_end
                ey = y0 + uy * t_end
                dpg.draw_line((sx, sy), (ex, ey), color=color, thickness=thickness, parent=self.tag)
                t = t_end
            else:
                t += period - p
        return start + dist

    def draw_dashed_path(self, points: Iterable, color=C_INK, dash=10, gap=5, phase=0.0, thickness=3):
        """Dashed polyline; increasing `phase` slides the dashes forward along the path."""
        pts = list(points)
        travelled = 0.0
        for a, b in zip(pts, pts[1:]):
            travelled = self._draw_dashed_line_screen(a, b, color, dash, gap, phase, travelled, thickness)

    # ---------- Force arrows ----------
    def draw_force_arrow(self, origin, end, color, label: str, side: LabelSide,
                         floor: float = MIN_ARROW_LINEAR):
        """Arrow from `origin` towards `end` with a collision-free label where possible.

        Short vectors are stretched to `floor` pixels. The label box is
        recorded in this frame's layout, so call order matters.
        """
        o = Vec2d(*origin)
        e = enforce_min_length(o, end, floor)
        shaft = e - o
        if shaft.length > 1e-12:
            dpg.draw_line(tuple(o), tuple(e), color=C_WHITE, thickness=HALO_THICKNESS, parent=self.tag)
            dpg.draw_line(tuple(o), tuple(e), color=color, thickness=SHAFT_THICKNESS, parent=self.tag)
            ang = shaft.angle
            p1 = e - Vec2d(HEAD_LEN, 0).rotated(ang - HEAD_SPREAD)
            p2 = e - Vec2d(HEAD_LEN, 0).rotated(ang + HEAD_SPREAD)
            dpg.draw_triangle(tuple(e), tuple(p1), tuple(p2), color=C_WHITE, fill=color,
                              thickness=2, parent=self.tag)

        text_w = self.measure_text(label)
        placed = self.labels.place(tuple(e), text_w, side)
        r = placed.rect
        dpg.draw_rectangle((r.x, r.y), (r.right, r.bottom), color=color, fill=tint(color),
                           thickness=2, rounding=4, parent=self.tag)
        self.draw_text(r.center, label, color=color, center=True)
        return placed

    def draw_arrows(self, arrows: Iterable[ForceArrow]):
        """Draw arrows in the given order; earlier labels win contested space."""
        return [
            self.draw_force_arrow((a.x1, a.y1), (a.x2, a.y2), a.color, a.label, a.side, a.floor)
            for a in arrows
        ]
