# Label layout for force diagrams

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from pymunk import Vec2d

log = logging.getLogger(__name__)

# ---------- Config ----------
MIN_ARROW_LINEAR = 80.0
MIN_ARROW_VERTICAL = 90.0
LABEL_PAD_X = 16.0
LABEL_H = 28.0
LABEL_OFFSET = 20.0
LABEL_STEP = 24.0
MAX_NUDGES = 5


class LabelSide(Enum):
    ABOVE = "above"
    BELOW = "below"
    LEFT = "left"
    RIGHT = "right"


def enforce_min_length(origin, end, floor: float) -> Vec2d:
    """Stretch origin->end to `floor` pixels when it is shorter.

    Direction is preserved; a zero-length vector is returned unchanged.
    """
    o = Vec2d(*origin)
    d = Vec2d(*end) - o
    length = d.length
    if length <= 1e-12 or length >= floor:
        return Vec2d(*end)
    return o + d.scale_to_length(floor)


# ---------- Rectangles ----------
@dataclass(frozen=True)
class LabelRect:
    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.w * 0.5, self.y + self.h * 0.5

    def overlaps(self, other: "LabelRect") -> bool:
        # Touching edges do not count
        return not (
            self.right <= other.x
            or other.right <= self.x
            or self.bottom <= other.y
            or other.bottom <= self.y
        )


@dataclass(frozen=True)
class Placement:
    rect: LabelRect
    nudges: int
    clear: bool


def candidate_rect(anchor, width: float, height: float, side: LabelSide, nudges: int = 0) -> LabelRect:
    """Label box for `anchor` pushed `nudges` steps out along `side`.

    The box edge nearest the anchor sits LABEL_OFFSET + LABEL_STEP * nudges
    away from it, so wider or taller labels grow away from the arrow tip.
    Across `side` the box is centered on the anchor.
    """
    ax, ay = anchor
    off = LABEL_OFFSET + LABEL_STEP * nudges
    if side is LabelSide.ABOVE:
        return LabelRect(ax - width * 0.5, ay - off - height, width, height)
    if side is LabelSide.BELOW:
        return LabelRect(ax - width * 0.5, ay + off, width, height)
    if side is LabelSide.LEFT:
        return LabelRect(ax - off - width, ay - height * 0.5, width, height)
    if side is LabelSide.RIGHT:
        return LabelRect(ax + off, ay - height * 0.5, width, height)
    raise ValueError(f"unknown label side: {side!r}")


class LabelLayout:
    """Label boxes placed during one frame.

    Call `reset()` once before the first arrow of a frame. Boxes are
    checked only against those already placed, so draw order decides
    which label keeps the contested spot.
    """

    def __init__(self) -> None:
        self.rects: List[LabelRect] = []

    def reset(self) -> None:
        self.rects.clear()

    def __len__(self) -> int:
        return len(self.rects)

    def collides(self, rect: LabelRect) -> bool:
        return any(rect.overlaps(r) for r in self.rects)

    def place(self, anchor, text_w: float, side: LabelSide) -> Placement:
        width = float(text_w) + LABEL_PAD_X
        nudges = 0
        rect = candidate_rect(anchor, width, LABEL_H, side)
        while self.collides(rect) and nudges < MAX_NUDGES:
            nudges += 1
            rect = candidate_rect(anchor, width, LABEL_H, side, nudges)
        clear = not self.collides(rect)
        if not clear:
            log.debug("label at %s still overlaps after %d nudges", anchor, nudges)
        self.rects.append(rect)
        return Placement(rect, nudges, clear)
