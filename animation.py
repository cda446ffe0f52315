# Animation state and frame loop

import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional

log = logging.getLogger(__name__)

# ---------- Config ----------
VISUAL_SCALE = 0.5
FRAME_STEP = 0.1
ROPE_PERIOD = 20.0
WIGGLE_AMPLITUDE = 3.0
WIGGLE_RATE = 10.0  # rad/s


@dataclass
class BlockMotion:
    """Cosmetic horizontal drift of a block. Never fed back into the solver."""
    x: float = 150.0
    velocity: float = 0.0
    clock: float = 0.0
    wiggle: bool = False

    def advance(self, acceleration: float, lo: float, hi: float, dt: float = 0.0) -> None:
        self.velocity = acceleration * VISUAL_SCALE
        self.x += self.velocity * FRAME_STEP
        if self.x < lo:
            self.x = lo
        if self.x > hi:
            self.x = hi
        self.clock += max(0.0, dt)

    def lift(self) -> float:
        """Vertical wiggle offset in pixels for the current frame."""
        if not self.wiggle:
            return 0.0
        return math.sin(self.clock * WIGGLE_RATE) * WIGGLE_AMPLITUDE


@dataclass
class RopeMotion:
    offset: float = 0.0

    def advance(self, acceleration: float) -> None:
        self.offset = (self.offset + acceleration * VISUAL_SCALE * FRAME_STEP) % ROPE_PERIOD


class FrameLoop:
    """Repeating per-frame callback with an explicit stop handle.

    The host calls `tick(dt)` once per display refresh; after `stop()` the
    step callback is never invoked again.
    """

    def __init__(self, step: Callable[[float], None], name: str = "frame-loop") -> None:
        self._step: Optional[Callable[[float], None]] = step
        self.name = name
        self.running = False
        self.frames = 0

    def start(self) -> None:
        if self._step is None:
            raise RuntimeError(f"{self.name} was disposed and cannot restart")
        self.running = True
        log.debug("%s started", self.name)

    def stop(self) -> None:
        if self.running:
            log.debug("%s stopped after %d frames", self.name, self.frames)
        self.running = False

    def dispose(self) -> None:
        self.stop()
        self._step = None

    def tick(self, dt: float) -> bool:
        if not self.running or self._step is None:
            return False
        self._step(dt)
        self.frames += 1
        return True
