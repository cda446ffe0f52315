# Physics backend

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum

log = logging.getLogger(__name__)

# ---------- Config ----------
G = 9.8
MOTION_EPSILON = 0.01
VERTICAL_TOLERANCE = 0.1

MASS_RANGE = (1.0, 20.0)
FORCE_RANGE = (0.0, 50.0)
ANGLE_RANGE = (0.0, 60.0)
FRICTION_RANGE = (0.0, 1.0)

MASS_STEP = 1.0
FORCE_STEP = 1.0
ANGLE_STEP = 5.0
FRICTION_STEP = 0.05


def _clamp(value: float, bounds, step: float = 0.0) -> float:
    """Clamp to `bounds`, snapping to multiples of `step` like the sliders do."""
    lo, hi = bounds
    v = float(value)
    if step > 0:
        v = round(round(v / step) * step, 10)
    return max(lo, min(hi, v))


# ---------- Scenario kinds ----------
class SurfaceKind(Enum):
    SMOOTH = "smooth"
    ROUGH = "rough"


class SystemKind(Enum):
    PULLEY_TABLE_HANGING = "pulley"
    INCLINE_HANGING = "incline"
    TWO_ON_TABLE = "table"


class Direction(Enum):
    LEFT = "left"
    NONE = "none"
    RIGHT = "right"


class SystemDirection(Enum):
    A_RIGHT_B_DOWN = "A-right/B-down"
    NONE = "none"
    A_LEFT_B_UP = "A-left/B-up"


# ---------- Parameters ----------
@dataclass(frozen=True)
class SingleBodyParams:
    mass: float = 5.0
    applied_force: float = 20.0
    force_angle: float = 0.0
    friction: float = 0.2
    surface: SurfaceKind = SurfaceKind.ROUGH

    def clamped(self) -> "SingleBodyParams":
        return replace(
            self,
            mass=_clamp(self.mass, MASS_RANGE, MASS_STEP),
            applied_force=_clamp(self.applied_force, FORCE_RANGE, FORCE_STEP),
            force_angle=_clamp(self.force_angle, ANGLE_RANGE, ANGLE_STEP),
            friction=_clamp(self.friction, FRICTION_RANGE, FRICTION_STEP),
            surface=SurfaceKind(self.surface),
        )


@dataclass(frozen=True)
class ConnectedParams:
    mass_a: float = 5.0
    mass_b: float = 3.0
    incline_angle: float = 30.0
    friction: float = 0.2
    system: SystemKind = SystemKind.PULLEY_TABLE_HANGING

    def clamped(self) -> "ConnectedParams":
        return replace(
            self,
            mass_a=_clamp(self.mass_a, MASS_RANGE, MASS_STEP),
            mass_b=_clamp(self.mass_b, MASS_RANGE, MASS_STEP),
            incline_angle=_clamp(self.incline_angle, ANGLE_RANGE, ANGLE_STEP),
            friction=_clamp(self.friction, FRICTION_RANGE, FRICTION_STEP),
            system=SystemKind(self.system),
        )


# ---------- Results ----------
@dataclass(frozen=True)
class SingleBodyResult:
    net_force: float
    acceleration: float
    normal_force: float
    friction_force: float
    applied_x: float
    applied_y: float
    weight: float
    vertical_imbalance: bool


@dataclass(frozen=True)
class ConnectedResult:
    acceleration: float
    tension: float
    friction_force: float
    normal_force: float
    slope_component: float
    weight_b: float


# ---------- Solvers ----------
def solve_single_body(params: SingleBodyParams) -> SingleBodyResult:
    """Forces and acceleration of a block pulled along a horizontal surface.

    Friction uses the kinetic magnitude whether or not the block would
    actually start moving. If the vertical pull exceeds the weight the
    normal force is clamped at zero and the imbalance is flagged instead
    of modelling lift-off.
    """
    assert params.mass > 0, "mass must be positive"
    angle_rad = params.force_angle * math.pi / 180
    fy = params.applied_force * math.sin(angle_rad)
    weight = params.mass * G
    normal = max(0.0, weight - fy)
    imbalance = abs(normal + fy - weight) > VERTICAL_TOLERANCE

    fx = params.applied_force * math.cos(angle_rad)
    if params.surface is SurfaceKind.ROUGH:
        friction = params.friction * normal
    elif params.surface is SurfaceKind.SMOOTH:
        friction = 0.0
    else:
        raise ValueError(f"unknown surface kind: {params.surface!r}")

    net = fx - friction
    result = SingleBodyResult(
        net_force=net,
        acceleration=net / params.mass,
        normal_force=normal,
        friction_force=friction,
        applied_x=fx,
        applied_y=fy,
        weight=weight,
        vertical_imbalance=imbalance,
    )
    log.debug("single body %s -> %s", params, result)
    return result


def solve_connected(params: ConnectedParams) -> ConnectedResult:
    """Shared acceleration and cable tension for two bodies on one cable.

    Positive acceleration means block A moves right (or up the slope) and
    block B moves down.
    """
    ma, mb, mu = params.mass_a, params.mass_b, params.friction
    assert ma > 0 and mb > 0, "masses must be positive"
    total = ma + mb
    weight_b = mb * G

    if params.system is SystemKind.PULLEY_TABLE_HANGING:
        # A: T - f = ma*a, B: mb*g - T = mb*a
        normal = ma * G
        friction = mu * normal
        slope = 0.0
        accel = (weight_b - friction) / total
        tension = mb * (G - accel)
    elif params.system is SystemKind.INCLINE_HANGING:
        # A (up the slope positive): T - f - ma*g*sin = ma*a
        theta = params.incline_angle * math.pi / 180
        normal = ma * G * math.cos(theta)
        friction = mu * normal
        slope = ma * G * math.sin(theta)
        accel = (weight_b - slope - friction) / total
        tension = mb * (G - accel)
    elif params.system is SystemKind.TWO_ON_TABLE:
        # no driving force in this mode, friction only decelerates the pair
        normal = total * G
        friction = mu * G * total
        slope = 0.0
        accel = -friction / total
        tension = mb * abs(accel)
    else:
        raise ValueError(f"unknown system kind: {params.system!r}")

    result = ConnectedResult(
        acceleration=accel,
        tension=tension,
        friction_force=friction,
        normal_force=normal,
        slope_component=slope,
        weight_b=weight_b,
    )
    log.debug("connected %s -> %s", params, result)
    return result


# ---------- Direction prediction ----------
def classify_single(acceleration: float) -> Direction:
    if abs(acceleration) < MOTION_EPSILON:
        return Direction.NONE
    return Direction.RIGHT if acceleration > 0 else Direction.LEFT


def classify_connected(acceleration: float) -> SystemDirection:
    if abs(acceleration) < MOTION_EPSILON:
        return SystemDirection.NONE
    if acceleration > 0:
        return SystemDirection.A_RIGHT_B_DOWN
    return SystemDirection.A_LEFT_B_UP


def check_prediction(predicted, acceleration: float) -> bool:
    """True when the predicted direction matches the sign of the acceleration."""
    if isinstance(predicted, SystemDirection):
        return predicted is classify_connected(acceleration)
    return Direction(predicted) is classify_single(acceleration)
