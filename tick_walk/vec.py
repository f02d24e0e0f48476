"""2D vector helpers on tuple[float, float] and the per-tick movement step."""
from __future__ import annotations

import math

Vec2 = tuple[float, float]


def add(a: Vec2, b: Vec2) -> Vec2:
    return a[0] + b[0], a[1] + b[1]


def sub(a: Vec2, b: Vec2) -> Vec2:
    return a[0] - b[0], a[1] - b[1]


def scale(v: Vec2, s: float) -> Vec2:
    return v[0] * s, v[1] * s


def magnitude(v: Vec2) -> float:
    return math.hypot(v[0], v[1])


def distance(a: Vec2, b: Vec2) -> float:
    return magnitude(sub(b, a))


def normalize(v: Vec2) -> Vec2:
    mag = magnitude(v)
    if mag == 0.0:
        return v
    return scale(v, 1.0 / mag)


def reached(position: Vec2, target: Vec2, epsilon: float) -> bool:
    return distance(position, target) <= epsilon


def step_toward(position: Vec2, target: Vec2, speed: float, snap_epsilon: float) -> Vec2:
    """Advance ``position`` toward ``target`` by at most ``speed``.

    Three branches cover every distance:

    - ``distance <= snap_epsilon``: return ``target`` exactly.
    - ``distance <= speed``: a full step would overshoot, return ``target``.
    - otherwise move ``speed`` units along the unit vector toward ``target``.

    The clamp branch is a comparison against ``speed`` rather than a second
    tolerance, so no distance falls between the snap and step zones.
    """
    offset = sub(target, position)
    dist = magnitude(offset)
    if dist <= snap_epsilon or dist <= speed:
        return target
    return add(position, scale(normalize(offset), speed))


def clamp_point(point: Vec2, lower: Vec2, upper: Vec2) -> Vec2:
    return (
        max(lower[0], min(point[0], upper[0])),
        max(lower[1], min(point[1], upper[1])),
    )
