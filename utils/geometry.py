"""geometry.py - Small 2-D vector helpers shared by physics and AI.

Everything works on plain floats / (x, y) tuples so the simulation core
stays free of rendering types.
"""

from __future__ import annotations

import math


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp *value* into [lo, hi]."""
    return max(lo, min(hi, value))


def distance(ax: float, ay: float, bx: float, by: float) -> float:
    return math.hypot(bx - ax, by - ay)


def unit_vector(dx: float, dy: float) -> tuple[float, float]:
    """Normalise (dx, dy).  A zero-length vector yields (0, 0) – no movement."""
    length = math.hypot(dx, dy)
    if length == 0.0 or not math.isfinite(length):
        return 0.0, 0.0
    return dx / length, dy / length


def direction_between(ax: float, ay: float,
                      bx: float, by: float) -> tuple[float, float]:
    """Unit vector pointing from a to b, (0, 0) when the points coincide."""
    return unit_vector(bx - ax, by - ay)


def clamp_point(x: float, y: float,
                min_x: float, max_x: float,
                min_y: float, max_y: float) -> tuple[float, float]:
    return clamp(x, min_x, max_x), clamp(y, min_y, max_y)


def rotate_quarter(ux: float, uy: float, direction: int) -> tuple[float, float]:
    """Rotate a vector by +90° (direction=1) or -90° (direction=-1)."""
    if direction >= 0:
        return -uy, ux
    return uy, -ux
