"""utils package – Small 2-D geometry helpers shared by physics and AI."""

from .geometry import (
    clamp, distance, unit_vector, direction_between,
    clamp_point, rotate_quarter,
)
