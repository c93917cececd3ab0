from __future__ import annotations

import math

from pygame.math import Vector2

_EPSILON_SQ = 1e-12


def angle_between(a: Vector2, b: Vector2) -> float:
    """Unsigned angle in radians between ``a`` and ``b``.

    Returns 0.0 when either vector has zero length.
    """
    len_sq_a = a.x * a.x + a.y * a.y
    len_sq_b = b.x * b.x + b.y * b.y
    if len_sq_a < _EPSILON_SQ or len_sq_b < _EPSILON_SQ:
        return 0.0
    cos_angle = (a.x * b.x + a.y * b.y) / math.sqrt(len_sq_a * len_sq_b)
    return math.acos(_clamp_value(cos_angle, -1.0, 1.0))


def safe_normalize(vector: Vector2) -> Vector2:
    magnitude_sq = vector.x * vector.x + vector.y * vector.y
    if magnitude_sq < _EPSILON_SQ:
        return Vector2()
    inv = 1.0 / math.sqrt(magnitude_sq)
    return Vector2(vector.x * inv, vector.y * inv)


def _clamp_value(value: float, min_value: float, max_value: float) -> float:
    return max(min_value, min(max_value, value))
