from __future__ import annotations

import math
from typing import Sequence

from pygame.math import Vector2

from ..core.agent import Agent
from ..types.statistics import Statistics


def compute_statistics(agents: Sequence[Agent]) -> Statistics:
    """Velocity summary of ``agents``.

    Standard deviation is the per-axis population deviation (divides by N).
    An empty population yields all-zero statistics.
    """
    count = len(agents)
    if count == 0:
        return Statistics()
    inv = 1.0 / count

    sum_x = 0.0
    sum_y = 0.0
    speed_sum = 0.0
    heading_x = 0.0
    heading_y = 0.0
    for agent in agents:
        vx = agent.velocity.x
        vy = agent.velocity.y
        sum_x += vx
        sum_y += vy
        speed = math.sqrt(vx * vx + vy * vy)
        speed_sum += speed
        if speed > 1e-12:
            heading_x += vx / speed
            heading_y += vy / speed
    mean_x = sum_x * inv
    mean_y = sum_y * inv

    var_x = 0.0
    var_y = 0.0
    for agent in agents:
        dx = agent.velocity.x - mean_x
        dy = agent.velocity.y - mean_y
        var_x += dx * dx
        var_y += dy * dy

    return Statistics(
        mean_velocity=Vector2(mean_x, mean_y),
        stdev_velocity=Vector2(math.sqrt(var_x * inv), math.sqrt(var_y * inv)),
        mean_speed=speed_sum * inv,
        polarization=math.sqrt(heading_x * heading_x + heading_y * heading_y) * inv,
    )
