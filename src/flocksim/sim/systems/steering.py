from __future__ import annotations

import math
from typing import Sequence

from pygame.math import Vector2

from ..core.agent import Agent
from ..utils.math2d import angle_between, safe_normalize


def separation(
    neighbors: Sequence[Agent],
    subject: Agent,
    separation_distance: float,
    weight: float,
) -> Vector2:
    if not neighbors:
        return Vector2()
    limit_sq = separation_distance * separation_distance
    accum_x = 0.0
    accum_y = 0.0
    for other in neighbors:
        dx = subject.position.x - other.position.x
        dy = subject.position.y - other.position.y
        if dx * dx + dy * dy >= limit_sq:
            continue
        accum_x += dx
        accum_y += dy
    return Vector2(accum_x * weight, accum_y * weight)


def alignment(neighbors: Sequence[Agent], subject: Agent, weight: float) -> Vector2:
    if not neighbors:
        return Vector2()
    sum_x = 0.0
    sum_y = 0.0
    for other in neighbors:
        sum_x += other.velocity.x
        sum_y += other.velocity.y
    inv = 1.0 / len(neighbors)
    return Vector2(
        (sum_x * inv - subject.velocity.x) * weight,
        (sum_y * inv - subject.velocity.y) * weight,
    )


def cohesion(neighbors: Sequence[Agent], subject: Agent, weight: float) -> Vector2:
    if not neighbors:
        return Vector2()
    sum_x = 0.0
    sum_y = 0.0
    for other in neighbors:
        sum_x += other.position.x
        sum_y += other.position.y
    inv = 1.0 / len(neighbors)
    return Vector2(
        (sum_x * inv - subject.position.x) * weight,
        (sum_y * inv - subject.position.y) * weight,
    )


def avoid_predator(
    population: Sequence[Agent],
    subject: Agent,
    subject_index: int,
    predator: Agent,
    trigger_distance: float,
    view_angle: float,
    repulsion: float = 6.0,
    alarm_gain: float = 0.5,
) -> Vector2:
    """Escape impulse away from a predator the subject can see.

    The impulse grows with the share of the rest of the flock that is also
    within ``trigger_distance`` of the predator.
    """
    to_predator = predator.position - subject.position
    dist_sq = to_predator.x * to_predator.x + to_predator.y * to_predator.y
    if dist_sq <= 0.0 or dist_sq >= trigger_distance * trigger_distance:
        return Vector2()
    if angle_between(to_predator, subject.velocity) >= view_angle:
        return Vector2()

    alarmed = 0
    peers = 0
    trigger_sq = trigger_distance * trigger_distance
    for index, other in enumerate(population):
        if index == subject_index:
            continue
        peers += 1
        if (other.position - predator.position).length_squared() < trigger_sq:
            alarmed += 1
    alarmed_fraction = alarmed / peers if peers else 0.0

    strength = repulsion * (1.0 + alarm_gain * alarmed_fraction)
    return safe_normalize(-to_predator) * strength


def clamp_speed(velocity: Vector2, max_speed: float, min_speed: float) -> Vector2:
    """Rescale ``velocity`` into ``[min_speed, max_speed]``.

    A zero velocity has no direction to rescale along; it is sent along +x at
    ``min_speed``.
    """
    speed_sq = velocity.x * velocity.x + velocity.y * velocity.y
    if speed_sq <= 1e-18:
        return Vector2(min_speed, 0.0)
    speed = math.sqrt(speed_sq)
    if speed > max_speed:
        scale = max_speed / speed
    elif speed < min_speed:
        scale = min_speed / speed
    else:
        return Vector2(velocity)
    return Vector2(velocity.x * scale, velocity.y * scale)


def boundary_avoidance(
    position: Vector2,
    width: float,
    height: float,
    margin: float,
    turn_weight: float,
) -> Vector2:
    """Inward steering for agents inside the margin band or past an edge.

    The push is proportional to the penetration into the band and keeps
    growing past the edge.
    """
    if margin <= 1e-6 or turn_weight <= 0.0:
        return Vector2()
    x = position.x
    y = position.y
    if margin <= x <= width - margin and margin <= y <= height - margin:
        return Vector2()

    push_x = 0.0
    push_y = 0.0
    if x < margin:
        push_x += (margin - x) / margin
    elif x > width - margin:
        push_x -= (x - (width - margin)) / margin
    if y < margin:
        push_y += (margin - y) / margin
    elif y > height - margin:
        push_y -= (y - (height - margin)) / margin
    return Vector2(push_x * turn_weight, push_y * turn_weight)
