from __future__ import annotations

from typing import List, Sequence

from ..core.agent import Agent
from ..utils.math2d import angle_between


def find_neighbors(
    subject: Agent,
    population: Sequence[Agent],
    max_distance: float,
    view_angle: float,
) -> List[Agent]:
    """Agents within ``max_distance`` that lie inside the subject's view cone.

    Exhaustive scan over ``population``. The subject is skipped by identity;
    any other agent sitting exactly on the subject's position is skipped by the
    strictly positive distance requirement.
    """
    neighbors: List[Agent] = []
    max_dist_sq = max_distance * max_distance
    position = subject.position
    heading = subject.velocity
    for other in population:
        if other is subject:
            continue
        offset = other.position - position
        dist_sq = offset.x * offset.x + offset.y * offset.y
        if dist_sq <= 0.0 or dist_sq >= max_dist_sq:
            continue
        if angle_between(offset, heading) < view_angle:
            neighbors.append(other)
    return neighbors
