from __future__ import annotations

from dataclasses import dataclass, field

from pygame.math import Vector2


@dataclass(slots=True)
class Statistics:
    mean_velocity: Vector2 = field(default_factory=Vector2)
    stdev_velocity: Vector2 = field(default_factory=Vector2)
    mean_speed: float = 0.0
    polarization: float = 0.0
