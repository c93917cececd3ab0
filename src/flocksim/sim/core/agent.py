from __future__ import annotations

from dataclasses import dataclass, field

from pygame.math import Vector2


@dataclass(slots=True)
class Agent:
    position: Vector2 = field(default_factory=Vector2)
    velocity: Vector2 = field(default_factory=Vector2)

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    @property
    def vx(self) -> float:
        return self.velocity.x

    @property
    def vy(self) -> float:
        return self.velocity.y

    def copy(self) -> "Agent":
        return Agent(position=Vector2(self.position), velocity=Vector2(self.velocity))
