from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from pygame.math import Vector2

from ..core.agent import Agent


@dataclass(frozen=True, slots=True)
class AgentSnapshot:
    x: float
    y: float
    vx: float
    vy: float

    @property
    def position(self) -> Vector2:
        return Vector2(self.x, self.y)

    @property
    def velocity(self) -> Vector2:
        return Vector2(self.vx, self.vy)

    @classmethod
    def of(cls, agent: Agent) -> "AgentSnapshot":
        return cls(agent.position.x, agent.position.y, agent.velocity.x, agent.velocity.y)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "vx": self.vx, "vy": self.vy}


@dataclass(frozen=True, slots=True)
class SnapshotMetadata:
    canvas_width: float
    canvas_height: float
    seed: int
    population: int
    with_predator: bool


@dataclass(frozen=True, slots=True)
class FlockSnapshot:
    tick: int
    agents: Tuple[AgentSnapshot, ...]
    predator: Optional[AgentSnapshot]
    metadata: SnapshotMetadata

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tick": self.tick,
            "agents": [agent.to_dict() for agent in self.agents],
            "predator": None if self.predator is None else self.predator.to_dict(),
            "metadata": {
                "canvas_width": self.metadata.canvas_width,
                "canvas_height": self.metadata.canvas_height,
                "seed": self.metadata.seed,
                "population": self.metadata.population,
                "with_predator": self.metadata.with_predator,
            },
        }
