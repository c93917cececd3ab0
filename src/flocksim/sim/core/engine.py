from __future__ import annotations

import copy
import logging
from typing import List, Optional, Tuple

from ...config import FlockConfig
from ...rng import DeterministicRng
from ..systems import neighbors as neighbor_system
from ..systems import statistics as statistics_system
from ..systems import steering
from ..types.snapshot import AgentSnapshot, FlockSnapshot, SnapshotMetadata
from ..types.statistics import Statistics
from .agent import Agent

logger = logging.getLogger(__name__)

INITIAL_VELOCITY_RANGE = (-5.0, 5.0)


class FlockEngine:
    def __init__(self, config: FlockConfig, rng: Optional[DeterministicRng] = None):
        self._config = copy.deepcopy(config).validate()
        self._rng = rng if rng is not None else DeterministicRng(self._config.seed)
        self._birds: List[Agent] = []
        self._predator: Optional[Agent] = None
        self._tick = 0
        self._bootstrap_population()
        logger.debug(
            "flock created: population=%d predator=%s canvas=%sx%s seed=%s",
            len(self._birds),
            self._predator is not None,
            self._config.canvas_width,
            self._config.canvas_height,
            self._rng.seed,
        )

    @property
    def config(self) -> FlockConfig:
        return copy.deepcopy(self._config)

    @property
    def tick(self) -> int:
        return self._tick

    @property
    def birds(self) -> Tuple[Agent, ...]:
        return tuple(self._birds)

    @property
    def predator(self) -> Optional[Agent]:
        return self._predator

    def population_size(self) -> int:
        return len(self._birds)

    def reset(self) -> None:
        self._rng.reset()
        self._birds.clear()
        self._predator = None
        self._tick = 0
        self._bootstrap_population()
        logger.debug("flock reset: population=%d", len(self._birds))

    def step(self) -> None:
        config = self._config
        frozen = [bird.copy() for bird in self._birds]

        if self._predator is not None:
            self._evolve_predator(frozen)

        speed = config.speed
        predator = self._predator
        for index, (bird, before) in enumerate(zip(self._birds, frozen)):
            neighbors = neighbor_system.find_neighbors(before, frozen, config.distance, config.view_angle)
            velocity = before.velocity.copy()
            if neighbors:
                velocity += steering.separation(neighbors, before, config.separation_distance, config.separation)
                velocity += steering.alignment(neighbors, before, config.alignment)
                velocity += steering.cohesion(neighbors, before, config.cohesion)
            if predator is not None:
                velocity += steering.avoid_predator(
                    frozen,
                    before,
                    index,
                    predator,
                    config.separation_distance,
                    config.view_angle,
                    repulsion=config.predator.repulsion,
                    alarm_gain=config.predator.alarm_gain,
                )
            velocity = steering.clamp_speed(velocity, speed.max_speed, speed.min_speed)
            velocity += steering.boundary_avoidance(
                before.position,
                config.canvas_width,
                config.canvas_height,
                config.boundary_margin,
                config.boundary_turn_weight,
            )
            bird.velocity = velocity
            bird.position = before.position + velocity * speed.velocity_scale

        self._tick += 1

    def run(self, steps: int) -> None:
        for _ in range(steps):
            self.step()

    def snapshot(self) -> FlockSnapshot:
        config = self._config
        return FlockSnapshot(
            tick=self._tick,
            agents=tuple(AgentSnapshot.of(bird) for bird in self._birds),
            predator=None if self._predator is None else AgentSnapshot.of(self._predator),
            metadata=SnapshotMetadata(
                canvas_width=config.canvas_width,
                canvas_height=config.canvas_height,
                seed=self._rng.seed,
                population=len(self._birds),
                with_predator=self._predator is not None,
            ),
        )

    def compute_statistics(self) -> Statistics:
        return statistics_system.compute_statistics(self._birds)

    def _evolve_predator(self, flock: List[Agent]) -> None:
        config = self._config
        settings = config.predator
        predator = self._predator
        neighbors = neighbor_system.find_neighbors(predator, flock, config.distance, config.view_angle)
        velocity = predator.velocity.copy()
        if neighbors:
            velocity += steering.cohesion(neighbors, predator, config.cohesion * settings.cohesion_multiplier)
            velocity += steering.alignment(neighbors, predator, settings.alignment_weight)
        velocity = steering.clamp_speed(velocity, settings.max_speed, settings.min_speed)
        velocity += steering.boundary_avoidance(
            predator.position,
            config.canvas_width,
            config.canvas_height,
            config.boundary_margin,
            config.boundary_turn_weight,
        )
        predator.velocity = velocity
        predator.position = predator.position + velocity * settings.velocity_scale

    def _bootstrap_population(self) -> None:
        config = self._config
        low, high = INITIAL_VELOCITY_RANGE
        for _ in range(config.population):
            self._birds.append(self._spawn(low, high))
        if config.with_predator:
            self._predator = self._spawn(low, high)

    def _spawn(self, low: float, high: float) -> Agent:
        config = self._config
        position = self._rng.next_vector(0.0, config.canvas_width, 0.0, config.canvas_height)
        velocity = self._rng.next_vector(low, high, low, high)
        return Agent(position=position, velocity=velocity)
