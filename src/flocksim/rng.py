from __future__ import annotations

import random

from pygame.math import Vector2


class DeterministicRng:
    def __init__(self, seed: int):
        self._seed = seed
        self._random = random.Random(seed)

    @property
    def seed(self) -> int:
        return self._seed

    def reset(self) -> None:
        self._random.seed(self._seed)

    def next_vector(self, low_x: float, high_x: float, low_y: float, high_y: float) -> Vector2:
        x = self._random.uniform(low_x, high_x)
        y = self._random.uniform(low_y, high_y)
        return Vector2(x, y)
