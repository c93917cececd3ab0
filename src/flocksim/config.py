from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml


class InvalidConfiguration(ValueError):
    """Raised when a flock is configured with values it cannot run with."""


@dataclass
class SpeedLimits:
    max_speed: float = 5.0
    min_speed: float = 2.0
    # fraction of the velocity integrated into the position each step
    velocity_scale: float = 0.9


@dataclass
class PredatorConfig:
    max_speed: float = 15.0
    min_speed: float = 2.0
    velocity_scale: float = 0.8
    cohesion_multiplier: float = 2.0
    alignment_weight: float = 0.001
    repulsion: float = 6.0
    alarm_gain: float = 0.5


@dataclass
class FlockConfig:
    population: int = 100
    separation: float = 0.05
    alignment: float = 0.05
    cohesion: float = 0.005
    distance: float = 75.0
    separation_distance: float = 20.0
    with_predator: bool = False
    view_angle: float = 2.0
    canvas_width: float = 800.0
    canvas_height: float = 600.0
    boundary_margin: float = 40.0
    boundary_turn_weight: float = 4.0
    seed: int = 42
    speed: SpeedLimits = field(default_factory=SpeedLimits)
    predator: PredatorConfig = field(default_factory=PredatorConfig)

    @staticmethod
    def from_yaml(path: Path) -> "FlockConfig":
        data = yaml.safe_load(Path(path).read_text())
        return load_config(data or {})

    def validate(self) -> "FlockConfig":
        if not _is_integer(self.population) or self.population <= 0:
            raise InvalidConfiguration(f"population must be a positive integer, got {self.population!r}")
        if not _is_integer(self.seed):
            raise InvalidConfiguration(f"seed must be an integer, got {self.seed!r}")
        if not isinstance(self.with_predator, bool):
            raise InvalidConfiguration(f"with_predator must be a boolean, got {self.with_predator!r}")
        non_negative = {
            "separation": self.separation,
            "alignment": self.alignment,
            "cohesion": self.cohesion,
            "distance": self.distance,
            "separation_distance": self.separation_distance,
            "view_angle": self.view_angle,
            "boundary_margin": self.boundary_margin,
            "boundary_turn_weight": self.boundary_turn_weight,
            "speed.max_speed": self.speed.max_speed,
            "speed.min_speed": self.speed.min_speed,
            "speed.velocity_scale": self.speed.velocity_scale,
            "predator.max_speed": self.predator.max_speed,
            "predator.min_speed": self.predator.min_speed,
            "predator.velocity_scale": self.predator.velocity_scale,
            "predator.cohesion_multiplier": self.predator.cohesion_multiplier,
            "predator.alignment_weight": self.predator.alignment_weight,
            "predator.repulsion": self.predator.repulsion,
            "predator.alarm_gain": self.predator.alarm_gain,
        }
        for name, value in non_negative.items():
            if not _is_number(value) or value < 0:
                raise InvalidConfiguration(f"{name} must be a non-negative number, got {value!r}")
        for name, value in (("canvas_width", self.canvas_width), ("canvas_height", self.canvas_height)):
            if not _is_number(value) or value <= 0:
                raise InvalidConfiguration(f"{name} must be positive, got {value!r}")
            # opposite margin bands must not overlap
            if 2 * self.boundary_margin > value:
                raise InvalidConfiguration(
                    f"boundary_margin ({self.boundary_margin}) is more than half of {name} ({value})"
                )
        for prefix, band in (("speed", self.speed), ("predator", self.predator)):
            if band.max_speed < band.min_speed:
                raise InvalidConfiguration(
                    f"{prefix}.max_speed ({band.max_speed}) is below min_speed ({band.min_speed})"
                )
        return self


def _is_integer(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _build(cls, raw, section: str):
    if not isinstance(raw, dict):
        raise InvalidConfiguration(f"{section} section must be a mapping, got {type(raw).__name__}")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise InvalidConfiguration(f"unknown {section} keys: {', '.join(unknown)}")
    return cls(**raw)


def load_config(raw: dict) -> FlockConfig:
    if not isinstance(raw, dict):
        raise InvalidConfiguration(f"configuration must be a mapping, got {type(raw).__name__}")
    speed = _build(SpeedLimits, raw.get("speed", {}) or {}, "speed")
    predator = _build(PredatorConfig, raw.get("predator", {}) or {}, "predator")
    flock_values = {k: v for k, v in raw.items() if k not in {"speed", "predator"}}
    config = _build(FlockConfig, flock_values, "flock")
    config.speed = speed
    config.predator = predator
    return config
