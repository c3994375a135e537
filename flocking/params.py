"""Typed, validated simulation parameters built from the config module."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple

import numpy as np

from config import flock as default_config


class ConfigError(ValueError):
    """Raised when simulation parameters are malformed."""


class Group(Enum):
    """Agent group tag. Determines spawn region, home and facing policy."""
    A = "A"
    B = "B"


FACING_POLICIES = ("position", "velocity")
UPDATE_ORDERS = ("sequential", "simultaneous")


def _finite(name: str, value) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(value):
        raise ConfigError(f"{name} must be finite, got {value}")
    return value


def _point(name: str, value) -> Tuple[float, float, float]:
    try:
        items = tuple(value)
    except TypeError:
        raise ConfigError(f"{name} must be a 3-vector, got {value!r}") from None
    if len(items) != 3:
        raise ConfigError(f"{name} must have 3 components, got {len(items)}")
    return tuple(_finite(f"{name}[{i}]", v) for i, v in enumerate(items))


def _range(name: str, value) -> Tuple[float, float]:
    try:
        low, high = value
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a (min, max) pair, got {value!r}") from None
    low = _finite(f"{name} min", low)
    high = _finite(f"{name} max", high)
    if low > high:
        raise ConfigError(f"{name} min {low} is greater than max {high}")
    return (low, high)


@dataclass(frozen=True)
class SteeringParams:
    """
    Ranges and weights of the steering rules.

    Attributes:
        separation_radius: Neighbors closer than this push the agent away
        alignment_radius: Neighbors closer than this contribute velocity
        cohesion_radius: Neighbors closer than this pull toward their centroid
        separation_weight: Multiplied by agent mass before weighting
        alignment_weight: Weight of the clamped average neighbor velocity
        cohesion_weight: Weight of the steer toward the local centroid
        centering_weight: Multiplied by distance from home and mass
        alignment_speed_limit: Maximum length of the averaged velocity
    """
    separation_radius: float = 40.0
    alignment_radius: float = 50.0
    cohesion_radius: float = 10.0
    separation_weight: float = 0.015
    alignment_weight: float = 0.05
    cohesion_weight: float = 0.01
    centering_weight: float = 0.0001
    alignment_speed_limit: float = 1.0

    def __post_init__(self):
        for name in ("separation_radius", "alignment_radius", "cohesion_radius",
                     "alignment_speed_limit"):
            value = _finite(name, getattr(self, name))
            if value <= 0:
                raise ConfigError(f"{name} must be positive, got {value}")
            object.__setattr__(self, name, value)
        for name in ("separation_weight", "alignment_weight", "cohesion_weight",
                     "centering_weight"):
            value = _finite(name, getattr(self, name))
            if value < 0:
                raise ConfigError(f"{name} must not be negative, got {value}")
            object.__setattr__(self, name, value)

    @classmethod
    def from_dict(cls, values: dict) -> "SteeringParams":
        unknown = set(values) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigError(f"Unknown steering parameters: {', '.join(sorted(unknown))}")
        return cls(**values)


@dataclass(frozen=True)
class GroupProfile:
    """Per-group spawn region, home point, mass and facing policy."""
    mass: float
    home: Tuple[float, float, float]
    spawn_x: Tuple[float, float]
    spawn_y: Tuple[float, float]
    spawn_z: Tuple[float, float]
    facing: str
    color: Tuple[float, float, float] = (1.0, 1.0, 1.0)

    def __post_init__(self):
        mass = _finite("mass", self.mass)
        if mass <= 0:
            raise ConfigError(f"mass must be positive, got {mass}")
        if self.facing not in FACING_POLICIES:
            raise ConfigError(
                f"facing must be one of {', '.join(FACING_POLICIES)}, got {self.facing!r}"
            )
        object.__setattr__(self, "mass", mass)
        object.__setattr__(self, "home", _point("home", self.home))
        object.__setattr__(self, "spawn_x", _range("spawn_x", self.spawn_x))
        object.__setattr__(self, "spawn_y", _range("spawn_y", self.spawn_y))
        object.__setattr__(self, "spawn_z", _range("spawn_z", self.spawn_z))
        object.__setattr__(self, "color", _point("color", self.color))

    @property
    def home_vector(self) -> np.ndarray:
        return np.array(self.home, dtype=np.float64)


def _default_groups() -> Dict[Group, GroupProfile]:
    return {group: default_profile(group) for group in Group}


def default_profile(group: Group) -> GroupProfile:
    """The configured profile for a group."""
    return GroupProfile(**default_config.GROUPS[group.value])


@dataclass(frozen=True)
class FlockParams:
    """Everything needed to build and advance a flock."""
    num_a: int = 200
    num_b: int = 0
    update_order: str = "sequential"
    steering: SteeringParams = field(default_factory=SteeringParams)
    groups: Dict[Group, GroupProfile] = field(default_factory=_default_groups)
    spawn_velocity: Dict[str, Tuple[float, float]] = field(
        default_factory=lambda: dict(default_config.SPAWN_VELOCITY)
    )

    def __post_init__(self):
        for name in ("num_a", "num_b"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ConfigError(f"{name} must not be negative, got {value}")
        if self.update_order not in UPDATE_ORDERS:
            raise ConfigError(
                f"update_order must be one of {', '.join(UPDATE_ORDERS)}, got {self.update_order!r}"
            )
        missing = [g.value for g in Group if g not in self.groups]
        if missing:
            raise ConfigError(f"Missing group profiles: {', '.join(missing)}")
        velocity = {}
        for axis in ("x", "y", "z"):
            if axis not in self.spawn_velocity:
                raise ConfigError(f"spawn_velocity is missing axis {axis!r}")
            velocity[axis] = _range(f"spawn_velocity {axis}", self.spawn_velocity[axis])
        object.__setattr__(self, "spawn_velocity", velocity)

    def profile(self, group: Group) -> GroupProfile:
        return self.groups[group]

    @classmethod
    def from_config(cls, module=default_config, **overrides) -> "FlockParams":
        """
        Build parameters from a dict-style config module.

        Args:
            module: Module exposing FLOCK, STEERING, GROUPS and SPAWN_VELOCITY
            **overrides: num_a, num_b or update_order values taking precedence

        Returns:
            Validated FlockParams
        """
        flock = {**module.FLOCK, **{k: v for k, v in overrides.items() if v is not None}}
        try:
            groups = {Group(tag): GroupProfile(**values) for tag, values in module.GROUPS.items()}
        except (ValueError, TypeError) as e:
            if isinstance(e, ConfigError):
                raise
            raise ConfigError(f"Invalid group configuration: {e}") from e
        return cls(
            num_a=flock.get("num_a", 0),
            num_b=flock.get("num_b", 0),
            update_order=flock.get("update_order", "sequential"),
            steering=SteeringParams.from_dict(module.STEERING),
            groups=groups,
            spawn_velocity=module.SPAWN_VELOCITY,
        )
