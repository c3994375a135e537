"""Individual agent with kinematic state and steering behaviors."""

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

import numpy as np

from .params import (FACING_POLICIES, ConfigError, Group, GroupProfile, SteeringParams,
                     default_profile)
from .vector import as_vec3, distance, limit, normalize


@dataclass
class Agent:
    """
    A single agent in the flock.

    Inside a Flock the vector attributes are views onto rows of the flock's
    arrays, so every update here is done in place.

    Attributes:
        position: 3D position vector
        velocity: 3D velocity vector
        acceleration: 3D acceleration vector (reset every integration step)
        mass: Positive mass, fixed at creation (defaults to the group's mass)
        group: Group tag, fixed at creation
        home: Point the centering force pulls toward (defaults to the group's home)
        facing_policy: "position" faces outward along the radial direction,
            "velocity" faces along the heading. Determined by the group profile.
        profile: Group profile supplying the defaults (the configured one for
            the group if omitted)
        steering: Ranges and weights shared by the whole flock
    """
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    acceleration: np.ndarray = field(default_factory=lambda: np.zeros(3))
    mass: Optional[float] = None
    group: Group = Group.A
    home: Optional[np.ndarray] = None
    facing_policy: Optional[str] = None
    profile: Optional[GroupProfile] = None
    steering: SteeringParams = field(default_factory=SteeringParams)
    facing: np.ndarray = field(init=False)

    def __post_init__(self):
        if self.profile is None:
            self.profile = default_profile(self.group)
        if self.facing_policy is None:
            self.facing_policy = self.profile.facing
        if self.facing_policy not in FACING_POLICIES:
            raise ConfigError(f"Unknown facing policy {self.facing_policy!r}")
        if self.facing_policy != self.profile.facing:
            raise ConfigError(
                f"Group {self.group.value} faces by {self.profile.facing!r}, "
                f"got facing_policy={self.facing_policy!r}"
            )
        if self.mass is None:
            self.mass = self.profile.mass
        if self.home is None:
            self.home = self.profile.home_vector

        self.position = as_vec3(self.position)
        self.velocity = as_vec3(self.velocity)
        self.acceleration = as_vec3(self.acceleration)
        self.home = as_vec3(self.home)
        if not self.mass > 0:
            raise ConfigError(f"Agent mass must be positive, got {self.mass}")
        self.facing = self._facing_target()

    def bind(self, position: np.ndarray, velocity: np.ndarray, acceleration: np.ndarray,
             facing: np.ndarray, home: np.ndarray):
        """Copy state into the given array rows and keep them as this agent's storage."""
        for name, row in (('position', position), ('velocity', velocity),
                          ('acceleration', acceleration), ('facing', facing), ('home', home)):
            row[:] = getattr(self, name)
            setattr(self, name, row)

    @property
    def faces_velocity(self) -> bool:
        return self.facing_policy == "velocity"

    def step(self, flock: Sequence["Agent"]) -> Tuple[np.ndarray, np.ndarray]:
        """Advance one tick against the given neighbor set."""
        self.accumulate(flock)
        self.integrate()
        return self.position, self.facing

    def accumulate(self, flock: Sequence["Agent"]) -> np.ndarray:
        """Sum the weighted steering forces into acceleration."""
        s = self.steering
        separation = self.separate(flock) * (s.separation_weight * self.mass)
        alignment = self.align(flock) * s.alignment_weight
        cohesion = self.cohesion(flock) * s.cohesion_weight
        # Stronger centering if farther away or heavier
        centering = self.steer(self.home) * s.centering_weight
        centering = centering * (distance(self.position, self.home) * self.mass)

        self.acceleration += (separation + alignment + cohesion + centering) / self.mass
        return self.acceleration.copy()

    def integrate(self):
        """Euler step: acceleration into velocity, velocity into position."""
        self.velocity += self.acceleration
        self.position += self.velocity
        self.acceleration[:] = 0.0
        self.facing[:] = self._facing_target()

    def separate(self, flock: Sequence["Agent"]) -> np.ndarray:
        """Unit vector away from neighbors, closer neighbors weighted more."""
        total = np.zeros(3)
        count = 0

        for other in flock:
            dist = distance(self.position, other.position)
            if 0 < dist < self.steering.separation_radius:
                total += normalize(self.position - other.position) / dist
                count += 1

        if count > 0:
            total = normalize(total / count)
        return total

    def align(self, flock: Sequence["Agent"]) -> np.ndarray:
        """Average neighbor velocity, clamped to the alignment speed limit."""
        total = np.zeros(3)
        count = 0

        for other in flock:
            dist = distance(self.position, other.position)
            if 0 < dist < self.steering.alignment_radius:
                total += other.velocity
                count += 1

        if count > 0:
            total = limit(total / count, self.steering.alignment_speed_limit)
        return total

    def cohesion(self, flock: Sequence["Agent"]) -> np.ndarray:
        """Steer toward the centroid of very close neighbors."""
        total = np.zeros(3)
        count = 0

        for other in flock:
            dist = distance(self.position, other.position)
            if 0 < dist < self.steering.cohesion_radius:
                total += other.position
                count += 1

        if count > 0:
            return self.steer(total / count)
        return total

    def steer(self, target: np.ndarray) -> np.ndarray:
        """Unit desired direction toward target minus current velocity."""
        desired = np.asarray(target, dtype=np.float64) - self.position
        if np.linalg.norm(desired) > 0:
            return normalize(desired) - self.velocity
        return np.zeros(3)

    def _facing_target(self) -> np.ndarray:
        if self.facing_policy == "velocity":
            return self.velocity.copy()
        return self.position.copy()
