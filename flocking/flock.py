"""Flock container and per-tick driver, backed by contiguous arrays and Numba kernels."""

from typing import Iterator, List, Optional, Sequence

import numpy as np

from .agent import Agent
from .kernels import accumulate_all, integrate_all, tick_sequential
from .params import UPDATE_ORDERS, ConfigError, FlockParams, Group, GroupProfile, SteeringParams


class Flock:
    """
    Fixed, ordered set of agents advanced one tick at a time.

    Flock state lives in (N, 3) float64 arrays; each Agent's vectors are
    views onto its row, so the per-agent rule methods and the kernels see the
    same state.

    Every agent is a neighbor candidate for every other agent, itself
    included (the zero-distance guard in each rule drops self).

    With the default "sequential" update order agents step in index order
    and each one reads the live flock, so agent i sees agents 0..i-1 already
    moved this tick. The result therefore depends on agent ordering. The
    "simultaneous" order accumulates every agent against the pre-tick state
    before any agent integrates.
    """

    def __init__(self, agents: Optional[Sequence[Agent]] = None,
                 update_order: str = "sequential"):
        if update_order not in UPDATE_ORDERS:
            raise ConfigError(f"Unknown update order {update_order!r}")
        self.agents: List[Agent] = list(agents or [])
        self.update_order = update_order
        self.num_agents = len(self.agents)

        self.steering = self.agents[0].steering if self.agents else SteeringParams()
        if any(agent.steering != self.steering for agent in self.agents):
            raise ConfigError("All agents in a flock must share steering parameters")

        n = self.num_agents
        self._positions = np.zeros((n, 3), dtype=np.float64)
        self._velocities = np.zeros((n, 3), dtype=np.float64)
        self._accelerations = np.zeros((n, 3), dtype=np.float64)
        self._facings = np.zeros((n, 3), dtype=np.float64)
        self._homes = np.zeros((n, 3), dtype=np.float64)
        self._masses = np.array([a.mass for a in self.agents], dtype=np.float64)
        self._face_velocity = np.array([a.faces_velocity for a in self.agents], dtype=np.bool_)
        self._groups = np.array([0 if a.group is Group.A else 1 for a in self.agents],
                                dtype=np.int32)

        for i, agent in enumerate(self.agents):
            agent.bind(self._positions[i], self._velocities[i], self._accelerations[i],
                       self._facings[i], self._homes[i])

    @classmethod
    def populate(cls, params: FlockParams, rng: np.random.Generator) -> "Flock":
        """Create params.num_a group-A agents followed by params.num_b group-B agents."""
        agents = []
        for group, count in ((Group.A, params.num_a), (Group.B, params.num_b)):
            profile = params.profile(group)
            for _ in range(count):
                agents.append(cls._spawn(group, profile, params, rng))

        print(f"[Flock] Populated {params.num_a:,} A + {params.num_b:,} B agents "
              f"({params.update_order} updates)")
        return cls(agents, update_order=params.update_order)

    @staticmethod
    def _spawn(group: Group, profile: GroupProfile, params: FlockParams,
               rng: np.random.Generator) -> Agent:
        position = np.array([rng.uniform(*profile.spawn_x),
                             rng.uniform(*profile.spawn_y),
                             rng.uniform(*profile.spawn_z)])
        v = params.spawn_velocity
        velocity = np.array([rng.uniform(*v["x"]),
                             rng.uniform(*v["y"]),
                             rng.uniform(*v["z"])])
        return Agent(
            position=position,
            velocity=velocity,
            group=group,
            profile=profile,
            steering=params.steering,
        )

    def tick(self):
        """Advance every agent once."""
        s = self.steering
        weights = (
            s.separation_radius, s.alignment_radius, s.cohesion_radius,
            s.separation_weight, s.alignment_weight, s.cohesion_weight,
            s.centering_weight, s.alignment_speed_limit,
        )

        if self.update_order == "simultaneous":
            # Read phase over the pre-tick state, then write phase
            accumulate_all(
                self._positions, self._velocities, self._accelerations,
                self._masses, self._homes, *weights, self.num_agents
            )
            integrate_all(
                self._positions, self._velocities, self._accelerations,
                self._facings, self._face_velocity, self.num_agents
            )
        else:
            tick_sequential(
                self._positions, self._velocities, self._accelerations, self._facings,
                self._masses, self._homes, self._face_velocity, *weights, self.num_agents
            )

    def positions(self) -> np.ndarray:
        return self._positions.copy()

    def velocities(self) -> np.ndarray:
        return self._velocities.copy()

    def facings(self) -> np.ndarray:
        return self._facings.copy()

    def homes(self) -> np.ndarray:
        return self._homes.copy()

    def groups(self) -> np.ndarray:
        """Group tags as ints: 0 for A, 1 for B."""
        return self._groups.copy()

    def __len__(self) -> int:
        return self.num_agents

    def __iter__(self) -> Iterator[Agent]:
        return iter(self.agents)

    def __getitem__(self, index: int) -> Agent:
        return self.agents[index]
