"""Simulation context owning the flock, its parameters and random source."""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .flock import Flock
from .params import ConfigError, FlockParams


@dataclass(frozen=True)
class Frame:
    """Per-tick output handed to renderers: one row per agent."""
    tick: int
    positions: np.ndarray
    facings: np.ndarray
    groups: np.ndarray

    def __len__(self) -> int:
        return len(self.positions)


class Simulation:
    """
    Explicit simulation context.

    Either builds a randomly spawned flock from params, or wraps a flock
    supplied by the caller (fixed initial conditions, tests). A wrapped flock
    must agree with params on update order and steering; without params they
    are taken from the flock.
    """

    def __init__(self, params: Optional[FlockParams] = None, seed: Optional[int] = None,
                 flock: Optional[Flock] = None):
        self.rng = np.random.default_rng(seed)
        if flock is None:
            self.params = params if params is not None else FlockParams.from_config()
            self.flock = Flock.populate(self.params, self.rng)
        else:
            self.params = params if params is not None else self._params_for(flock)
            self._check_flock(self.params, flock)
            self.flock = flock
        self.tick_count = 0

    @staticmethod
    def _params_for(flock: Flock) -> FlockParams:
        num_b = int(flock.groups().sum())
        return FlockParams(
            num_a=len(flock) - num_b,
            num_b=num_b,
            update_order=flock.update_order,
            steering=flock.steering,
        )

    @staticmethod
    def _check_flock(params: FlockParams, flock: Flock):
        if params.update_order != flock.update_order:
            raise ConfigError(
                f"params.update_order is {params.update_order!r} but the flock "
                f"updates {flock.update_order!r}"
            )
        if params.steering != flock.steering:
            raise ConfigError("params.steering differs from the flock's steering parameters")

    def tick(self) -> Frame:
        """Advance one tick and return the new frame."""
        self.flock.tick()
        self.tick_count += 1
        return self.frame()

    def run(self, ticks: int) -> Frame:
        """Advance several ticks and return the last frame."""
        if ticks < 0:
            raise ValueError(f"ticks must not be negative, got {ticks}")
        for _ in range(ticks):
            self.flock.tick()
            self.tick_count += 1
        return self.frame()

    def frame(self) -> Frame:
        return Frame(
            tick=self.tick_count,
            positions=self.flock.positions(),
            facings=self.flock.facings(),
            groups=self.flock.groups(),
        )
