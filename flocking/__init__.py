"""Flocking simulation: agents, flock driver and simulation context."""

from .params import ConfigError, FlockParams, Group, GroupProfile, SteeringParams
from .agent import Agent
from .flock import Flock
from .simulation import Frame, Simulation

__all__ = [
    "Agent", "ConfigError", "Flock", "FlockParams", "Frame", "Group",
    "GroupProfile", "Simulation", "SteeringParams",
]
