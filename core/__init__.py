"""Core viewer components."""

from .camera import Camera
from .application import Application

__all__ = ["Camera", "Application"]
