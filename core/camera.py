"""Fixed perspective camera looking at the flock."""

import numpy as np
from OpenGL.GL import *
from OpenGL.GLU import *
from config import flock as config


class Camera:
    """Perspective camera parked at a fixed point, aimed at a fixed target."""

    def __init__(self, aspect: float):
        self.fov = config.CAMERA["fov"]
        self.near = config.CAMERA["near_clip"]
        self.far = config.CAMERA["far_clip"]
        self.position = np.array(config.CAMERA["position"], dtype=np.float64)
        self.target = np.array(config.CAMERA["target"], dtype=np.float64)
        self.aspect = aspect

    def resize(self, width: int, height: int):
        """Track the window aspect ratio and rebuild the projection."""
        self.aspect = width / max(height, 1)
        glViewport(0, 0, width, height)
        self.apply_projection()

    def apply_projection(self):
        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(self.fov, self.aspect, self.near, self.far)
        glMatrixMode(GL_MODELVIEW)

    def apply(self):
        """Apply the camera transformation to the OpenGL modelview matrix."""
        pos, look_at = self.position, self.target
        glLoadIdentity()
        gluLookAt(
            pos[0], pos[1], pos[2],
            look_at[0], look_at[1], look_at[2],
            0, 1, 0
        )
