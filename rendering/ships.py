"""Ship rendering - one oriented fin per agent, drawn from VBOs."""

import numpy as np
from OpenGL.GL import *
from OpenGL.arrays import vbo

from config import flock as config
from flocking.params import FlockParams, Group
from .geometry import VERTS_PER_SHIP, build_ship_vertices


class ShipRenderer:
    """
    Turns per-tick agent frames into lit, coloured triangles.

    Positions place each ship; facings orient it. Group A faces its own
    position (outward from the origin), group B its velocity.
    """

    def __init__(self, num_ships: int, params: FlockParams):
        self.num_ships = num_ships
        self.length = float(config.SHIPS["length"])
        self.radius = float(config.SHIPS["radius"])
        self.offset = float(config.SHIPS["offset"])

        self.palette = np.array(
            [params.profile(Group.A).color, params.profile(Group.B).color],
            dtype=np.float32
        )

        total = max(num_ships, 1) * VERTS_PER_SHIP
        self._vertices = np.zeros((total, 3), dtype=np.float32)
        self._normals = np.zeros((total, 3), dtype=np.float32)
        self._vert_colors = np.zeros((total, 3), dtype=np.float32)

        self._vbo_vertices = None
        self._vbo_normals = None
        self._vbo_colors = None
        self._vbos_initialized = False

    def _init_vbos(self):
        """Initialize VBOs for fast GPU rendering."""
        if self._vbos_initialized:
            return

        try:
            self._vbo_vertices = vbo.VBO(self._vertices, usage=GL_DYNAMIC_DRAW)
            self._vbo_normals = vbo.VBO(self._normals, usage=GL_DYNAMIC_DRAW)
            self._vbo_colors = vbo.VBO(self._vert_colors, usage=GL_DYNAMIC_DRAW)
            self._vbos_initialized = True
        except Exception as e:
            print(f"[Ships] VBO init failed, using client arrays: {e}")
            self._vbos_initialized = False

    def build(self, frame) -> int:
        """Fill vertex buffers from a simulation frame. Returns the vertex count."""
        count = min(len(frame), self.num_ships)
        if count == 0:
            return 0

        build_ship_vertices(
            np.ascontiguousarray(frame.positions, dtype=np.float64),
            np.ascontiguousarray(frame.facings, dtype=np.float64),
            np.ascontiguousarray(frame.groups, dtype=np.int32),
            self.palette,
            self._vertices,
            self._normals,
            self._vert_colors,
            self.length,
            self.radius,
            self.offset,
            count
        )
        return count * VERTS_PER_SHIP

    def draw(self, frame):
        """Render the ships for one frame."""
        if not self._vbos_initialized:
            self._init_vbos()

        total_verts = self.build(frame)
        if total_verts == 0:
            return

        glEnableClientState(GL_VERTEX_ARRAY)
        glEnableClientState(GL_NORMAL_ARRAY)
        glEnableClientState(GL_COLOR_ARRAY)

        if self._vbos_initialized:
            self._vbo_vertices.set_array(self._vertices[:total_verts])
            self._vbo_normals.set_array(self._normals[:total_verts])
            self._vbo_colors.set_array(self._vert_colors[:total_verts])

            self._vbo_vertices.bind()
            glVertexPointer(3, GL_FLOAT, 0, None)
            self._vbo_normals.bind()
            glNormalPointer(GL_FLOAT, 0, None)
            self._vbo_colors.bind()
            glColorPointer(3, GL_FLOAT, 0, None)

            glDrawArrays(GL_TRIANGLES, 0, total_verts)

            self._vbo_vertices.unbind()
            self._vbo_normals.unbind()
            self._vbo_colors.unbind()
        else:
            glVertexPointer(3, GL_FLOAT, 0, self._vertices[:total_verts])
            glNormalPointer(GL_FLOAT, 0, self._normals[:total_verts])
            glColorPointer(3, GL_FLOAT, 0, self._vert_colors[:total_verts])
            glDrawArrays(GL_TRIANGLES, 0, total_verts)

        glDisableClientState(GL_VERTEX_ARRAY)
        glDisableClientState(GL_NORMAL_ARRAY)
        glDisableClientState(GL_COLOR_ARRAY)
