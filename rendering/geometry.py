"""Numba JIT-compiled ship geometry built from per-agent facing targets."""

import math
import numpy as np
from numba import njit, prange


VERTS_PER_SHIP = 6


@njit(parallel=True, fastmath=True, cache=True)
def build_ship_vertices(
    positions: np.ndarray,
    facings: np.ndarray,
    groups: np.ndarray,
    palette: np.ndarray,
    vertices: np.ndarray,
    normals: np.ndarray,
    vert_colors: np.ndarray,
    length: float,
    radius: float,
    offset: float,
    num_ships: int
):
    """
    Write one two-sided tapered fin per agent.

    The fin's axis points along normalize(facing); a zero facing falls back
    to +z. The base sits `offset` ahead of the agent position and the tip a
    further `length` beyond it.
    """
    world_up_x, world_up_y, world_up_z = 0.0, 1.0, 0.0
    world_right_x, world_right_y, world_right_z = 1.0, 0.0, 0.0

    for i in prange(num_ships):
        px, py, pz = positions[i, 0], positions[i, 1], positions[i, 2]

        fx, fy, fz = facings[i, 0], facings[i, 1], facings[i, 2]
        f_len = math.sqrt(fx * fx + fy * fy + fz * fz)
        if f_len < 0.0001:
            fx, fy, fz = 0.0, 0.0, 1.0
        else:
            fx, fy, fz = fx / f_len, fy / f_len, fz / f_len

        # Right = forward x world_up
        rx = fy * world_up_z - fz * world_up_y
        ry = fz * world_up_x - fx * world_up_z
        rz = fx * world_up_y - fy * world_up_x

        r_len = math.sqrt(rx * rx + ry * ry + rz * rz)
        if r_len < 0.1:
            # Facing is near vertical
            rx = fy * world_right_z - fz * world_right_y
            ry = fz * world_right_x - fx * world_right_z
            rz = fx * world_right_y - fy * world_right_x
            r_len = math.sqrt(rx * rx + ry * ry + rz * rz)

        rx /= r_len
        ry /= r_len
        rz /= r_len

        # Up = right x forward, the fin's face normal
        ux = ry * fz - rz * fy
        uy = rz * fx - rx * fz
        uz = rx * fy - ry * fx

        bx = px + fx * offset
        by = py + fy * offset
        bz = pz + fz * offset

        tip_x = bx + fx * length
        tip_y = by + fy * length
        tip_z = bz + fz * length

        base_r_x, base_r_y, base_r_z = bx + rx * radius, by + ry * radius, bz + rz * radius
        base_l_x, base_l_y, base_l_z = bx - rx * radius, by - ry * radius, bz - rz * radius

        g = groups[i]
        cr, cg, cb = palette[g, 0], palette[g, 1], palette[g, 2]

        base = i * VERTS_PER_SHIP

        # Front face (counter-clockwise about +up): tip, base_l, base_r
        vertices[base, 0] = tip_x
        vertices[base, 1] = tip_y
        vertices[base, 2] = tip_z
        vertices[base + 1, 0] = base_l_x
        vertices[base + 1, 1] = base_l_y
        vertices[base + 1, 2] = base_l_z
        vertices[base + 2, 0] = base_r_x
        vertices[base + 2, 1] = base_r_y
        vertices[base + 2, 2] = base_r_z

        # Back face: tip, base_r, base_l
        vertices[base + 3, 0] = tip_x
        vertices[base + 3, 1] = tip_y
        vertices[base + 3, 2] = tip_z
        vertices[base + 4, 0] = base_r_x
        vertices[base + 4, 1] = base_r_y
        vertices[base + 4, 2] = base_r_z
        vertices[base + 5, 0] = base_l_x
        vertices[base + 5, 1] = base_l_y
        vertices[base + 5, 2] = base_l_z

        for v in range(3):
            normals[base + v, 0] = ux
            normals[base + v, 1] = uy
            normals[base + v, 2] = uz
            normals[base + 3 + v, 0] = -ux
            normals[base + 3 + v, 1] = -uy
            normals[base + 3 + v, 2] = -uz

        for v in range(VERTS_PER_SHIP):
            vert_colors[base + v, 0] = cr
            vert_colors[base + v, 1] = cg
            vert_colors[base + v, 2] = cb
