"""Numba JIT-compiled all-pairs steering and integration over (N, 3) arrays."""

import math
import numpy as np
from numba import njit, prange


@njit(cache=True)
def accumulate_agent(
    i: int,
    positions: np.ndarray,
    velocities: np.ndarray,
    accelerations: np.ndarray,
    masses: np.ndarray,
    homes: np.ndarray,
    separation_radius: float,
    alignment_radius: float,
    cohesion_radius: float,
    separation_weight: float,
    alignment_weight: float,
    cohesion_weight: float,
    centering_weight: float,
    alignment_speed_limit: float,
    num_agents: int
):
    """Add agent i's weighted steering sum, divided by its mass, into accelerations[i]."""
    px, py, pz = positions[i, 0], positions[i, 1], positions[i, 2]
    vx, vy, vz = velocities[i, 0], velocities[i, 1], velocities[i, 2]
    mass = masses[i]

    sep_x, sep_y, sep_z = 0.0, 0.0, 0.0
    align_x, align_y, align_z = 0.0, 0.0, 0.0
    coh_x, coh_y, coh_z = 0.0, 0.0, 0.0
    sep_count = 0
    align_count = 0
    coh_count = 0

    for j in range(num_agents):
        dx = px - positions[j, 0]
        dy = py - positions[j, 1]
        dz = pz - positions[j, 2]
        dist = math.sqrt(dx * dx + dy * dy + dz * dz)

        # Self and coincident agents
        if not dist > 0.0:
            continue

        if dist < separation_radius:
            sep_x += dx / dist / dist
            sep_y += dy / dist / dist
            sep_z += dz / dist / dist
            sep_count += 1

        if dist < alignment_radius:
            align_x += velocities[j, 0]
            align_y += velocities[j, 1]
            align_z += velocities[j, 2]
            align_count += 1

        if dist < cohesion_radius:
            coh_x += positions[j, 0]
            coh_y += positions[j, 1]
            coh_z += positions[j, 2]
            coh_count += 1

    if sep_count > 0:
        sep_x /= sep_count
        sep_y /= sep_count
        sep_z /= sep_count
        sep_mag = math.sqrt(sep_x * sep_x + sep_y * sep_y + sep_z * sep_z)
        if sep_mag > 0.0:
            sep_x /= sep_mag
            sep_y /= sep_mag
            sep_z /= sep_mag
        else:
            sep_x, sep_y, sep_z = 0.0, 0.0, 0.0

    if align_count > 0:
        align_x /= align_count
        align_y /= align_count
        align_z /= align_count
        align_mag = math.sqrt(align_x * align_x + align_y * align_y + align_z * align_z)
        if align_mag > alignment_speed_limit:
            align_x = (align_x / align_mag) * alignment_speed_limit
            align_y = (align_y / align_mag) * alignment_speed_limit
            align_z = (align_z / align_mag) * alignment_speed_limit

    if coh_count > 0:
        # Steer toward the centroid
        cx = coh_x / coh_count - px
        cy = coh_y / coh_count - py
        cz = coh_z / coh_count - pz
        coh_mag = math.sqrt(cx * cx + cy * cy + cz * cz)
        if coh_mag > 0.0:
            coh_x = cx / coh_mag - vx
            coh_y = cy / coh_mag - vy
            coh_z = cz / coh_mag - vz
        else:
            coh_x, coh_y, coh_z = 0.0, 0.0, 0.0

    cen_x, cen_y, cen_z = 0.0, 0.0, 0.0
    hx = homes[i, 0] - px
    hy = homes[i, 1] - py
    hz = homes[i, 2] - pz
    home_dist = math.sqrt(hx * hx + hy * hy + hz * hz)
    if home_dist > 0.0:
        scale = home_dist * mass
        cen_x = ((hx / home_dist - vx) * centering_weight) * scale
        cen_y = ((hy / home_dist - vy) * centering_weight) * scale
        cen_z = ((hz / home_dist - vz) * centering_weight) * scale

    sep_scale = separation_weight * mass
    accelerations[i, 0] += (sep_x * sep_scale + align_x * alignment_weight
                            + coh_x * cohesion_weight + cen_x) / mass
    accelerations[i, 1] += (sep_y * sep_scale + align_y * alignment_weight
                            + coh_y * cohesion_weight + cen_y) / mass
    accelerations[i, 2] += (sep_z * sep_scale + align_z * alignment_weight
                            + coh_z * cohesion_weight + cen_z) / mass


@njit(cache=True)
def integrate_agent(
    i: int,
    positions: np.ndarray,
    velocities: np.ndarray,
    accelerations: np.ndarray,
    facings: np.ndarray,
    face_velocity: np.ndarray
):
    """Euler step for agent i, reset its acceleration and refresh its facing target."""
    for d in range(3):
        velocities[i, d] += accelerations[i, d]
        positions[i, d] += velocities[i, d]
        accelerations[i, d] = 0.0
        if face_velocity[i]:
            facings[i, d] = velocities[i, d]
        else:
            facings[i, d] = positions[i, d]


@njit(cache=True)
def tick_sequential(
    positions: np.ndarray,
    velocities: np.ndarray,
    accelerations: np.ndarray,
    facings: np.ndarray,
    masses: np.ndarray,
    homes: np.ndarray,
    face_velocity: np.ndarray,
    separation_radius: float,
    alignment_radius: float,
    cohesion_radius: float,
    separation_weight: float,
    alignment_weight: float,
    cohesion_weight: float,
    centering_weight: float,
    alignment_speed_limit: float,
    num_agents: int
):
    """In-place sweep: row i is written before row i + 1 is read."""
    for i in range(num_agents):
        accumulate_agent(
            i, positions, velocities, accelerations, masses, homes,
            separation_radius, alignment_radius, cohesion_radius,
            separation_weight, alignment_weight, cohesion_weight,
            centering_weight, alignment_speed_limit, num_agents
        )
        integrate_agent(i, positions, velocities, accelerations, facings, face_velocity)


@njit(parallel=True, cache=True)
def accumulate_all(
    positions: np.ndarray,
    velocities: np.ndarray,
    accelerations: np.ndarray,
    masses: np.ndarray,
    homes: np.ndarray,
    separation_radius: float,
    alignment_radius: float,
    cohesion_radius: float,
    separation_weight: float,
    alignment_weight: float,
    cohesion_weight: float,
    centering_weight: float,
    alignment_speed_limit: float,
    num_agents: int
):
    """Read phase: every agent against the same pre-tick state."""
    for i in prange(num_agents):
        accumulate_agent(
            i, positions, velocities, accelerations, masses, homes,
            separation_radius, alignment_radius, cohesion_radius,
            separation_weight, alignment_weight, cohesion_weight,
            centering_weight, alignment_speed_limit, num_agents
        )


@njit(cache=True)
def integrate_all(
    positions: np.ndarray,
    velocities: np.ndarray,
    accelerations: np.ndarray,
    facings: np.ndarray,
    face_velocity: np.ndarray,
    num_agents: int
):
    """Write phase, run only after accumulate_all has finished."""
    for i in range(num_agents):
        integrate_agent(i, positions, velocities, accelerations, facings, face_velocity)
