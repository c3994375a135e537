"""Small helpers for 3D vectors stored as numpy arrays."""

import numpy as np


def as_vec3(value) -> np.ndarray:
    """Copy any 3-element sequence into a fresh float64 3-vector."""
    arr = np.array(value, dtype=np.float64).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"Expected 3 components, got {arr.shape[0]}")
    return arr


def distance(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance between two points."""
    return float(np.linalg.norm(a - b))


def normalize(v: np.ndarray) -> np.ndarray:
    """Return a unit vector along v, or the zero vector if v has no length."""
    length = np.linalg.norm(v)
    if length > 0:
        return v / length
    return np.zeros(3)


def limit(v: np.ndarray, max_length: float) -> np.ndarray:
    """Clamp the length of v to max_length, keeping its direction."""
    length = np.linalg.norm(v)
    if length > max_length:
        return (v / length) * max_length
    return v.copy()
