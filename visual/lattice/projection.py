"""Flatten lattice points into the vertex buffer a 3D renderer consumes."""

from collections.abc import Sequence

import numpy as np

from .types import LatticePoint


def to_positions(points: Sequence[LatticePoint], axes: int = 3) -> np.ndarray:
    """
    Project points onto their first ``axes`` coordinates as a flat float32 buffer.

    Points with fewer coordinates are zero-padded, extra coordinates are dropped.

    Args:
        points: Lattice points, all of the same dimension
        axes: Number of display axes

    Returns:
        Array of shape (axes * len(points),)
    """
    if not points:
        return np.zeros(0, dtype=np.float32)

    coords = np.asarray(points, dtype=np.float32)
    n, dimension = coords.shape
    out = np.zeros((n, axes), dtype=np.float32)
    keep = min(dimension, axes)
    out[:, :keep] = coords[:, :keep]
    return out.reshape(-1)


def bounding_extent(positions: np.ndarray) -> float:
    """Largest coordinate value in the buffer, 0.0 when empty."""
    if positions.size == 0:
        return 0.0
    return float(positions.max())
