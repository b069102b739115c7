# MIT License (see LICENSE)
"""
Quantities for checking the state of a rope loop.

Used for verifying relaxation behaviour and debugging stability issues.
A healthy loop is a single cycle through every particle, has only finite
coordinates, and keeps its neighbour spacing close to dx.
"""
from __future__ import annotations
import numpy as np

from ..constraints.loop import ConstraintLoop
from ..geometry import polyline_length


def perimeter(loop: ConstraintLoop) -> float:
    """
    Length of the closed polyline through all particles.

    Args:
        loop: The rope.

    Returns:
        Sum of all N neighbour distances, including the closing edge.
    """
    return polyline_length(loop.vertices(), closed=True)


def neighbor_spacing(loop: ConstraintLoop) -> np.ndarray:
    """
    Distance from each particle to its clockwise neighbour.

    Returns:
        Array [N] where entry i is |p[next(i)] - p[i]|.
    """
    v = loop.vertices()
    d = v[loop.next_index] - v
    return np.hypot(d[:, 0], d[:, 1])


def spacing_error(loop: ConstraintLoop) -> float:
    """Largest deviation of any neighbour spacing from dx."""
    return float(np.max(np.abs(neighbor_spacing(loop) - loop.dx)))


def is_single_cycle(loop: ConstraintLoop) -> bool:
    """
    Check that next/prev form one cycle covering every particle.

    Walks next_index from particle 0 and requires returning to 0 after
    exactly N steps without revisiting, and that prev_index inverts it.
    """
    n = len(loop)
    if not np.array_equal(loop.prev_index[loop.next_index], np.arange(n)):
        return False
    seen = set()
    i = 0
    for _ in range(n):
        if i in seen:
            return False
        seen.add(i)
        i = int(loop.next_index[i])
    return i == 0 and len(seen) == n


def all_finite(loop: ConstraintLoop) -> bool:
    """True if no particle has a NaN or infinite coordinate."""
    return bool(np.all(np.isfinite(loop.vertices())))
