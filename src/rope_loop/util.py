# MIT License (see LICENSE)
"""
Utility functions for 2D vector math.

Provides the low-level vector operations used by the rope relaxation:
subtraction, length, normalization and scaling. All functions operate on
2D vectors represented as numpy arrays of shape (2,).
"""
from __future__ import annotations

import numpy as np

# Direction used when a unit vector is requested for a zero-length vector,
# e.g. when a particle sits exactly on its anchor.
FALLBACK_AXIS = np.array([1.0, 0.0], dtype=np.float64)


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Allows tuple/list inputs for points while keeping consistent precision.
    """
    return np.array(x, dtype=np.float64)


def sub(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Vector from b to a (a - b)."""
    return np.array([a[0] - b[0], a[1] - b[1]], dtype=np.float64)


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 2D vector. Avoids sqrt for performance."""
    return float(v[0] * v[0] + v[1] * v[1])


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 2D vector."""
    return float(np.sqrt(norm2(v)))


def distance(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance between two points."""
    return norm(sub(a, b))


def unit(v: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    """
    Return a unit (normalized) vector in the same direction as v.

    Returns FALLBACK_AXIS if |v| < eps, so callers never see NaN.
    """
    n = norm(v)
    if n < eps:
        return FALLBACK_AXIS.copy()
    return v / n


def scale(v: np.ndarray, s: float) -> np.ndarray:
    """Multiply a 2D vector by a scalar."""
    return np.array([v[0] * s, v[1] * s], dtype=np.float64)


def perp(v: np.ndarray) -> np.ndarray:
    """Rotate a 2D vector by +90 degrees: (x, y) -> (-y, x)."""
    return np.array([-v[1], v[0]], dtype=np.float64)
