# MIT License (see LICENSE)
"""
Planar geometry helpers for the string construction.

- is_point_in_poly: even-odd ray casting containment test.
- ellipse_points: sample an axis-aligned ellipse into a ring of points.
- polyline_length: length of an open or closed polyline.
- clamp_to_ellipse: pull a pen point back onto the ellipse the string
  can reach for the current foci.

Reference for the ray casting test:
https://wrf.ecse.rpi.edu/Research/Short_Notes/pnpoly.html
"""
from __future__ import annotations

import numpy as np

from .util import f64, sub, norm, unit, perp, distance


def is_point_in_poly(point: tuple[float, float] | np.ndarray, vertices: np.ndarray) -> bool:
    """
    Test whether a point lies inside a polygon.

    Casts a horizontal ray from the point and counts edge crossings; an odd
    count means inside. An edge is counted when the point's y lies strictly
    between the edge endpoints' y values (half-open on the upper end) and
    the point is left of the edge at that height.

    Points exactly on an edge may report either answer. Horizontal and
    collinear edges get no special treatment.

    Args:
        point: Query point [x, y].
        vertices: Polygon vertices [N, 2], in order. Closure is implicit.

    Returns:
        True if the point is inside.
    """
    px, py = float(point[0]), float(point[1])
    verts = np.asarray(vertices, dtype=np.float64)
    inside = False
    j = len(verts) - 1
    for i in range(len(verts)):
        xi, yi = verts[i]
        xj, yj = verts[j]
        if (yi > py) != (yj > py):
            # yi != yj here, so the division is safe
            x_cross = (xj - xi) * (py - yi) / (yj - yi) + xi
            if px < x_cross:
                inside = not inside
        j = i
    return inside


def ellipse_points(a: float, b: float, h: float, k: float, n: int) -> np.ndarray:
    """
    Sample n points evenly in parameter around an axis-aligned ellipse.

    x = h + a cos(t), y = k + b sin(t), t = 2*pi*i/n, starting at t = 0 and
    running counter-clockwise.

    Returns:
        Array of points [n, 2].
    """
    t = 2.0 * np.pi * np.arange(n) / n
    return np.column_stack((h + a * np.cos(t), k + b * np.sin(t)))


def polyline_length(points: np.ndarray, closed: bool = True) -> float:
    """Sum of segment lengths; includes the last-to-first edge if closed."""
    pts = np.asarray(points, dtype=np.float64)
    if len(pts) < 2:
        return 0.0
    seg = np.diff(pts, axis=0)
    total = float(np.sum(np.hypot(seg[:, 0], seg[:, 1])))
    if closed:
        total += distance(pts[-1], pts[0])
    return total


def clamp_to_ellipse(
    point: tuple[float, float] | np.ndarray,
    focus_a: tuple[float, float] | np.ndarray,
    focus_b: tuple[float, float] | np.ndarray,
    string_length: float,
) -> np.ndarray:
    """
    Keep a pen point within reach of a string tied to two foci.

    A pen held against a string of length L tied at the foci traces the
    ellipse |PA| + |PB| = L. Points already satisfying |PA| + |PB| <= L are
    returned unchanged. Otherwise the point is replaced by the ellipse point
    at the same parametric angle about the foci midpoint.

    If the foci are further apart than L the ellipse degenerates to the
    segment between them (semi-minor axis 0).

    Args:
        point: Pen position [x, y].
        focus_a: First focus.
        focus_b: Second focus.
        string_length: L, the sum of focal distances on the ellipse.

    Returns:
        The (possibly clamped) pen position as a new array.
    """
    p = f64(point)
    fa, fb = f64(focus_a), f64(focus_b)
    if distance(p, fa) + distance(p, fb) <= string_length:
        return p

    center = 0.5 * (fa + fb)
    axis = sub(fb, fa)
    c = 0.5 * norm(axis)
    u = unit(axis)
    v = perp(u)

    a = 0.5 * string_length
    b = float(np.sqrt(max(a * a - c * c, 0.0)))

    rel = p - center
    theta = np.arctan2(float(np.dot(rel, v)), float(np.dot(rel, u)))
    return center + a * np.cos(theta) * u + b * np.sin(theta) * v
