import numpy as np
import pytest
from rope_loop.geometry import (
    is_point_in_poly,
    ellipse_points,
    polyline_length,
    clamp_to_ellipse,
)

SQUARE = np.array([[0, 0], [4, 0], [4, 4], [0, 4]], dtype=np.float64)


def test_point_in_convex_polygon():
    assert is_point_in_poly((2.0, 2.0), SQUARE)
    assert is_point_in_poly((0.1, 3.9), SQUARE)


def test_point_outside_polygon():
    assert not is_point_in_poly((100.0, 100.0), SQUARE)
    assert not is_point_in_poly((-1.0, 2.0), SQUARE)
    assert not is_point_in_poly((2.0, 5.0), SQUARE)


def test_winding_order_does_not_matter():
    assert is_point_in_poly((2.0, 2.0), SQUARE[::-1])
    assert not is_point_in_poly((5.0, 2.0), SQUARE[::-1])


def test_point_in_concave_polygon():
    """U shape: the notch between the arms is outside."""
    u_shape = np.array([
        [0, 0], [3, 0], [3, 3], [2, 3], [2, 1], [1, 1], [1, 3], [0, 3]
    ], dtype=np.float64)
    assert is_point_in_poly((0.5, 2.0), u_shape)
    assert is_point_in_poly((2.5, 2.0), u_shape)
    assert not is_point_in_poly((1.5, 2.0), u_shape)
    assert is_point_in_poly((1.5, 0.5), u_shape)


def test_point_on_edge_is_answered():
    """Edge points are ambiguous; only check that a bool comes back."""
    result = is_point_in_poly((4.0, 2.0), SQUARE)
    assert isinstance(result, bool)


def test_ellipse_points():
    pts = ellipse_points(3.0, 2.0, 1.0, -1.0, 40)
    assert pts.shape == (40, 2)
    assert pts[0] == pytest.approx([4.0, -1.0])
    # every sample lies on the ellipse
    r = ((pts[:, 0] - 1.0) / 3.0) ** 2 + ((pts[:, 1] + 1.0) / 2.0) ** 2
    assert np.allclose(r, 1.0)
    # counter-clockwise: second point is above the first
    assert pts[1, 1] > pts[0, 1]


def test_polyline_length():
    assert polyline_length(SQUARE, closed=True) == pytest.approx(16.0)
    assert polyline_length(SQUARE, closed=False) == pytest.approx(12.0)
    assert polyline_length(SQUARE[:1]) == 0.0


def test_circle_polyline_length_approaches_circumference():
    pts = ellipse_points(1.0, 1.0, 0.0, 0.0, 1000)
    assert polyline_length(pts) == pytest.approx(2 * np.pi, rel=1e-4)


def test_clamp_leaves_reachable_point():
    p = clamp_to_ellipse((0.5, 0.5), (-2, 0), (2, 0), 8.0)
    assert p == pytest.approx([0.5, 0.5])


def test_clamp_pulls_point_onto_ellipse():
    fa, fb = np.array([-2.0, 0.0]), np.array([2.0, 0.0])
    for target in [(10.0, 10.0), (-7.0, 0.5), (0.0, -6.0)]:
        p = clamp_to_ellipse(target, fa, fb, 8.0)
        total = np.linalg.norm(p - fa) + np.linalg.norm(p - fb)
        assert total == pytest.approx(8.0, abs=1e-9)


def test_clamp_with_rotated_foci():
    """Foci on a diagonal away from the origin."""
    fa, fb = np.array([1.0, 1.0]), np.array([3.0, 3.0])
    p = clamp_to_ellipse((20.0, -5.0), fa, fb, 6.0)
    total = np.linalg.norm(p - fa) + np.linalg.norm(p - fb)
    assert total == pytest.approx(6.0, abs=1e-9)


def test_clamp_with_foci_beyond_reach_is_finite():
    p = clamp_to_ellipse((0.0, 5.0), (-5, 0), (5, 0), 4.0)
    assert np.all(np.isfinite(p))
