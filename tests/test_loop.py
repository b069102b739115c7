import numpy as np
import pytest
from rope_loop.constraints import ConstraintLoop
from rope_loop.geometry import ellipse_points
from rope_loop.core.invariants import (
    perimeter,
    neighbor_spacing,
    spacing_error,
    is_single_cycle,
    all_finite,
)

# The ellipse set-up used by the string drawing: L = 8, c = 2.
A, C, N = 4.0, 2.0, 160
B = np.sqrt(A ** 2 - C ** 2)
DX = 2 * (A + C) / N


def regular_loop(m: int = 12, radius: float = 1.0) -> ConstraintLoop:
    """Regular m-gon whose side length is already the target spacing."""
    side = 2 * radius * np.sin(np.pi / m)
    return ConstraintLoop(ellipse_points(radius, radius, 0.0, 0.0, m), dx=side, f2=0.5)


def ellipse_loop() -> ConstraintLoop:
    return ConstraintLoop(ellipse_points(A / 0.9, B / 2, 0.0, 0.0, N), dx=DX, f2=0.5, n=N)


def test_topology_is_one_cycle():
    loop = ellipse_loop()
    assert len(loop) == N
    assert is_single_cycle(loop)
    assert loop.advance(0, True) == 1
    assert loop.advance(0, False) == N - 1
    assert loop.reverse(0, True) == N - 1
    assert loop.reverse(N - 1, False) == 0
    assert [p.index for p in loop] == list(range(N))


def test_invalid_construction():
    pts = ellipse_points(1.0, 1.0, 0.0, 0.0, 8)
    with pytest.raises(ValueError):
        ConstraintLoop(pts[:2], dx=0.1)
    with pytest.raises(ValueError):
        ConstraintLoop(pts, dx=0.0)
    with pytest.raises(ValueError):
        ConstraintLoop(pts, dx=0.1, f2=-1.0)
    with pytest.raises(ValueError):
        ConstraintLoop(pts, dx=0.1, n=9)
    with pytest.raises(ValueError):
        ConstraintLoop(np.zeros((8, 3)), dx=0.1)
    bad = pts.copy()
    bad[3, 0] = np.nan
    with pytest.raises(ValueError):
        ConstraintLoop(bad, dx=0.1)


def test_constrain_keeps_consistent_loop_at_spacing():
    """An isolated loop already at spacing dx stays at dx after relaxing."""
    loop = regular_loop()
    loop.constrain()
    assert spacing_error(loop) < 1e-9
    # both directions
    for i in range(len(loop)):
        d_next = np.linalg.norm(loop.particles[loop.advance(i, True)].position - loop.particles[i].position)
        d_prev = np.linalg.norm(loop.particles[loop.advance(i, False)].position - loop.particles[i].position)
        assert d_next == pytest.approx(loop.dx, abs=1e-9)
        assert d_prev == pytest.approx(loop.dx, abs=1e-9)


def test_constrain_sets_spacing_except_seam():
    """
    With nothing selected, both sweeps start at particle 0; the last
    correction moves particle 0 towards particle 1, so only the
    (N-1, 0) pair is left off-spacing.
    """
    loop = ellipse_loop()
    spacing = neighbor_spacing(loop)
    assert np.allclose(spacing[:-1], DX, atol=1e-9)


def test_ellipse_scenario_is_stable():
    loop = ellipse_loop()
    p0 = perimeter(loop)
    loop.constrain()
    assert all_finite(loop)
    assert perimeter(loop) == pytest.approx(p0, rel=0.05)


def arc_loop(m: int, arc: float, dx: float) -> ConstraintLoop:
    """m particles bunched on a short arc of the unit circle."""
    t = arc * np.arange(m) / m
    return ConstraintLoop(np.column_stack([np.cos(t), np.sin(t)]), dx=dx, f2=0.5)


@pytest.mark.parametrize("m, arc, dx", [(24, 0.5, 0.2), (30, 0.3, 0.1)])
def test_bunched_loop_spreads_to_minimum_distances(m, arc, dx):
    """
    Particles 2 to 4 steps apart end up at least k * f2 * dx apart, even
    when the starting points sit far closer than that.
    """
    loop = arc_loop(m, arc, dx)
    v = loop.vertices()
    for k in range(2, loop.constraint_segments):
        d = np.linalg.norm(v - np.roll(v, -k, axis=0), axis=1)
        assert d.min() >= k * loop.f2 * dx - 1e-9


def test_minimum_distances_never_pull_inward():
    """
    On a regular 12-gon every k-step chord is longer than k * f2 * dx, so
    relaxing changes nothing; an equality constraint there would fold it.
    """
    loop = regular_loop()
    before = loop.vertices()
    v = before
    for k in range(2, loop.constraint_segments):
        d = np.linalg.norm(v - np.roll(v, -k, axis=0), axis=1)
        assert d.min() > k * loop.f2 * loop.dx
    loop.constrain()
    assert np.allclose(loop.vertices(), before, atol=1e-12)


def test_select_within_tolerance():
    loop = ellipse_loop()
    target = loop.particles[37].position + np.array([0.001, 0.0])
    s = loop.select_segment_at(target, 0.01)
    assert s is loop.particles[37]
    assert loop.selected == 37
    assert [p.index for p in loop if p.selected] == [37]


def test_select_outside_tolerance_clears():
    loop = ellipse_loop()
    loop.select_segment_at(loop.particles[5].position, 0.01)
    assert loop.selected == 5
    assert loop.select_segment_at((100.0, 100.0), 1.0) is None
    assert loop.selected is None
    assert not any(p.selected for p in loop)


def test_select_tolerance_is_linear_and_strict():
    """Tolerance is a plain distance (not squared) and the bound is exclusive."""
    loop = regular_loop()
    for s in loop:
        s.move_to(s.position * 10.0)
    loop.particles[0].move_to((10.0, 0.0))
    # 0.4 < 0.5, but 0.4 > 0.5 ** 2
    assert loop.select_segment_at((10.4, 0.0), 0.5) is loop.particles[0]
    assert loop.select_segment_at((10.5, 0.0), 0.5) is None


def test_select_never_beyond_tolerance():
    loop = ellipse_loop()
    rng = np.random.default_rng(1234)
    verts = loop.vertices()
    for q in rng.uniform(-5.0, 5.0, size=(200, 2)):
        tol = float(rng.uniform(0.01, 1.0))
        s = loop.select_segment_at(q, tol)
        dmin = float(np.min(np.linalg.norm(verts - q, axis=1)))
        if s is None:
            assert dmin >= tol
        else:
            assert np.linalg.norm(s.position - q) < tol


def test_select_tie_goes_to_lowest_index():
    loop = regular_loop()
    for s in loop:
        s.move_to(s.position * 5.0)
    loop.particles[4].move_to((1.0, 0.0))
    loop.particles[9].move_to((-1.0, 0.0))
    s = loop.select_segment_at((0.0, 0.0), 2.0)
    assert s is loop.particles[4]


def test_selected_particle_anchors_relaxation():
    """Sweeps stop at the selected particle, so it is never moved."""
    loop = ellipse_loop()
    loop.select_segment_at(loop.particles[80].position, 0.01)
    loop.particles[80].move_to((0.0, 5.0))
    loop.constrain()
    assert loop.particles[80].position == pytest.approx([0.0, 5.0])
    assert loop.selected == 80
    assert all_finite(loop)


def test_save_restore_round_trip():
    loop = ellipse_loop()
    before = loop.vertices()
    loop.save_last_good()
    loop.restore_last_good()
    assert np.array_equal(loop.vertices(), before)


def test_restore_undoes_changes():
    loop = ellipse_loop()
    loop.save_last_good()
    before = loop.vertices()
    loop.particles[10].move_to((9.0, 9.0))
    loop.constrain()
    assert not np.allclose(loop.vertices(), before)
    loop.restore_last_good()
    assert np.array_equal(loop.vertices(), before)


def test_last_good_lives_on_particles():
    loop = regular_loop()
    loop.particles[2].move_to((3.0, 3.0))
    loop.save_last_good()
    assert loop.particles[2].saved == pytest.approx([3.0, 3.0])
    assert np.array_equal(loop.last_good, loop.vertices())

    loop.particles[2].move_to((0.0, 0.0))
    loop.restore_last_good()
    assert loop.particles[2].position == pytest.approx([3.0, 3.0])


def test_nearest_does_not_select():
    loop = regular_loop()
    i, d = loop.nearest(loop.particles[5].position + [0.01, 0.0])
    assert i == 5
    assert d == pytest.approx(0.01)
    assert loop.selected is None


def test_vertices_are_fresh():
    loop = regular_loop()
    v = loop.vertices()
    v[:] = 0.0
    assert not np.allclose(loop.vertices(), 0.0)
    assert loop.vertices().shape == (12, 2)
