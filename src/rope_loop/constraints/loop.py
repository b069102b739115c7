# MIT License (see LICENSE)
"""
Closed-loop distance constraint relaxation.

This module provides ConstraintLoop, the rope itself: a ring of particles
kept at a fixed spacing by a single-sweep relaxation that runs once around
the ring in each rotational direction.

Key concepts:
- Arena topology: particles live in one list; neighbours are found through
  fixed next/prev index arrays built at construction. Nothing is ever
  inserted or removed.
- Window constraints: each visited particle is constrained against the four
  particles behind it. The immediate neighbour is an equality constraint at
  dx; offsets k = 2..4 are minimum-distance constraints at k * f2 * dx,
  which stop the rope folding onto itself without fixing its curvature.
- Anchoring: when a particle is selected, both sweeps start from it and stop
  on returning to it, so the selected particle is never moved by the sweep.
- A single constrain() call is one relaxation pass, not a converged solve.
"""
from __future__ import annotations
from typing import Iterator

import numpy as np

from ..types import Particle
from ..util import f64


class ConstraintLoop:
    """
    A closed chain of particles with spacing constraints.

    Attributes:
        particles: Particles in storage and drawing order.
        next_index: next_index[i] is the clockwise neighbour of particle i.
        prev_index: prev_index[i] is the counter-clockwise neighbour.
        selected: Index of the selected particle, or None.
        dx: Target spacing between neighbouring particles.
        f2: Spacing multiplier for the farther minimum-distance constraints.
        constraint_segments: Size of the constraint window (the particle
            itself plus the constraint_segments - 1 particles behind it).
    """

    constraint_segments: int = 5

    def __init__(
        self,
        points: np.ndarray | list[tuple[float, float]],
        dx: float,
        f2: float = 0.5,
        n: int | None = None,
    ) -> None:
        """
        Build the loop from an ordered ring of points and relax it once.

        Args:
            points: Initial positions [N, 2]. The last point connects back
                    to the first.
            dx: Target neighbour spacing. Must be positive.
            f2: Multiplier for the k >= 2 minimum distances. Must be >= 0.
            n: Optional particle count; must match len(points) if given.

        Raises:
            ValueError: On fewer than 3 points, bad shape, non-finite
                coordinates, non-positive dx, negative f2 or a count
                mismatch.
        """
        pts = f64(points)
        if pts.ndim != 2 or pts.shape[1] != 2:
            raise ValueError(f"points must have shape (N, 2), got {pts.shape}")
        count = len(pts)
        if n is not None and n != count:
            raise ValueError(f"n={n} does not match {count} points")
        if count < 3:
            raise ValueError(f"A loop needs at least 3 points, got {count}")
        if not np.all(np.isfinite(pts)):
            raise ValueError("points must be finite")
        if dx <= 0:
            raise ValueError(f"dx must be positive, got {dx}")
        if f2 < 0:
            raise ValueError(f"f2 must be non-negative, got {f2}")

        self.dx = float(dx)
        self.f2 = float(f2)
        self.selected: int | None = None

        self.particles: list[Particle] = [
            Particle(position=p, index=i) for i, p in enumerate(pts)
        ]
        idx = np.arange(count)
        self.next_index = (idx + 1) % count
        self.prev_index = (idx - 1) % count

        self.constrain()

    def __len__(self) -> int:
        return len(self.particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self.particles)

    # ------------------------------------------------------------------
    # Topology
    # ------------------------------------------------------------------

    def advance(self, i: int, clockwise: bool) -> int:
        """Index one step forward, where forward means clockwise if set."""
        return int(self.next_index[i] if clockwise else self.prev_index[i])

    def reverse(self, i: int, clockwise: bool) -> int:
        """Index one step backward in the given rotational sense."""
        return int(self.prev_index[i] if clockwise else self.next_index[i])

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_segment_at(
        self, point: tuple[float, float] | np.ndarray, tolerance: float
    ) -> Particle | None:
        """
        Select the particle closest to point, if it is within tolerance.

        Ties go to the lowest index. The comparison is on plain distance and
        is strict: a particle exactly `tolerance` away is not selected.

        Args:
            point: Query position [x, y].
            tolerance: Maximum (exclusive) distance for a selection.

        Returns:
            The selected particle, or None (selection cleared).
        """
        best, d = self.nearest(point)
        self.set_selected(best if d < tolerance else None)
        return self.particles[best] if self.selected is not None else None

    def nearest(self, point: tuple[float, float] | np.ndarray) -> tuple[int, float]:
        """Index of the particle closest to point (lowest index on ties) and its distance."""
        d = np.hypot(*(self.vertices() - f64(point)).T)
        best = int(np.argmin(d))
        return best, float(d[best])

    def set_selected(self, index: int | None) -> None:
        """Select the particle at index (None clears), keeping flags in sync."""
        for s in self.particles:
            s.selected = False
        self.selected = index
        if index is not None:
            self.particles[index].selected = True

    def clear_selection(self) -> None:
        """Drop any selection."""
        self.set_selected(None)

    @property
    def selected_particle(self) -> Particle | None:
        """The selected particle object, or None."""
        return None if self.selected is None else self.particles[self.selected]

    # ------------------------------------------------------------------
    # Relaxation
    # ------------------------------------------------------------------

    def apply_constraints_in_direction(
        self, start: int, clockwise: bool, stop_at: int | None = None
    ) -> None:
        """
        Sweep once around the loop, constraining each particle to those behind it.

        Starting after `start`, each visited particle s is placed at dx from
        the particle just behind it, then pushed out (never pulled in) to at
        least k * f2 * dx from the particles k = 2..4 steps behind it.

        Args:
            start: Index the sweep starts from. It is visited last, unless it
                   is also `stop_at`.
            clockwise: Rotational sense of the sweep.
            stop_at: Index that halts the sweep when reached. Passing the
                     selected particle keeps it fixed.
        """
        s = start
        for _ in range(len(self.particles)):
            s = self.advance(s, clockwise)
            if s == stop_at:
                break
            particle = self.particles[s]
            t = self.reverse(s, clockwise)
            for k in range(1, self.constraint_segments):
                if k == 1:
                    particle.constrain_distance(self.particles[t].position, self.dx)
                else:
                    particle.constrain_distance(
                        self.particles[t].position, k * self.f2 * self.dx, minimum=True
                    )
                t = self.reverse(t, clockwise)

    def constrain(self) -> None:
        """
        Run one relaxation pass: a clockwise and a counter-clockwise sweep.

        Both sweeps start at the selected particle (particle 0 if none is
        selected) and stop when they get back to a selected particle.
        """
        start = 0 if self.selected is None else self.selected
        self.apply_constraints_in_direction(start, True, stop_at=self.selected)
        self.apply_constraints_in_direction(start, False, stop_at=self.selected)

    # ------------------------------------------------------------------
    # Snapshots and output
    # ------------------------------------------------------------------

    @property
    def last_good(self) -> np.ndarray:
        """Last-good snapshot [N, 2]: each particle's saved position."""
        return np.array([s.saved for s in self.particles], dtype=np.float64)

    def save_last_good(self) -> None:
        """Save every particle's current position as its last-good one."""
        for s in self.particles:
            s.save()

    def restore_last_good(self) -> None:
        """Move every particle back to its last-good position."""
        for s in self.particles:
            s.restore()

    def vertices(self) -> np.ndarray:
        """Current particle positions [N, 2], freshly built on every call."""
        return np.array([s.position for s in self.particles], dtype=np.float64)

