# MIT License (see LICENSE)
"""
Core type definitions for the rope loop.

Defines the fundamental data structures:
- Particle: one node of the rope, with current and saved positions.
- CircleObstacle: a peg or pen circle that the rope must stay outside of.

Topology (which particle follows which) is deliberately not stored here;
it belongs to the owning ConstraintLoop, which keeps fixed next/prev index
arrays.
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from .util import f64, sub, norm, unit, scale


@dataclass
class Particle:
    """
    A single node of the rope loop.

    Attributes:
        position: Current position [x, y].
        saved: Previously saved position [x, y]. Starts equal to position.
        radius: Display radius. Not used by any constraint.
        pinned: Reserved flag; the relaxation never pins particles today.
        selected: Transient flag set by nearest-particle queries.
        index: Slot in the owning loop (-1 until the loop adopts it).

    Note:
        Positions are converted to float64 numpy arrays on init.
    """
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    saved: np.ndarray | None = None
    radius: float = 5.0
    pinned: bool = False
    selected: bool = False
    index: int = -1

    def __post_init__(self) -> None:
        """Convert positions to float64 arrays for consistent numerics."""
        self.position = f64(self.position)
        self.saved = self.position.copy() if self.saved is None else f64(self.saved)

    def move_to(self, point: tuple[float, float] | np.ndarray) -> None:
        """Overwrite the current position with a copy of point."""
        self.position = f64(point)

    def constrain_distance(
        self,
        anchor: tuple[float, float] | np.ndarray,
        distance: float,
        minimum: bool = False,
    ) -> None:
        """
        Place this particle exactly `distance` away from `anchor`.

        The particle is projected along the direction from anchor to its
        current position. When the two coincide the direction falls back to
        the +x axis.

        Args:
            anchor: Point the distance is measured from.
            distance: Target distance.
            minimum: If True the constraint is one-sided: the
                particle is only pushed out when it is closer than
                `distance`, never pulled in.
        """
        dv = sub(self.position, anchor)
        if minimum and norm(dv) >= distance:
            return
        self.position = scale(unit(dv), distance) + f64(anchor)

    def save(self) -> None:
        """Copy the current position into the saved slot."""
        self.saved = self.position.copy()

    def restore(self) -> None:
        """Reset the current position to the saved one."""
        self.position = self.saved.copy()


@dataclass(frozen=True)
class CircleObstacle:
    """
    A circular obstacle (peg or pen).

    Attributes:
        center: Center position [x, y].
        radius: Drawn radius. Push-out distance is controlled separately by
                the influence radius passed to the collision routines.
    """
    center: np.ndarray
    radius: float = 0.2

    def __post_init__(self) -> None:
        """Ensure the center is stored as float64."""
        object.__setattr__(self, "center", f64(self.center))

    def shift(self, dx: float, dy: float) -> "CircleObstacle":
        """Return a copy translated by (dx, dy)."""
        return CircleObstacle(self.center + np.array([dx, dy]), self.radius)
