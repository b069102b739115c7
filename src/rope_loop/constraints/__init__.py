# MIT License (see LICENSE)
"""
Rope constraint relaxation.

This subpackage provides:
    - ConstraintLoop: A closed ring of particles with spacing constraints,
      nearest-particle selection and last-good snapshots.

Typical usage:
    from rope_loop.constraints import ConstraintLoop
    from rope_loop.geometry import ellipse_points

    loop = ConstraintLoop(ellipse_points(4.0, 2.0, 0, 0, 160), dx=0.075)
    loop.constrain()
"""
from .loop import ConstraintLoop

__all__ = [
    "ConstraintLoop",
]
