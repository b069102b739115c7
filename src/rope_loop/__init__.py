# MIT License (see LICENSE)
"""
rope_loop - Rope relaxation for the two-pin string ellipse construction.

A closed rope of particles is looped around two pegs and a pen. The rope
keeps a fixed spacing between neighbouring particles, stays outside the
pegs and pen, and is checked to keep them enclosed.

Main entry points:
    - StringDrawing: Per-tick driver for pegs, pen and rope.
    - ConstraintLoop: The particle ring and its relaxation.
    - Particle, CircleObstacle: Data types.
    - is_point_in_poly: Containment test used for validation.

Submodules:
    - constraints: ConstraintLoop.
    - collision: Pushing the rope out of obstacles.
    - core: Loop health checks (perimeter, spacing, topology).
    - renderer: Optional visualization adapters.

Example:
    from rope_loop import StringDrawing

    drawing = StringDrawing(string_length=8.0, focus_separation=4.0)
    result = drawing.tick((-2, 0), (2, 0), (0, 1))
    print(result.valid, result.vertices.shape)
"""
from .drawing import StringDrawing, TickResult
from .constraints.loop import ConstraintLoop
from .types import Particle, CircleObstacle
from .geometry import is_point_in_poly, ellipse_points, clamp_to_ellipse

__all__ = [
    # Driver
    "StringDrawing",
    "TickResult",
    # Rope
    "ConstraintLoop",
    "Particle",
    # Obstacles
    "CircleObstacle",
    # Geometry
    "is_point_in_poly",
    "ellipse_points",
    "clamp_to_ellipse",
]
