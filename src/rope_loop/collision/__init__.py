# MIT License (see LICENSE)
"""
Obstacle handling for the rope.

This subpackage provides:
    - avoid_obstacle: Push the rope out of one circular obstacle.
    - resolve_obstacles: Do the same for a sequence of obstacles.
    - is_clear: Check an obstacle without pushing anything.

Typical usage:
    from rope_loop.collision import resolve_obstacles

    settled = resolve_obstacles(loop, [peg_a, peg_b, pen], influence=0.5)
"""
from .obstacles import avoid_obstacle, resolve_obstacles, is_clear, DEFAULT_MAX_ITERS

__all__ = [
    "avoid_obstacle",
    "resolve_obstacles",
    "is_clear",
    "DEFAULT_MAX_ITERS",
]
