# MIT License (see LICENSE)
"""
Keeping the rope outside obstacles.

Each obstacle owns an influence radius. While some particle lies inside it,
the nearest such particle is pushed out to exactly the influence radius and
the whole loop is relaxed again from that particle. The number of pushes per
obstacle is capped; a loop that has not settled by then is accepted as is.
"""
from __future__ import annotations
import logging
from typing import Iterable

import numpy as np

from ..constraints.loop import ConstraintLoop
from ..types import CircleObstacle

logger = logging.getLogger(__name__)

# Push-out attempts per obstacle before the loop is accepted unsettled.
DEFAULT_MAX_ITERS: int = 10


def avoid_obstacle(
    loop: ConstraintLoop,
    center: tuple[float, float] | np.ndarray,
    influence: float,
    max_iters: int = DEFAULT_MAX_ITERS,
) -> int:
    """
    Push particles out of the circle of radius `influence` around center.

    Overwrites the loop selection: it ends cleared, or on the last pushed
    particle if max_iters ran out. Callers that care about a prior
    selection must save and restore it.

    Args:
        loop: The rope.
        center: Obstacle center [x, y].
        influence: Forbidden radius around the center.
        max_iters: Maximum number of push-and-relax rounds.

    Returns:
        Number of pushes performed. Fewer than max_iters means the obstacle
        is clear of particles; at max_iters it may or may not be, see
        is_clear.
    """
    pushes = 0
    for _ in range(max_iters):
        particle = loop.select_segment_at(center, influence)
        if particle is None:
            break
        particle.constrain_distance(center, influence, minimum=True)
        loop.constrain()
        pushes += 1
    return pushes


def is_clear(
    loop: ConstraintLoop,
    center: tuple[float, float] | np.ndarray,
    influence: float,
) -> bool:
    """True if no particle lies strictly inside `influence` of center.

    Leaves the loop selection untouched.
    """
    return loop.nearest(center)[1] >= influence


def resolve_obstacles(
    loop: ConstraintLoop,
    obstacles: Iterable[CircleObstacle],
    influence: float,
    max_iters: int = DEFAULT_MAX_ITERS,
) -> bool:
    """
    Run avoid_obstacle for each obstacle in turn.

    Returns:
        True if every obstacle was clear of particles right after its own
        push-out pass, including when the last allowed push cleared it.
    """
    settled = True
    for o in obstacles:
        pushes = avoid_obstacle(loop, o.center, influence, max_iters)
        if pushes >= max_iters and not is_clear(loop, o.center, influence):
            settled = False
            logger.debug(
                "Obstacle at (%.3f, %.3f) not settled after %d pushes",
                o.center[0], o.center[1], pushes,
            )
    return settled
