# MIT License (see LICENSE)
"""
The string-and-pins ellipse drawing and its per-tick update.

The StringDrawing class acts as the driver around a ConstraintLoop.
It manages:
- The rope (a ConstraintLoop sized to the string length).
- The two pegs (foci) and the pen, all treated as circular obstacles.
- The per-tick update (tick), including:
    1. Clamping the pen to the reach of the string.
    2. Splitting large pen moves into sub-steps.
    3. Pushing the rope out of every obstacle and relaxing it.
    4. Validating that pegs and pen are still enclosed by the rope.
    5. Snapshotting good shapes and, if enabled, rolling back bad ones.

Structure:
    - Host creates a StringDrawing.
    - Host calls drawing.tick(peg_a, peg_b, pen) whenever a point moves.
    - Host draws drawing.polyline() (or TickResult.vertices).
"""
from __future__ import annotations
import logging
from collections import deque
from contextlib import nullcontext
from dataclasses import dataclass, field

import numpy as np

from .types import CircleObstacle
from .util import f64
from .profiler import Profiler
from .geometry import ellipse_points, is_point_in_poly, clamp_to_ellipse
from .constraints.loop import ConstraintLoop
from .collision.obstacles import resolve_obstacles, DEFAULT_MAX_ITERS

logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    """
    Outcome of one StringDrawing.tick call.

    Attributes:
        vertices: Rope shape after the tick [N, 2].
        valid: Whether pegs and pen were inside the rope after the last
               sub-step that ran.
        pen: Pen position after the tick (clamped, or rolled back).
        substeps: Number of sub-steps executed.
        converged: False if any obstacle still had a particle inside its
                   influence radius after the push-out cap.
        restored: True if the tick was rolled back to the last good shape.
    """
    vertices: np.ndarray
    valid: bool
    pen: np.ndarray
    substeps: int
    converged: bool
    restored: bool = False


@dataclass
class StringDrawing:
    """
    Two-pin string construction of an ellipse.

    Attributes:
        string_length: Sum of the pen's distances to the two foci when the
                       string is taut (the ellipse's major axis).
        focus_separation: Initial distance between the pegs.
        n: Number of rope particles.
        f2: Spacing multiplier for the rope's minimum-distance constraints.
        max_move: Largest per-axis pen movement handled in one sub-step.
        obstacle_radius: Drawn radius of pegs and pen.
        influence: Radius around pegs and pen that the rope is pushed out of.
        max_obstacle_iters: Push-out attempts per obstacle per sub-step.
        restore_on_invalid: If True, a sub-step that leaves a peg or the pen
                            outside the rope is undone and the tick stops.
                            If False, the shape is accepted anyway.
        clamp_pen: Pull the pen back onto the reachable ellipse.
        trail_length: Number of pen positions kept in the trail.
        profiler: Optional Profiler for timing tick phases.
    """
    string_length: float = 8.0
    focus_separation: float = 4.0
    n: int = 160
    f2: float = 0.5
    max_move: float = 2.0
    obstacle_radius: float = 0.2
    influence: float = 0.5
    max_obstacle_iters: int = DEFAULT_MAX_ITERS
    restore_on_invalid: bool = False
    clamp_pen: bool = True
    trail_length: int = 400
    profiler: Profiler | None = None

    # Internal state
    loop: ConstraintLoop = field(init=False)
    pegs: list[CircleObstacle] = field(init=False)
    pen: np.ndarray = field(init=False)
    trail: deque = field(init=False)
    ticks: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        """Validate the configuration and build the initial rope."""
        if self.string_length <= 0:
            raise ValueError(f"string_length must be positive, got {self.string_length}")
        if not 0 <= self.focus_separation < self.string_length:
            raise ValueError(
                f"focus_separation must be in [0, {self.string_length}), "
                f"got {self.focus_separation}"
            )
        if self.max_move <= 0:
            raise ValueError(f"max_move must be positive, got {self.max_move}")
        if self.influence <= 0:
            raise ValueError(f"influence must be positive, got {self.influence}")
        if self.max_obstacle_iters < 1:
            raise ValueError(f"max_obstacle_iters must be >= 1, got {self.max_obstacle_iters}")
        if self.trail_length < 0:
            raise ValueError(f"trail_length must be >= 0, got {self.trail_length}")

        a = self.string_length / 2
        c = self.focus_separation / 2
        b = np.sqrt(a * a - c * c)

        # The loop runs around both pegs and the pen: 2a + 2c of string.
        dx = 2 * (a + c) / self.n

        # Start from a flattened, widened ellipse so the rope begins loose
        # around the pegs.
        self.loop = ConstraintLoop(ellipse_points(a / 0.9, b / 2, 0.0, 0.0, self.n), dx, self.f2)

        self.pegs = [
            CircleObstacle((-c, 0.0), self.obstacle_radius),
            CircleObstacle((c, 0.0), self.obstacle_radius),
        ]
        self.pen = np.zeros(2, dtype=np.float64)
        self._last_valid_pen = self.pen.copy()
        self.trail = deque(maxlen=self.trail_length)

        if self.is_valid():
            self.loop.save_last_good()
        logger.info(
            "String drawing: L=%.3f, c=%.3f, n=%d, dx=%.4f",
            self.string_length, c, self.n, dx,
        )

    def _section(self, name: str):
        """Profiler section if profiling is enabled, else a no-op context."""
        return self.profiler.section(name) if self.profiler else nullcontext()

    @property
    def pen_obstacle(self) -> CircleObstacle:
        """The pen as a circular obstacle."""
        return CircleObstacle(self.pen, self.obstacle_radius)

    @property
    def obstacles(self) -> list[CircleObstacle]:
        """Pegs followed by the pen."""
        return [*self.pegs, self.pen_obstacle]

    def is_valid(self) -> bool:
        """True if both pegs and the pen lie inside the rope polygon."""
        verts = self.loop.vertices()
        points = [self.pen] + [p.center for p in self.pegs]
        return all(is_point_in_poly(q, verts) for q in points)

    def _manage_constraints(self, pen: CircleObstacle) -> bool:
        """
        Push the rope out of the pegs and pen, then relax it.

        The host's particle selection (if any) is kept across the obstacle
        pass, which selects particles of its own.

        Returns:
            True if all obstacles settled within the push-out cap.
        """
        saved = self.loop.selected
        with self._section("obstacles"):
            settled = resolve_obstacles(
                self.loop, [*self.pegs, pen], self.influence, self.max_obstacle_iters
            )
        self.loop.set_selected(saved)
        with self._section("constrain"):
            self.loop.constrain()
        return settled

    def tick(
        self,
        peg_a: tuple[float, float] | np.ndarray,
        peg_b: tuple[float, float] | np.ndarray,
        pen: tuple[float, float] | np.ndarray,
    ) -> TickResult:
        """
        Update the rope for new peg and pen positions.

        The pen travels from its previous position to the new one in
        sub-steps whose per-axis movement is at most max_move, so it cannot
        jump across the rope in one go. Pegs are moved immediately.

        Args:
            peg_a: New position of the first peg (focus).
            peg_b: New position of the second peg (focus).
            pen: Requested pen position.

        Returns:
            TickResult describing the accepted shape.
        """
        pa, pb = f64(peg_a), f64(peg_b)
        target = f64(pen)
        if self.clamp_pen:
            target = clamp_to_ellipse(target, pa, pb, self.string_length)

        self.pegs = [
            CircleObstacle(pa, self.obstacle_radius),
            CircleObstacle(pb, self.obstacle_radius),
        ]

        current = self.pen_obstacle
        substeps = max(1, int(np.ceil(np.max(np.abs(target - current.center)) / self.max_move)))

        valid = True
        converged = True
        restored = False
        done = 0
        for i in range(substeps):
            if i == substeps - 1:
                current = CircleObstacle(target, self.obstacle_radius)
            else:
                step = np.clip(target - current.center, -self.max_move, self.max_move)
                current = current.shift(step[0], step[1])
            self.pen = current.center.copy()

            converged = self._manage_constraints(current) and converged
            done += 1

            with self._section("validate"):
                valid = self.is_valid()
            if valid:
                self.loop.save_last_good()
                self._last_valid_pen = self.pen.copy()
            elif self.restore_on_invalid:
                self.loop.restore_last_good()
                self.pen = self._last_valid_pen.copy()
                restored = True
                logger.debug(
                    "Tick %d rolled back at sub-step %d/%d", self.ticks, done, substeps
                )
                break

        self.trail.append(self.pen.copy())
        self.ticks += 1
        return TickResult(
            vertices=self.loop.vertices(),
            valid=valid,
            pen=self.pen.copy(),
            substeps=done,
            converged=converged,
            restored=restored,
        )

    def polyline(self) -> np.ndarray:
        """Rope vertices with the first repeated at the end [N + 1, 2]."""
        v = self.loop.vertices()
        return np.vstack([v, v[:1]])

    def select_at(self, point: tuple[float, float] | np.ndarray, tolerance: float) -> bool:
        """
        Grab the rope particle nearest to point, if within tolerance.

        A grabbed particle anchors every later relaxation until released.

        Returns:
            True if a particle was selected.
        """
        return self.loop.select_segment_at(point, tolerance) is not None

    def drag_selected(self, point: tuple[float, float] | np.ndarray) -> bool:
        """
        Move the grabbed particle to point and relax the rope around it.

        Returns:
            False if nothing is selected (no change made).
        """
        particle = self.loop.selected_particle
        if particle is None:
            return False
        particle.move_to(point)
        self.loop.constrain()
        return True

    def release(self) -> None:
        """Let go of any grabbed particle."""
        self.loop.clear_selection()
