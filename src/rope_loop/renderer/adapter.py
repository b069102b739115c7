# MIT License (see LICENSE)
"""
Renderer adapters for visualizing a string drawing.

This module provides an abstract base class for rendering and a few
concrete implementations. The rope engine has no rendering dependency;
these adapters are optional.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TextIO
import sys

import numpy as np

from ..types import CircleObstacle

if TYPE_CHECKING:
    from ..drawing import StringDrawing


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Subclasses integrate with a graphics backend (matplotlib, a canvas,
    an SVG writer, ...).

    Usage:
        renderer.begin_frame(drawing.ticks)
        renderer.draw_rope(drawing.polyline())
        for o in drawing.obstacles:
            renderer.draw_obstacle(o)
        renderer.draw_trail(np.array(drawing.trail))
        renderer.end_frame()

    Or use the convenience method:
        renderer.render_drawing(drawing)
    """

    @abstractmethod
    def begin_frame(self, tick: int) -> None:
        """Begin a new frame for the given tick count."""
        ...

    @abstractmethod
    def draw_rope(self, polyline: np.ndarray) -> None:
        """
        Draw the rope.

        Args:
            polyline: Closed polyline [N + 1, 2] (first vertex repeated).
        """
        ...

    @abstractmethod
    def draw_obstacle(self, obstacle: CircleObstacle) -> None:
        """Draw a peg or the pen."""
        ...

    def draw_trail(self, points: np.ndarray) -> None:
        """Draw the pen trail [M, 2]. Optional; ignored by default."""

    @abstractmethod
    def end_frame(self) -> None:
        """Finalize the current frame."""
        ...

    def render_drawing(self, drawing: "StringDrawing") -> None:
        """Render the rope, pegs, pen and trail of a drawing."""
        self.begin_frame(drawing.ticks)
        self.draw_rope(drawing.polyline())
        for o in drawing.obstacles:
            self.draw_obstacle(o)
        if drawing.trail:
            self.draw_trail(np.array(drawing.trail))
        self.end_frame()


class DebugRenderer(RendererAdapter):
    """
    Text renderer for development and testing.

    Output:
        === Tick 3 ===
        rope: 161 pts, bbox (-2.25, -1.15)..(4.44, 1.51)
        circle r=0.20 @ (-2.00, 0.00)
    """

    def __init__(self, output: TextIO | None = None):
        self.output = output or sys.stdout

    def begin_frame(self, tick: int) -> None:
        self.output.write(f"=== Tick {tick} ===\n")

    def draw_rope(self, polyline: np.ndarray) -> None:
        lo = polyline.min(axis=0)
        hi = polyline.max(axis=0)
        self.output.write(
            f"rope: {len(polyline)} pts, bbox ({lo[0]:.2f}, {lo[1]:.2f})..({hi[0]:.2f}, {hi[1]:.2f})\n"
        )

    def draw_obstacle(self, obstacle: CircleObstacle) -> None:
        c = obstacle.center
        self.output.write(f"circle r={obstacle.radius:.2f} @ ({c[0]:.2f}, {c[1]:.2f})\n")

    def draw_trail(self, points: np.ndarray) -> None:
        self.output.write(f"trail: {len(points)} pts\n")

    def end_frame(self) -> None:
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RendererAdapter):
    """
    No-op renderer.

    Useful as a placeholder or for benchmarking without rendering overhead.
    """

    def begin_frame(self, tick: int) -> None:
        pass

    def draw_rope(self, polyline: np.ndarray) -> None:
        pass

    def draw_obstacle(self, obstacle: CircleObstacle) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Renderer that records frames for later retrieval.

    Example:
        renderer = BufferedRenderer()
        for pen in path:
            drawing.tick(a, b, pen)
            renderer.render_drawing(drawing)

        for frame in renderer.frames:
            print(frame["tick"], len(frame["rope"]))
    """

    def __init__(self):
        self.frames: list[dict] = []
        self._current_frame: dict | None = None

    def begin_frame(self, tick: int) -> None:
        self._current_frame = {
            "tick": tick,
            "rope": [],
            "obstacles": [],
            "trail": [],
        }

    def draw_rope(self, polyline: np.ndarray) -> None:
        if self._current_frame is None:
            return
        self._current_frame["rope"] = polyline.tolist()

    def draw_obstacle(self, obstacle: CircleObstacle) -> None:
        if self._current_frame is None:
            return
        self._current_frame["obstacles"].append({
            "center": obstacle.center.tolist(),
            "radius": obstacle.radius,
        })

    def draw_trail(self, points: np.ndarray) -> None:
        if self._current_frame is None:
            return
        self._current_frame["trail"] = points.tolist()

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        """Clear all buffered frames."""
        self.frames.clear()
