# MIT License (see LICENSE)
"""
Simple profiling utilities for tick timing.

Provides lightweight instrumentation to measure the phases of a drawing
tick (obstacles, relaxation, validation) without external dependencies.

Example:
    profiler = Profiler()
    drawing = StringDrawing(profiler=profiler)
    drawing.tick((-2, 0), (2, 0), (0, 1))
    print(profiler.stats.summary())
"""
from __future__ import annotations
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class ProfileStats:
    """Running count, total and maximum time per named section."""
    count: dict[str, int] = field(default_factory=dict)
    total: dict[str, float] = field(default_factory=dict)
    peak: dict[str, float] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        """Fold a timing (in seconds) into the section's aggregates."""
        self.count[name] = self.count.get(name, 0) + 1
        self.total[name] = self.total.get(name, 0.0) + dt
        self.peak[name] = max(self.peak.get(name, 0.0), dt)

    def summary(self) -> dict[str, dict[str, float]]:
        """Per section: 'n', 'mean_ms' and 'max_ms'."""
        return {
            name: {
                "n": n,
                "mean_ms": 1e3 * self.total[name] / n,
                "max_ms": 1e3 * self.peak[name],
            }
            for name, n in self.count.items()
        }

    def clear(self) -> None:
        self.count.clear()
        self.total.clear()
        self.peak.clear()


class Profiler:
    """
    Context-manager based profiler for timing code sections.

    Usage:
        profiler = Profiler()
        with profiler.section("obstacles"):
            resolve_obstacles(loop, obstacles, influence=0.5)
    """

    def __init__(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time the enclosed block and record it under `name`."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)
