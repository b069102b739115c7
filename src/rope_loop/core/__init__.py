# MIT License (see LICENSE)
"""
Loop health checks.

This subpackage provides:
    - perimeter, neighbor_spacing, spacing_error: Length measurements.
    - is_single_cycle, all_finite: Structural checks.

Typical usage:
    from rope_loop.core import spacing_error, is_single_cycle

    assert is_single_cycle(loop)
    print(spacing_error(loop))
"""
from .invariants import (
    perimeter,
    neighbor_spacing,
    spacing_error,
    is_single_cycle,
    all_finite,
)

__all__ = [
    "perimeter",
    "neighbor_spacing",
    "spacing_error",
    "is_single_cycle",
    "all_finite",
]
