# MIT License (see LICENSE)
"""
Rendering adapters for visualization.

This subpackage provides abstract and concrete renderer implementations:
    - RendererAdapter: Abstract base class defining the rendering interface.
    - DebugRenderer: Text output for debugging.
    - NullRenderer: No-op renderer for benchmarking.
    - BufferedRenderer: Records frames for playback or export.

The rope engine has no rendering dependency; these adapters are optional.

Typical usage:
    from rope_loop.renderer import DebugRenderer

    DebugRenderer().render_drawing(drawing)
"""
from .adapter import (
    RendererAdapter,
    DebugRenderer,
    NullRenderer,
    BufferedRenderer,
)

__all__ = [
    "RendererAdapter",
    "DebugRenderer",
    "NullRenderer",
    "BufferedRenderer",
]
