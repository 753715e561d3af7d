"""Config subpackage.

- vision: central knobs for luma weights, chunking, marker color and toggles
"""
from .vision import (
    LUMA_WEIGHTS,
    LUMA_SCALE,
    DEFAULT_CHUNK_PIXELS,
    MARKER_COLOR,
    PERF_ENABLED,
)

__all__ = [
    "LUMA_WEIGHTS",
    "LUMA_SCALE",
    "DEFAULT_CHUNK_PIXELS",
    "MARKER_COLOR",
    "PERF_ENABLED",
]
