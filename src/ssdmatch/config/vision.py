"""
Vision configuration knobs centralization.

Luma weights, chunk sizes, marker colors and environment toggles live here.
The core functions take these as defaults; callers pass explicit values.
"""
from __future__ import annotations

from typing import Tuple
import os

# ITU-R BT.601 luma weights applied to (R, G, B), in thousandths (0.299, 0.587, 0.114)
LUMA_WEIGHTS: Tuple[int, int, int] = (299, 587, 114)
LUMA_SCALE: int = 1000

# Pixels per luma conversion work item
DEFAULT_CHUNK_PIXELS: int = 4096

# Bounding box color in RGB order
MARKER_COLOR: Tuple[int, int, int] = (255, 0, 0)

# Environment flags
PERF_ENABLED: bool = os.environ.get("SSD_PERF", "0") == "1"

__all__ = [
    "LUMA_WEIGHTS",
    "LUMA_SCALE",
    "DEFAULT_CHUNK_PIXELS",
    "MARKER_COLOR",
    "PERF_ENABLED",
]
