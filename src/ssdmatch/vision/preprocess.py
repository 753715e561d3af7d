"""
Luma (greyscale + alpha) conversion.

Every pixel is converted independently, so the pixel index range is cut into
chunks and each worker writes only its own slice of the output array.

Logging: nothing is logged per chunk; the controller logs stage timings.
"""
from __future__ import annotations

from typing import Optional, Tuple
import logging

import numpy as np

from ..config.vision import DEFAULT_CHUNK_PIXELS, LUMA_SCALE, LUMA_WEIGHTS
from ..core.worker import chunk_range, run_chunks
from .buffers import LumaBuffer, PixelBuffer
from .errors import InvalidChannelCount

logger = logging.getLogger(__name__)


def luma_channels_for(channels: int) -> int:
    """Output channel count for an input channel count (alpha is carried over)."""
    if channels not in (3, 4):
        raise InvalidChannelCount(channels)
    return 2 if channels == 4 else 1


def luma_values(rgb: np.ndarray, weights: Tuple[int, int, int] = LUMA_WEIGHTS) -> np.ndarray:
    """round(0.299R + 0.587G + 0.114B) per row of an (N, >=3) uint8 array, halves rounded up.

    Integer per-mille weights keep exact .5 values exact.
    """
    px = rgb[:, :3].astype(np.int32)
    wr, wg, wb = weights
    v = wr * px[:, 0] + wg * px[:, 1] + wb * px[:, 2]
    return np.clip((v + LUMA_SCALE // 2) // LUMA_SCALE, 0, 255).astype(np.uint8)


def to_luma(
    image: PixelBuffer,
    workers: Optional[int] = None,
    chunk_pixels: int = DEFAULT_CHUNK_PIXELS,
) -> LumaBuffer:
    """Convert an RGB/RGBA buffer into a 1-channel luma or 2-channel luma+alpha buffer."""
    out_channels = luma_channels_for(image.channels)
    n_pixels = image.width * image.height
    src = image.data.reshape(n_pixels, image.channels)
    dst = np.empty((n_pixels, out_channels), dtype=np.uint8)

    def _convert(span: range) -> None:
        lo, hi = span.start, span.stop
        dst[lo:hi, 0] = luma_values(src[lo:hi])
        if out_channels == 2:
            dst[lo:hi, 1] = src[lo:hi, 3]

    run_chunks(_convert, chunk_range(0, n_pixels, chunk_pixels), workers)
    return LumaBuffer(image.width, image.height, out_channels, dst.reshape(-1))

