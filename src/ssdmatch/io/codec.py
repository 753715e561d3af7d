"""
Image file decode/encode on top of OpenCV.

Buffers handed to and returned from the vision core are RGB(A) ordered;
OpenCV works in BGR(A), so the channel order is swapped at this boundary
only.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union
import logging

import cv2
import numpy as np

from ..vision.buffers import PixelBuffer
from ..vision.errors import InvalidChannelCount

logger = logging.getLogger(__name__)


def _to_uint8(arr: np.ndarray, path: Path) -> np.ndarray:
    if arr.dtype == np.uint8:
        return arr
    if arr.dtype == np.uint16:
        return (arr >> 8).astype(np.uint8)
    raise OSError(f"Unsupported sample type {arr.dtype} in {path}")


def _force_channels(rgb: np.ndarray, channels: Optional[int]) -> np.ndarray:
    """Drop alpha or add an opaque alpha plane to reach `channels`."""
    if channels is None or rgb.shape[2] == channels:
        return rgb
    if channels == 3:
        return np.ascontiguousarray(rgb[:, :, :3])
    if channels == 4:
        alpha = np.full(rgb.shape[:2] + (1,), 255, dtype=np.uint8)
        return np.concatenate([rgb, alpha], axis=2)
    raise InvalidChannelCount(channels)


def load_image(path: Union[str, Path], channels: Optional[int] = None) -> PixelBuffer:
    """Decode an image file into an RGB or RGBA PixelBuffer.

    Greyscale files are expanded to RGB (grey+alpha to RGBA). Passing
    channels=3 or channels=4 forces the result to that many channels.
    """
    path = Path(path)
    arr = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if arr is None:
        raise FileNotFoundError(f"Image not found or unreadable: {path}")
    arr = _to_uint8(arr, path)

    if arr.ndim == 2:
        rgb = cv2.cvtColor(arr, cv2.COLOR_GRAY2RGB)
    elif arr.shape[2] == 2:
        grey = cv2.cvtColor(np.ascontiguousarray(arr[:, :, 0]), cv2.COLOR_GRAY2RGB)
        rgb = np.concatenate([grey, arr[:, :, 1:2]], axis=2)
    elif arr.shape[2] == 3:
        rgb = cv2.cvtColor(arr, cv2.COLOR_BGR2RGB)
    elif arr.shape[2] == 4:
        rgb = cv2.cvtColor(arr, cv2.COLOR_BGRA2RGBA)
    else:
        raise InvalidChannelCount(arr.shape[2], allowed=(1, 2, 3, 4))

    rgb = _force_channels(rgb, channels)
    buf = PixelBuffer.from_array(rgb)
    logger.debug("codec: loaded %s (%dx%d, %d ch)", path, buf.width, buf.height, buf.channels)
    return buf


def save_image(buffer: PixelBuffer, path: Union[str, Path]) -> Path:
    """Encode a 1-4 channel buffer to `path`; the format follows the file extension."""
    path = Path(path)
    arr = buffer.as_array()
    if buffer.channels == 1:
        out = np.ascontiguousarray(arr[:, :, 0])
    elif buffer.channels == 2:
        grey = cv2.cvtColor(np.ascontiguousarray(arr[:, :, 0]), cv2.COLOR_GRAY2BGR)
        out = np.concatenate([grey, arr[:, :, 1:2]], axis=2)
    elif buffer.channels == 3:
        out = cv2.cvtColor(arr, cv2.COLOR_RGB2BGR)
    elif buffer.channels == 4:
        out = cv2.cvtColor(arr, cv2.COLOR_RGBA2BGRA)
    else:
        raise InvalidChannelCount(buffer.channels, allowed=(1, 2, 3, 4))

    path.parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(path), out):
        raise OSError(f"Failed to write image: {path}")
    logger.debug("codec: wrote %s (%dx%d, %d ch)", path, buffer.width, buffer.height, buffer.channels)
    return path
