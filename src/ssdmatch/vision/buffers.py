"""
Pixel buffer data objects.

A PixelBuffer owns a flat, row-major, pixel-interleaved uint8 array together
with its width/height/channel metadata. No OpenCV logic lives here; decoding
and encoding files is the job of ssdmatch.io.codec.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple, Tuple

import numpy as np

from .errors import DimensionMismatch, InvalidChannelCount


class Offset(NamedTuple):
    """Top-left corner of a candidate window in scene coordinates."""
    x: int
    y: int


@dataclass(eq=False)
class PixelBuffer:
    """Contiguous uint8 pixels; the value of channel c at (x, y) is data[(y*width + x)*channels + c]."""
    width: int
    height: int
    channels: int
    data: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        for name in ("width", "height", "channels"):
            value = getattr(self, name)
            if int(value) < 1:
                raise DimensionMismatch(f"{name} must be positive, got {value}")
            setattr(self, name, int(value))
        data = np.ascontiguousarray(self.data, dtype=np.uint8).reshape(-1)
        expected = self.width * self.height * self.channels
        if data.size != expected:
            raise DimensionMismatch(
                f"Buffer holds {data.size} bytes, expected {self.width}x{self.height}x{self.channels}={expected}"
            )
        self.data = data

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "PixelBuffer":
        """Build a buffer from an (H, W) or (H, W, C) uint8 array (copied)."""
        arr = np.asarray(arr)
        if arr.ndim == 2:
            arr = arr[:, :, None]
        if arr.ndim != 3:
            raise DimensionMismatch(f"Expected a 2D or 3D array, got shape {arr.shape}")
        h, w, c = arr.shape
        return cls(width=w, height=h, channels=c, data=np.array(arr, dtype=np.uint8).reshape(-1))

    @classmethod
    def blank(cls, width: int, height: int, channels: int) -> "PixelBuffer":
        return cls(width=width, height=height, channels=channels,
                   data=np.zeros(int(width) * int(height) * int(channels), dtype=np.uint8))

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def as_array(self) -> np.ndarray:
        """(height, width, channels) view sharing memory with the buffer."""
        return self.data.reshape(self.height, self.width, self.channels)

    def pixel(self, x: int, y: int) -> Tuple[int, ...]:
        """Bounds-checked channel values of pixel (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise DimensionMismatch(f"Pixel ({x},{y}) outside {self.width}x{self.height} buffer")
        i = (y * self.width + x) * self.channels
        return tuple(int(v) for v in self.data[i:i + self.channels])


@dataclass(eq=False)
class LumaBuffer(PixelBuffer):
    """PixelBuffer with channel 0 = luma and optional channel 1 = passthrough alpha."""

    def __post_init__(self) -> None:
        if int(self.channels) not in (1, 2):
            raise InvalidChannelCount(int(self.channels), allowed=(1, 2))
        super().__post_init__()

    @property
    def luma(self) -> np.ndarray:
        """(height, width) view of the luma channel."""
        return self.as_array()[:, :, 0]

    @property
    def alpha(self):
        """(height, width) view of the alpha channel, or None without one."""
        if self.channels < 2:
            return None
        return self.as_array()[:, :, 1]


@dataclass(frozen=True)
class MatchResult:
    """Global-minimum SSD offset; best_score is an unbounded Python int."""
    best_offset: Offset
    best_score: int
