"""IO subpackage for file integrations.

- codec: OpenCV-backed image decode/encode to and from PixelBuffers
"""
from .codec import load_image, save_image

__all__ = [
    "load_image",
    "save_image",
]
