"""
Match visualization.

Renders the final best-match bounding box on a color copy of the scene. The
output depends on the MatchResult only, never on intermediate candidates.
"""
from __future__ import annotations

from typing import Tuple
import logging

import cv2
import numpy as np

from ..config.vision import MARKER_COLOR
from .buffers import MatchResult, PixelBuffer
from .errors import DimensionMismatch, InvalidChannelCount

logger = logging.getLogger(__name__)


def match_rect(result: MatchResult, template_width: int, template_height: int) -> Tuple[int, int, int, int]:
    """(left, top, right, bottom) of the match window, right/bottom inclusive."""
    x, y = result.best_offset
    return x, y, x + template_width - 1, y + template_height - 1


def annotate_match(
    scene: PixelBuffer,
    template_width: int,
    template_height: int,
    result: MatchResult,
    color: Tuple[int, int, int] = MARKER_COLOR,
) -> PixelBuffer:
    """Copy the scene's color pixels and draw a 1px border around the match window.

    Only the outermost rows and columns of the window take `color`; every
    other pixel keeps the scene value. Alpha, if any, is dropped.
    """
    if scene.channels not in (3, 4):
        raise InvalidChannelCount(scene.channels)
    if template_width < 1 or template_height < 1:
        raise DimensionMismatch(f"Template dimensions must be positive, got {template_width}x{template_height}")
    left, top, right, bottom = match_rect(result, template_width, template_height)
    if left < 0 or top < 0 or right >= scene.width or bottom >= scene.height:
        raise DimensionMismatch(
            f"Match window {template_width}x{template_height} at ({left},{top}) exceeds scene {scene.width}x{scene.height}"
        )

    canvas = np.ascontiguousarray(scene.as_array()[:, :, :3]).copy()
    marker = tuple(int(c) for c in color)
    cv2.rectangle(canvas, (left, top), (right, bottom), marker, thickness=1, lineType=cv2.LINE_8)
    logger.debug("visualize: box (%d,%d)-(%d,%d) color=%s", left, top, right, bottom, marker)
    return PixelBuffer.from_array(canvas)
