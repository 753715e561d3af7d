"""SSDMatch: exhaustive sum-of-squared-differences template matching.

Example usage:

    from ssdmatch import load_image, to_luma, find_best_match, annotate_match

    scene = load_image("img/space.png", channels=3)
    template = load_image("img/goat.png", channels=4)
    result = find_best_match(to_luma(scene), to_luma(template), workers=8)
    boxed = annotate_match(scene, template.width, template.height, result)
"""
from .io.codec import load_image, save_image
from .vision import (
    DimensionMismatch,
    InvalidChannelCount,
    LumaBuffer,
    MatchError,
    MatchResult,
    Offset,
    PixelBuffer,
    TemplateLargerThanScene,
    annotate_match,
    find_best_match,
    score_window,
    to_luma,
)

__version__ = "0.1.0"

__all__ = [
    "PixelBuffer",
    "LumaBuffer",
    "Offset",
    "MatchResult",
    "MatchError",
    "InvalidChannelCount",
    "TemplateLargerThanScene",
    "DimensionMismatch",
    "to_luma",
    "score_window",
    "find_best_match",
    "annotate_match",
    "load_image",
    "save_image",
    "__version__",
]
