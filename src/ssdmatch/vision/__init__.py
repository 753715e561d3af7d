"""Vision package: pixel buffers, luma conversion and SSD matching.

Submodules:
- buffers: PixelBuffer/LumaBuffer data objects, Offset and MatchResult
- errors: input-validation error types
- preprocess: parallel luma (+alpha) conversion
- matcher: window scoring and exhaustive best-match search
- visualize: bounding-box rendering of the final match
"""
from .buffers import LumaBuffer, MatchResult, Offset, PixelBuffer
from .errors import (
    DimensionMismatch,
    InvalidChannelCount,
    MatchError,
    TemplateLargerThanScene,
)
from .preprocess import to_luma
from .matcher import find_best_match, score_window
from .visualize import annotate_match

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
]
