"""
Exhaustive sum-of-squared-differences template matching.

- score_window: SSD of the template against one scene window, optionally
  split into row bands whose private partial sums are added afterwards.
- find_best_match: scores every valid offset; each worker reduces its own
  contiguous slice of offsets to a local minimum, and the local minima are
  reduced in slice order so ties go to the row-major-first offset.

All arithmetic is integer (int64 per element, Python int for totals), so
results do not depend on the worker count or scheduling.
"""
from __future__ import annotations

from typing import List, Optional, Tuple
import logging

import numpy as np

from ..core.worker import resolve_workers, run_chunks, split_range
from .buffers import LumaBuffer, MatchResult, Offset
from .errors import DimensionMismatch, TemplateLargerThanScene

logger = logging.getLogger(__name__)


def _window_ssd(scene_luma: np.ndarray, tpl_luma: np.ndarray, x: int, y: int,
                rows: Optional[range] = None) -> int:
    """SSD over template rows `rows` (all rows by default) with window top-left (x, y).

    Both arrays must already be int64 so squaring cannot wrap.
    """
    th, tw = tpl_luma.shape
    r0, r1 = (0, th) if rows is None else (rows.start, rows.stop)
    diff = scene_luma[y + r0:y + r1, x:x + tw] - tpl_luma[r0:r1]
    return int((diff * diff).sum())


def check_window(scene: LumaBuffer, template: LumaBuffer, offset: Offset) -> None:
    """Raise DimensionMismatch unless the window at `offset` lies inside the scene."""
    x, y = offset
    if x < 0 or y < 0 or x + template.width > scene.width or y + template.height > scene.height:
        raise DimensionMismatch(
            f"Window {template.width}x{template.height} at ({x},{y}) exceeds scene {scene.width}x{scene.height}"
        )


def check_fits(scene: LumaBuffer, template: LumaBuffer) -> None:
    if template.width > scene.width or template.height > scene.height:
        raise TemplateLargerThanScene(template.size, scene.size)


def score_window(scene: LumaBuffer, template: LumaBuffer, offset: Offset,
                 workers: Optional[int] = 1) -> int:
    """Return the SSD between the template luma and the scene window at `offset`.

    With more than one worker the template rows are split into bands; every
    worker returns its own partial sum and the sums are added once all bands
    are done.
    """
    offset = Offset(int(offset[0]), int(offset[1]))
    check_window(scene, template, offset)
    scene_luma = scene.luma.astype(np.int64)
    tpl_luma = template.luma.astype(np.int64)
    bands = split_range(0, template.height, resolve_workers(workers))
    partials = run_chunks(
        lambda rows: _window_ssd(scene_luma, tpl_luma, offset.x, offset.y, rows),
        bands,
        workers,
    )
    return sum(partials)


def offset_grid(scene: LumaBuffer, template: LumaBuffer) -> Tuple[int, int]:
    """Number of valid offsets along x and y."""
    return scene.width - template.width + 1, scene.height - template.height + 1


def _local_minimum(scene_luma: np.ndarray, tpl_luma: np.ndarray, nx: int,
                   span: range) -> Tuple[int, int]:
    """(score, flat index) of the first minimum over flat offset indices in `span`."""
    best_score = -1
    best_index = span.start
    for i in span:
        y, x = divmod(i, nx)
        score = _window_ssd(scene_luma, tpl_luma, x, y)
        if best_score < 0 or score < best_score:
            best_score = score
            best_index = i
    return best_score, best_index


def reduce_minima(partials: List[Tuple[int, int]]) -> Tuple[int, int]:
    """Combine per-slice (score, index) minima given in row-major slice order.

    Strict comparison keeps the earliest slice on ties.
    """
    best_score, best_index = partials[0]
    for score, index in partials[1:]:
        if score < best_score:
            best_score, best_index = score, index
    return best_score, best_index


def find_best_match(scene: LumaBuffer, template: LumaBuffer,
                    workers: Optional[int] = None) -> MatchResult:
    """Exhaustively search every valid offset and return the global-minimum SSD.

    Raises TemplateLargerThanScene before any scoring when the template does
    not fit. Ties resolve to the smallest offset in (y, x) scan order.
    """
    check_fits(scene, template)
    nx, ny = offset_grid(scene, template)
    count = resolve_workers(workers)
    scene_luma = scene.luma.astype(np.int64)
    tpl_luma = template.luma.astype(np.int64)

    spans = split_range(0, nx * ny, count)
    logger.debug("matcher: %d offsets (%dx%d) over %d slices", nx * ny, nx, ny, len(spans))
    partials = run_chunks(
        lambda span: _local_minimum(scene_luma, tpl_luma, nx, span),
        spans,
        count,
    )
    best_score, best_index = reduce_minima(partials)
    y, x = divmod(best_index, nx)
    return MatchResult(best_offset=Offset(x, y), best_score=best_score)
