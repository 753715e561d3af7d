"""Search orchestration used by the command line.

Responsibility:
- Thin orchestration: decode files (io.codec), convert to luma, run the
  exhaustive search, render the bounding box, encode results.
- Hold caller configuration (worker count, chunk size, marker color); the
  pure functions in ssdmatch.vision take these as arguments.
- Structured logging: INFO for the final result, DEBUG for stage timings.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple, Union
import logging
import time

from ..config.vision import DEFAULT_CHUNK_PIXELS, MARKER_COLOR, PERF_ENABLED
from ..core.worker import resolve_workers
from ..io.codec import load_image, save_image
from ..vision import (
    LumaBuffer,
    MatchResult,
    PixelBuffer,
    annotate_match,
    find_best_match,
    to_luma,
)

logger = logging.getLogger(__name__)


@dataclass
class SearchOutcome:
    result: MatchResult
    annotated: PixelBuffer
    scene_luma: LumaBuffer
    template_luma: LumaBuffer
    timings: Dict[str, float] = field(default_factory=dict)


class SearchController:
    """Runs luma conversion, exhaustive search and visualization for one image pair."""

    def __init__(
        self,
        workers: Optional[int] = None,
        chunk_pixels: int = DEFAULT_CHUNK_PIXELS,
        marker_color: Tuple[int, int, int] = MARKER_COLOR,
    ) -> None:
        self.workers = resolve_workers(workers)
        self.chunk_pixels = int(chunk_pixels)
        self.marker_color = tuple(marker_color)

    @classmethod
    def from_config(cls, config_manager, workers: Optional[int] = None) -> "SearchController":
        """Build a controller from ConfigManager values; `workers` overrides the config."""
        if workers is None:
            workers = config_manager.get_int("workers", 0)
        return cls(
            workers=workers,
            chunk_pixels=config_manager.get_int("chunk_pixels", DEFAULT_CHUNK_PIXELS),
            marker_color=config_manager.get_color("marker_color"),
        )

    def greyscale(self, image: PixelBuffer) -> LumaBuffer:
        return to_luma(image, workers=self.workers, chunk_pixels=self.chunk_pixels)

    def run(self, scene: PixelBuffer, template: PixelBuffer) -> SearchOutcome:
        """Match `template` inside `scene` and render the final bounding box."""
        timings: Dict[str, float] = {}
        t0 = time.perf_counter()
        scene_luma = self.greyscale(scene)
        template_luma = self.greyscale(template)
        t1 = time.perf_counter()
        timings["luma_ms"] = (t1 - t0) * 1000.0

        result = find_best_match(scene_luma, template_luma, workers=self.workers)
        t2 = time.perf_counter()
        timings["search_ms"] = (t2 - t1) * 1000.0

        annotated = annotate_match(scene, template.width, template.height, result, self.marker_color)
        t3 = time.perf_counter()
        timings["visualize_ms"] = (t3 - t2) * 1000.0
        timings["total_ms"] = (t3 - t0) * 1000.0

        if PERF_ENABLED or logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "search: luma %.1fms search %.1fms visualize %.1fms workers=%d",
                timings["luma_ms"], timings["search_ms"], timings["visualize_ms"], self.workers,
            )
        logger.info(
            "search: best score %d at (%d,%d) for %dx%d template in %dx%d scene",
            result.best_score, result.best_offset.x, result.best_offset.y,
            template.width, template.height, scene.width, scene.height,
        )
        return SearchOutcome(result, annotated, scene_luma, template_luma, timings)

    def run_files(
        self,
        scene_path: Union[str, Path],
        template_path: Union[str, Path],
        output_path: Union[str, Path],
        grey_output: Optional[Union[str, Path]] = None,
    ) -> SearchOutcome:
        """Load the scene as RGB and the template as RGBA, match, and write the results."""
        scene = load_image(scene_path, channels=3)
        logger.info("Input image %s: %dx%d", scene_path, scene.width, scene.height)
        template = load_image(template_path, channels=4)
        logger.info("Search image %s: %dx%d", template_path, template.width, template.height)

        outcome = self.run(scene, template)
        save_image(outcome.annotated, output_path)
        if grey_output is not None:
            save_image(outcome.scene_luma, grey_output)
        return outcome
