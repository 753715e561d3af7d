"""Benchmark harness: warmup runs followed by timed iterations."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable
import logging
import time

from .controllers.search import SearchController
from .vision import PixelBuffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BenchmarkResult:
    label: str
    iterations: int
    total_ms: float

    @property
    def per_iteration_ms(self) -> float:
        return self.total_ms / self.iterations


def benchmark(func: Callable[[], object], iterations: int = 100, warmup: int = 5,
              label: str = "benchmark") -> BenchmarkResult:
    """Call `func` `warmup` times untimed, then `iterations` times under a perf_counter."""
    if iterations < 1:
        raise ValueError(f"iterations must be >= 1, got {iterations}")
    if warmup < 0:
        raise ValueError(f"warmup must be >= 0, got {warmup}")

    for _ in range(warmup):
        func()
    t0 = time.perf_counter()
    for _ in range(iterations):
        func()
    total_ms = (time.perf_counter() - t0) * 1000.0

    res = BenchmarkResult(label=label, iterations=iterations, total_ms=total_ms)
    logger.info("bench: %s took %.1fms for %d iterations (%.3fms each)",
                label, total_ms, iterations, res.per_iteration_ms)
    return res


def benchmark_greyscale(controller: SearchController, image: PixelBuffer,
                        iterations: int = 100, warmup: int = 5) -> BenchmarkResult:
    return benchmark(lambda: controller.greyscale(image), iterations, warmup, label="greyscale")


def benchmark_search(controller: SearchController, scene: PixelBuffer, template: PixelBuffer,
                     iterations: int = 100, warmup: int = 5) -> BenchmarkResult:
    """Time the full luma + search + visualize pipeline."""
    return benchmark(lambda: controller.run(scene, template), iterations, warmup, label="search")
