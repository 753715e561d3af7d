"""
Worker Pool Module
Fans chunks of an index range out to worker threads and collects results.
"""

from __future__ import annotations

import logging
import os
import queue
import threading
from typing import Any, Callable, List, Optional, Sequence

logger = logging.getLogger(__name__)


def resolve_workers(workers: Optional[int]) -> int:
    """Return a concrete worker count; None or values < 1 mean one per CPU."""
    if workers is None or int(workers) < 1:
        return max(1, os.cpu_count() or 1)
    return int(workers)


def split_range(start: int, stop: int, parts: int) -> List[range]:
    """Split [start, stop) into at most `parts` contiguous, ordered, non-empty ranges."""
    total = stop - start
    if total <= 0:
        return []
    parts = max(1, min(int(parts), total))
    base, extra = divmod(total, parts)
    out: List[range] = []
    lo = start
    for i in range(parts):
        hi = lo + base + (1 if i < extra else 0)
        out.append(range(lo, hi))
        lo = hi
    return out


def chunk_range(start: int, stop: int, size: int) -> List[range]:
    """Split [start, stop) into ordered ranges of `size` items (last may be shorter)."""
    size = max(1, int(size))
    return [range(lo, min(lo + size, stop)) for lo in range(start, stop, size)]


class ChunkWorker(threading.Thread):
    """Worker thread draining (index, chunk) items from a shared queue.

    Each result lands in its own slot of `results`, so no two workers write
    the same location.
    """

    def __init__(self, func: Callable[[Any], Any], task_queue: queue.Queue,
                 results: List[Any], errors: List[BaseException]):
        super().__init__(daemon=True)
        self.func = func
        self.task_queue = task_queue
        self.results = results
        self.errors = errors

    def run(self):
        """Process items until the queue is empty."""
        while self._process_queue_iteration():
            pass

    def _process_queue_iteration(self) -> bool:
        """Process a single queue item. Return False to break the loop."""
        try:
            index, chunk = self.task_queue.get_nowait()
        except queue.Empty:
            return False
        try:
            self.results[index] = self.func(chunk)
        except Exception as e:
            logger.debug("worker: chunk %d failed: %s", index, e)
            self.errors.append(e)
            return False
        finally:
            self.task_queue.task_done()
        return True


def run_chunks(func: Callable[[Any], Any], chunks: Sequence[Any], workers: Optional[int] = None) -> List[Any]:
    """Apply `func` to every chunk on a bounded thread pool.

    Returns the results in chunk order, independent of scheduling. The first
    exception raised by any worker is re-raised once all workers have joined.
    """
    n = len(chunks)
    if n == 0:
        return []
    count = min(resolve_workers(workers), n)
    if count == 1:
        return [func(c) for c in chunks]

    task_queue: queue.Queue = queue.Queue()
    for i, c in enumerate(chunks):
        task_queue.put((i, c))
    results: List[Any] = [None] * n
    errors: List[BaseException] = []

    threads = [ChunkWorker(func, task_queue, results, errors) for _ in range(count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    if errors:
        raise errors[0]
    return results
