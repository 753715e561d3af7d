"""Pytest configuration.

Ensures src/ is on sys.path so tests can import `ssdmatch.*` without an
install, and provides small helpers for building pixel buffers.
"""

import logging
import sys
from pathlib import Path

import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from ssdmatch.vision.buffers import PixelBuffer  # noqa: E402


def grey_rgb(values, alpha=None) -> PixelBuffer:
    """RGB (or RGBA when alpha is given) buffer whose pixels are (v, v, v).

    The luma weights sum to 1, so each pixel converts back to exactly v.
    """
    v = np.asarray(values, dtype=np.uint8)
    planes = [v, v, v]
    if alpha is not None:
        planes.append(np.full_like(v, alpha))
    return PixelBuffer.from_array(np.stack(planes, axis=2))


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def random_rgb(rng):
    def _make(width, height, channels=3):
        return PixelBuffer.from_array(rng.integers(0, 256, (height, width, channels), dtype=np.uint8))
    return _make


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """Undo handlers installed by setup_logging so they don't outlive the test's streams."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for h in root.handlers[:]:
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)
