import numpy as np
import pytest

from ssdmatch.vision import (
    DimensionMismatch,
    MatchResult,
    Offset,
    PixelBuffer,
    annotate_match,
)
from ssdmatch.vision.visualize import match_rect


def border_mask(width, height, left, top, tw, th):
    mask = np.zeros((height, width), dtype=bool)
    right, bottom = left + tw - 1, top + th - 1
    mask[top, left:right + 1] = True
    mask[bottom, left:right + 1] = True
    mask[top:bottom + 1, left] = True
    mask[top:bottom + 1, right] = True
    return mask


@pytest.mark.parametrize("offset,tw,th", [((2, 1), 3, 4), ((0, 0), 8, 6), ((5, 3), 3, 3), ((1, 2), 4, 2)])
def test_only_border_is_marked(random_rgb, offset, tw, th):
    scene = random_rgb(8, 6)
    result = MatchResult(Offset(*offset), 0)
    out = annotate_match(scene, tw, th, result, color=(255, 0, 0))

    assert (out.width, out.height, out.channels) == (8, 6, 3)
    mask = border_mask(8, 6, offset[0], offset[1], tw, th)
    arr = out.as_array()
    assert (arr[mask] == [255, 0, 0]).all()
    np.testing.assert_array_equal(arr[~mask], scene.as_array()[~mask])


def test_rectangle_spans_template_size(random_rgb):
    scene = random_rgb(10, 10)
    out = annotate_match(scene, 4, 3, MatchResult(Offset(3, 5), 12), color=(0, 255, 0))
    marked = np.argwhere((out.as_array() == [0, 255, 0]).all(axis=2))
    ys, xs = marked[:, 0], marked[:, 1]
    assert (xs.min(), xs.max(), ys.min(), ys.max()) == (3, 6, 5, 7)
    assert match_rect(MatchResult(Offset(3, 5), 12), 4, 3) == (3, 5, 6, 7)


def test_scene_is_not_modified(random_rgb):
    scene = random_rgb(6, 6)
    before = scene.data.copy()
    annotate_match(scene, 2, 2, MatchResult(Offset(1, 1), 0))
    np.testing.assert_array_equal(scene.data, before)


def test_rgba_scene_drops_alpha(random_rgb):
    scene = random_rgb(5, 5, channels=4)
    out = annotate_match(scene, 2, 2, MatchResult(Offset(0, 0), 0))
    assert out.channels == 3
    assert out.pixel(4, 4) == scene.pixel(4, 4)[:3]


@pytest.mark.parametrize("offset,tw,th", [((3, 0), 4, 2), ((0, 5), 2, 2), ((-1, 0), 2, 2)])
def test_window_outside_scene(offset, tw, th):
    scene = PixelBuffer.blank(6, 6, 3)
    with pytest.raises(DimensionMismatch):
        annotate_match(scene, tw, th, MatchResult(Offset(*offset), 0))
