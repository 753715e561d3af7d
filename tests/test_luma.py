import numpy as np
import pytest

from conftest import grey_rgb
from ssdmatch.vision import InvalidChannelCount, LumaBuffer, PixelBuffer, to_luma


def expected_luma(r, g, b):
    # exact: (299R + 587G + 114B) / 1000, halves rounded up
    return (299 * r + 587 * g + 114 * b + 500) // 1000


def test_rgb_luma_matches_formula(random_rgb):
    img = random_rgb(13, 7)
    out = to_luma(img, workers=4, chunk_pixels=5)
    assert isinstance(out, LumaBuffer)
    assert (out.width, out.height, out.channels) == (13, 7, 1)
    for y in range(img.height):
        for x in range(img.width):
            r, g, b = img.pixel(x, y)
            assert out.pixel(x, y) == (expected_luma(r, g, b),)


def test_rgba_keeps_alpha_verbatim(random_rgb):
    img = random_rgb(9, 5, channels=4)
    out = to_luma(img, workers=3, chunk_pixels=4)
    assert out.channels == 2
    src = img.as_array()
    np.testing.assert_array_equal(out.alpha, src[:, :, 3])
    r, g, b, _ = img.pixel(4, 2)
    assert out.pixel(4, 2)[0] == expected_luma(r, g, b)


def test_extremes_stay_in_range():
    img = PixelBuffer.from_array(np.array([[[255, 255, 255], [0, 0, 0], [255, 0, 0]]], dtype=np.uint8))
    out = to_luma(img)
    assert out.luma.tolist() == [[255, 0, 76]]


def test_grey_pixels_are_preserved():
    img = grey_rgb([[0, 17, 100], [128, 200, 255]])
    assert to_luma(img).luma.tolist() == [[0, 17, 100], [128, 200, 255]]


@pytest.mark.parametrize("workers,chunk", [(1, 4096), (2, 1), (8, 3), (16, 64)])
def test_output_independent_of_workers(random_rgb, workers, chunk):
    img = random_rgb(31, 17, channels=4)
    reference = to_luma(img, workers=1)
    out = to_luma(img, workers=workers, chunk_pixels=chunk)
    np.testing.assert_array_equal(out.data, reference.data)


@pytest.mark.parametrize("channels", [1, 2, 5])
def test_rejects_other_channel_counts(channels):
    img = PixelBuffer.blank(4, 4, channels)
    with pytest.raises(InvalidChannelCount):
        to_luma(img)


@pytest.mark.parametrize("rgb,luma", [
    ((0, 36, 12), 23),
    ((0, 80, 110), 60),
    ((0, 118, 81), 79),
    ((0, 152, 134), 105),
    ((0, 156, 52), 98),
    ((0, 170, 15), 102),
])
def test_exact_halves_round_up(rgb, luma):
    out = to_luma(PixelBuffer.from_array(np.array([[rgb]], dtype=np.uint8)))
    assert out.pixel(0, 0) == (luma,)


def test_every_exact_half_rounds_up():
    r, g, b = np.meshgrid(np.arange(256), np.arange(256), np.arange(0, 256, 5), indexing="ij")
    triples = np.stack([r.ravel(), g.ravel(), b.ravel()], axis=1)
    exact = triples @ np.array([299, 587, 114])
    halves = triples[exact % 1000 == 500]
    assert len(halves) > 0
    img = PixelBuffer.from_array(halves.astype(np.uint8)[None, :, :])
    out = to_luma(img, workers=4)
    np.testing.assert_array_equal(out.luma[0], (exact[exact % 1000 == 500] + 500) // 1000)
