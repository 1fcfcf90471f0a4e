"""Tests for mapping RGB images onto a fixed palette."""
from __future__ import annotations

import numpy as np
import pytest

from sixel_map import dither
from sixel_map.dither import (
    apply_palette,
    dither_floyd_steinberg,
    index_exact,
    map_nearest,
)
from sixel_map.errors import InvalidArgumentError

BLACK_WHITE = [(0, 0, 0), (255, 255, 255)]


def test_index_exact_maps_palette_members(four_colour_image):
    palette = [(255, 255, 0), (255, 0, 0), (0, 255, 0), (0, 0, 255)]
    indexed = index_exact(four_colour_image, palette)
    assert indexed is not None
    assert indexed.indices.tolist() == [[1, 3], [2, 0]]


def test_index_exact_gives_up_on_off_palette_pixels(four_colour_image):
    assert index_exact(four_colour_image, BLACK_WHITE) is None


def test_map_nearest():
    img = np.array([[[10, 10, 10], [250, 240, 200], [100, 100, 100]]], dtype=np.uint8)
    assert map_nearest(img, BLACK_WHITE).indices.tolist() == [[0, 1, 0]]


def test_map_nearest_needs_a_palette():
    with pytest.raises(InvalidArgumentError):
        map_nearest(np.zeros((1, 1, 3), dtype=np.uint8), [])


def test_floyd_steinberg_spreads_mid_grey():
    img = np.full((4, 4, 3), 128, dtype=np.uint8)
    indexed = dither_floyd_steinberg(img, BLACK_WHITE)
    values = set(indexed.indices.ravel().tolist())
    assert values == {0, 1}


def test_floyd_steinberg_solid_palette_colour_is_exact():
    img = np.full((3, 5, 3), 255, dtype=np.uint8)
    indexed = dither_floyd_steinberg(img, BLACK_WHITE)
    assert (indexed.indices == 1).all()


def test_floyd_steinberg_indices_stay_in_palette(noise_image):
    palette = [(0, 0, 0), (255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 255)]
    indexed = dither_floyd_steinberg(noise_image, palette)
    assert indexed.indices.shape == noise_image.shape[:2]
    assert indexed.has_valid_indices()


def test_floyd_steinberg_full_palette_on_larger_image():
    rng = np.random.default_rng(99)
    img = rng.integers(0, 256, size=(120, 160, 3), dtype=np.uint8)
    palette = rng.integers(0, 256, size=(256, 3), dtype=np.uint8)
    indexed = dither_floyd_steinberg(img, palette)
    assert indexed.indices.shape == (120, 160)
    assert indexed.has_valid_indices()
    assert np.array_equal(indexed.palette, palette)


def test_floyd_steinberg_short_palette_never_uses_padding(noise_image):
    palette = [(12, 200, 40), (250, 250, 250), (3, 3, 90)]
    indexed = dither_floyd_steinberg(noise_image, palette)
    assert int(indexed.indices.max()) < 3


def test_floyd_steinberg_empty_image():
    img = np.zeros((0, 4, 3), dtype=np.uint8)
    assert dither_floyd_steinberg(img, BLACK_WHITE).indices.shape == (0, 4)


def test_floyd_steinberg_rejects_oversized_palette():
    palette = np.zeros((257, 3), dtype=np.uint8)
    with pytest.raises(InvalidArgumentError):
        dither_floyd_steinberg(np.zeros((1, 1, 3), dtype=np.uint8), palette)


def test_apply_palette_skips_dithering_for_exact_images(monkeypatch, four_colour_image):
    def boom(*args, **kwargs):
        raise AssertionError("must not dither")

    monkeypatch.setattr(dither, "dither_floyd_steinberg", boom)
    palette = [(255, 0, 0), (0, 0, 255), (0, 255, 0), (255, 255, 0)]
    indexed = apply_palette(four_colour_image, palette)
    assert indexed.indices.tolist() == [[0, 1], [2, 3]]


def test_apply_palette_without_dither_uses_nearest():
    img = np.full((2, 2, 3), 128, dtype=np.uint8)
    indexed = apply_palette(img, BLACK_WHITE, dither=False)
    assert (indexed.indices == 1).all()
