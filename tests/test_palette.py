"""Tests for palette lookup and palette-definition output."""
from __future__ import annotations

import numpy as np
import pytest

from sixel_map.errors import InvalidArgumentError
from sixel_map.palette import map_palette, palette_definitions, scale_channel


def test_scale_channel_endpoints():
    assert scale_channel(0) == 0
    assert scale_channel(255) == 100
    assert scale_channel(128) == 50


def test_scale_channel_is_monotonic():
    scaled = [scale_channel(v) for v in range(256)]
    assert all(a <= b for a, b in zip(scaled, scaled[1:]))


def test_map_palette_lookup_and_fragment():
    lookup, fragment = map_palette([(255, 0, 0), (0, 128, 255)])
    assert lookup == {(255, 0, 0): 0, (0, 128, 255): 1}
    assert fragment == "#0;2;100;0;0#1;2;0;50;100"


def test_map_palette_accepts_arrays():
    pal = np.array([[1, 2, 3]], dtype=np.uint8)
    lookup, fragment = map_palette(pal)
    assert lookup == {(1, 2, 3): 0}
    assert fragment == "#0;2;0;0;1"


def test_repeated_colours_keep_first_index_but_all_are_defined():
    lookup, fragment = map_palette([(9, 9, 9), (0, 0, 0), (9, 9, 9)])
    assert lookup[(9, 9, 9)] == 0
    assert fragment.count("#") == 3
    assert fragment.endswith("#2;2;3;3;3")


def test_empty_palette():
    assert map_palette([]) == ({}, "")


def test_full_palette_is_accepted():
    pal = np.zeros((256, 3), dtype=np.uint8)
    assert palette_definitions(pal).count("#") == 256


def test_oversized_palette_is_rejected():
    with pytest.raises(InvalidArgumentError):
        map_palette(np.zeros((257, 3), dtype=np.uint8))


def test_out_of_range_channels_are_rejected():
    with pytest.raises(InvalidArgumentError):
        map_palette([(256, 0, 0)])
