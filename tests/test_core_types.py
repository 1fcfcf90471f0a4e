"""Tests for IndexedImage and palette coercion."""
from __future__ import annotations

import numpy as np
import pytest

from sixel_map.core_types import IndexedImage, as_palette_array
from sixel_map.errors import InvalidArgumentError


def test_indexed_image_shape_and_rgb():
    indexed = IndexedImage(indices=[[1, 0, 1]], palette=[(1, 2, 3), (4, 5, 6)])
    assert (indexed.height, indexed.width) == (1, 3)
    assert indexed.to_rgb().tolist() == [[[4, 5, 6], [1, 2, 3], [4, 5, 6]]]


def test_indexed_image_validity():
    assert IndexedImage(indices=[[0, 1]], palette=[(0, 0, 0), (1, 1, 1)]).is_encodable()
    assert not IndexedImage(indices=[[0, 2]], palette=[(0, 0, 0)]).has_valid_indices()
    assert not IndexedImage(indices=[[-1]], palette=[(0, 0, 0)]).has_valid_indices()
    big = IndexedImage(indices=[[0]], palette=np.zeros((257, 3), dtype=np.uint8))
    assert big.has_valid_indices()
    assert not big.is_encodable()


def test_indexed_image_rejects_bad_shapes():
    with pytest.raises(InvalidArgumentError):
        IndexedImage(indices=[0, 1], palette=[(0, 0, 0)])
    with pytest.raises(InvalidArgumentError):
        IndexedImage(indices=[[0.5]], palette=[(0, 0, 0)])
    with pytest.raises(InvalidArgumentError):
        IndexedImage(indices=[[0]], palette=[0, 0, 0])


def test_to_rgb_with_bad_index_raises():
    with pytest.raises(InvalidArgumentError):
        IndexedImage(indices=[[3]], palette=[(0, 0, 0)]).to_rgb()


def test_as_palette_array_drops_alpha_column():
    pal = as_palette_array([(1, 2, 3, 4)])
    assert pal.dtype == np.uint8
    assert pal.tolist() == [[1, 2, 3]]
