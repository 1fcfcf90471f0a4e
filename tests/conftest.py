from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from PIL import Image


@pytest.fixture
def four_colour_image() -> np.ndarray:
    """2x2 RGB image with four distinct opaque colours."""
    return np.array(
        [
            [[255, 0, 0], [0, 0, 255]],
            [[0, 255, 0], [255, 255, 0]],
        ],
        dtype=np.uint8,
    )


@pytest.fixture
def gradient_image() -> np.ndarray:
    """16x16 red/green gradient, 256 unique colours."""
    xs = np.arange(16, dtype=np.uint8) * 16
    img = np.zeros((16, 16, 3), dtype=np.uint8)
    img[..., 0] = xs[None, :]
    img[..., 1] = xs[:, None]
    return img


@pytest.fixture
def noise_image() -> np.ndarray:
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(13, 17, 3), dtype=np.uint8)


@pytest.fixture
def png_path(tmp_path: Path, gradient_image: np.ndarray) -> Path:
    path = tmp_path / "gradient.png"
    Image.fromarray(gradient_image).save(path)
    return path


@pytest.fixture
def paletted_png_path(tmp_path: Path) -> Path:
    im = Image.new("P", (3, 2))
    im.putpalette([255, 0, 0, 0, 255, 0, 0, 0, 255])
    im.putdata([0, 1, 2, 2, 1, 0])
    path = tmp_path / "paletted.png"
    im.save(path)
    return path
