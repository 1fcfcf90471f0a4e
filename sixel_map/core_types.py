# sixel_map/core_types.py
from __future__ import annotations

"""
Core type aliases, the indexed raster value object, and lightweight helpers.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .constants import PALETTE_SIZE
from .errors import InvalidArgumentError

# Basic aliases

RGBTuple = Tuple[int, int, int]

U8Image = NDArray[np.uint8]  # (H, W, 3) or (H, W, 4)
IndexArray = NDArray[np.intp]  # (H, W) palette indices
PaletteArray = NDArray[np.uint8]  # (P, 3)

PaletteLike = Union[PaletteArray, Sequence[Sequence[int]]]

# Value objects


@dataclass(frozen=True)
class IndexedImage:
    """
    Palette-indexed raster.

    indices: (H, W) integer array, each value a row of `palette`
    palette: (P, 3) uint8 array
    """

    indices: IndexArray
    palette: PaletteArray

    def __post_init__(self) -> None:
        indices = np.asarray(self.indices)
        if indices.ndim != 2:
            raise InvalidArgumentError("expected (H,W) index array")
        if indices.size and not np.issubdtype(indices.dtype, np.integer):
            raise InvalidArgumentError("index array must hold integers")
        object.__setattr__(self, "indices", indices.astype(np.intp, copy=False))
        object.__setattr__(self, "palette", as_palette_array(self.palette))

    @property
    def height(self) -> int:
        return int(self.indices.shape[0])

    @property
    def width(self) -> int:
        return int(self.indices.shape[1])

    def has_valid_indices(self) -> bool:
        """True if every index points inside the palette."""
        if self.indices.size == 0:
            return True
        lo = int(self.indices.min())
        hi = int(self.indices.max())
        return lo >= 0 and hi < self.palette.shape[0]

    def is_encodable(self) -> bool:
        """True if the raster can go to the encoder as-is."""
        return self.palette.shape[0] <= PALETTE_SIZE and self.has_valid_indices()

    def to_rgb(self) -> U8Image:
        """Expand to a (H, W, 3) uint8 image."""
        if not self.has_valid_indices():
            raise InvalidArgumentError("index out of palette range")
        if self.palette.shape[0] == 0:
            return np.zeros((self.height, self.width, 3), dtype=np.uint8)
        return self.palette[self.indices]


# Small helpers


def as_palette_array(palette: PaletteLike) -> PaletteArray:
    """Coerce a palette (array or sequence of RGB triples) to a (P,3) uint8 array."""
    arr = np.asarray(palette)
    if arr.size == 0:
        return np.zeros((0, 3), dtype=np.uint8)
    if arr.ndim != 2 or arr.shape[1] < 3:
        raise InvalidArgumentError("expected (P,3) palette")
    if arr.dtype != np.uint8:
        if np.any(arr < 0) or np.any(arr > 255):
            raise InvalidArgumentError("palette channels must be in 0..255")
        arr = arr.astype(np.uint8)
    return np.ascontiguousarray(arr[:, :3])


def assert_u8_image_rgb(image: np.ndarray) -> U8Image:
    """Validate a uint8 (H,W,3 or 4) image and return its RGB planes."""
    image = np.asarray(image)
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] < 3:
        raise InvalidArgumentError("expected uint8 (H,W,3/4) image")
    return image[..., :3]


__all__ = [
    # aliases / types
    "RGBTuple",
    "U8Image",
    "IndexArray",
    "PaletteArray",
    "PaletteLike",
    # value objects
    "IndexedImage",
    # helpers
    "as_palette_array",
    "assert_u8_image_rgb",
]
