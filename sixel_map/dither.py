# sixel_map/dither.py
from __future__ import annotations

"""
Map an RGB image onto a fixed palette.

Functions:
  index_exact(rgb, palette) -> IndexedImage | None
  map_nearest(rgb, palette) -> IndexedImage
  dither_floyd_steinberg(rgb, palette) -> IndexedImage
  apply_palette(rgb, palette, dither=True) -> IndexedImage

Every result references the given palette exactly; the band encoder matches
indices by equality, never by distance.
"""

from typing import Optional

import numpy as np
from PIL import Image

from .constants import PALETTE_SIZE
from .core_types import (
    IndexedImage,
    PaletteArray,
    PaletteLike,
    U8Image,
    as_palette_array,
    assert_u8_image_rgb,
)
from .errors import InvalidArgumentError
from .palette import palette_lookup
from .utils import (
    debug_log,
    nearest_palette_indices_rgb_distance,
    unique_rgb_with_inverse,
)


def _require_palette(palette: PaletteLike) -> PaletteArray:
    pal = as_palette_array(palette)
    if pal.shape[0] == 0:
        raise InvalidArgumentError("cannot map an image onto an empty palette")
    return pal


def index_exact(rgb: U8Image, palette: PaletteLike) -> Optional[IndexedImage]:
    """
    Index an image whose every pixel is already a palette colour.
    Returns None if any pixel is off-palette.
    """
    rgb = assert_u8_image_rgb(rgb)
    pal = as_palette_array(palette)
    H, W = rgb.shape[:2]
    uniques, inverse = unique_rgb_with_inverse(rgb)
    lookup = palette_lookup(pal)
    mapped = np.empty((uniques.shape[0],), dtype=np.intp)
    for i, (r, g, b) in enumerate(uniques.tolist()):
        idx = lookup.get((r, g, b))
        if idx is None:
            return None
        mapped[i] = idx
    return IndexedImage(indices=mapped[inverse].reshape(H, W), palette=pal)


def map_nearest(rgb: U8Image, palette: PaletteLike) -> IndexedImage:
    """Nearest palette entry per pixel in RGB space, no error diffusion."""
    rgb = assert_u8_image_rgb(rgb)
    pal = _require_palette(palette)
    H, W = rgb.shape[:2]
    uniques, inverse = unique_rgb_with_inverse(rgb)
    nearest = nearest_palette_indices_rgb_distance(uniques, pal)
    return IndexedImage(indices=nearest[inverse].reshape(H, W), palette=pal)


def _pillow_palette_image(pal: PaletteArray) -> Image.Image:
    # Pillow palettes hold 256 entries; pad with copies of entry 0.
    padded = np.empty((PALETTE_SIZE, 3), dtype=np.uint8)
    padded[:] = pal[0]
    padded[: pal.shape[0]] = pal
    pal_im = Image.new("P", (1, 1))
    pal_im.putpalette(padded.tobytes())
    return pal_im


def dither_floyd_steinberg(rgb: U8Image, palette: PaletteLike) -> IndexedImage:
    """
    Floyd–Steinberg diffusion in RGB onto a fixed palette, using Pillow's
    quantiser. Padding entries Pillow may pick are folded back onto index 0,
    which holds the same colour.
    """
    rgb = assert_u8_image_rgb(rgb)
    pal = _require_palette(palette)
    if pal.shape[0] > PALETTE_SIZE:
        raise InvalidArgumentError(
            f"palette has {pal.shape[0]} entries; at most {PALETTE_SIZE} allowed"
        )
    H, W = rgb.shape[:2]
    if H == 0 or W == 0:
        return IndexedImage(indices=np.zeros((H, W), dtype=np.intp), palette=pal)

    im = Image.fromarray(np.ascontiguousarray(rgb))
    quantized = im.quantize(
        palette=_pillow_palette_image(pal), dither=Image.Dither.FLOYDSTEINBERG
    )
    indices = np.array(quantized, dtype=np.intp)
    indices[indices >= pal.shape[0]] = 0
    return IndexedImage(indices=indices, palette=pal)


def apply_palette(
    rgb: U8Image,
    palette: PaletteLike,
    dither: bool = True,
    *,
    debug: bool = False,
) -> IndexedImage:
    """
    Produce an indexed raster over `palette`.

    Exact palette images are indexed directly; otherwise Floyd–Steinberg when
    `dither` is on, nearest colour when off.
    """
    exact = index_exact(rgb, palette)
    if exact is not None:
        if debug:
            debug_log("palette covers every pixel; indexed without dithering")
        return exact
    if dither:
        if debug:
            debug_log("dithering with Floyd-Steinberg")
        return dither_floyd_steinberg(rgb, palette)
    if debug:
        debug_log("mapping to nearest palette colour")
    return map_nearest(rgb, palette)


__all__ = [
    "index_exact",
    "map_nearest",
    "dither_floyd_steinberg",
    "apply_palette",
]
