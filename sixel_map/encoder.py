# sixel_map/encoder.py
from __future__ import annotations

"""
Sixel encoder.

Stream layout:
  DCS q "1;1;<W>;<H> #<i>;2;<r>;<g>;<b>... <band>-<band>-...<band> ST

Each band is 6 pixel rows. For every palette index present in a band the
encoder writes '#<i>' followed by one character per column (bit k set when
row k of the band holds that index, plus 63), run-length compressed. Colours
inside a band are separated by '$', bands by '-'.
"""

from itertools import groupby
from io import StringIO
import time
from typing import List, TextIO, Tuple, Union

import numpy as np
from PIL import Image

from .constants import (
    ASPECT_DENOMINATOR,
    ASPECT_NUMERATOR,
    BAND_HEIGHT,
    CARRIAGE_RETURN,
    COLOR_INTRODUCER,
    DCS_7BIT,
    DCS_8BIT,
    NEW_LINE,
    PALETTE_SIZE,
    RASTER_ATTRIBUTES,
    RLE_MARKER,
    RLE_MIN_RUN,
    SIXEL_OFFSET,
    SIXEL_START,
    ST_7BIT,
    ST_8BIT,
)
from .core_types import IndexedImage, U8Image, assert_u8_image_rgb
from .dither import apply_palette
from .errors import InvalidArgumentError
from .image_io import image_from_pil
from .palette import palette_definitions
from .quantize import quantize
from .utils import debug_log, format_seconds_compact, print_config_line

EncodableImage = Union[IndexedImage, U8Image, Image.Image]

_BIT_WEIGHTS = (1 << np.arange(BAND_HEIGHT, dtype=np.int32))[:, None]


# Run-length encoding


def rle_encode(line: str) -> str:
    """Compress runs of 3+ identical characters to '!<n><c>'; shorter runs stay verbatim."""
    parts: List[str] = []
    for ch, run in groupby(line):
        count = sum(1 for _ in run)
        if count >= RLE_MIN_RUN:
            parts.append(f"{RLE_MARKER}{count}{ch}")
        else:
            parts.append(ch * count)
    return "".join(parts)


# Bands


def band_colors(indices: np.ndarray, top: int) -> List[int]:
    """
    Distinct palette indices of the band starting at row `top`, in discovery
    order: column by column, top to bottom inside each column.
    """
    band = indices[top : top + BAND_HEIGHT]
    if band.size == 0:
        return []
    flat = band.T.ravel()
    uniq, first_seen = np.unique(flat, return_index=True)
    return [int(c) for c in uniq[np.argsort(first_seen, kind="stable")]]


def band_mask(indices: np.ndarray, top: int, color: int) -> np.ndarray:
    """Per-column 6-bit masks in [0, 63] for `color` within the band at `top`."""
    band = indices[top : top + BAND_HEIGHT]
    rows = band.shape[0]
    hits = (band == color).astype(np.int32)
    return (hits * _BIT_WEIGHTS[:rows]).sum(axis=0)


def encode_band(indexed: IndexedImage, top: int) -> List[Tuple[int, str]]:
    """
    Encode one band.

    Returns:
      [(palette_index, rle_line), ...] in discovery order. Rows past the
      bottom of the image never set a bit.
    """
    out: List[Tuple[int, str]] = []
    for color in band_colors(indexed.indices, top):
        masks = band_mask(indexed.indices, top, color) + SIXEL_OFFSET
        line = masks.astype(np.uint8).tobytes().decode("ascii")
        out.append((color, rle_encode(line)))
    return out


# Stream assembly


def prepare_indexed(
    image: EncodableImage,
    max_colors: int = PALETTE_SIZE,
    dither: bool = True,
    *,
    debug: bool = False,
) -> IndexedImage:
    """
    Turn any accepted image into an encodable IndexedImage.

    An IndexedImage with at most 256 palette entries is returned unchanged
    (no quantisation, no dithering). Larger palettes and RGB(A) arrays are
    quantised with median cut and then mapped onto the new palette.
    """
    if isinstance(image, Image.Image):
        image = image_from_pil(image)

    if isinstance(image, IndexedImage):
        if image.is_encodable():
            if debug:
                debug_log(
                    f"reusing indexed image palette ({image.palette.shape[0]} colours)"
                )
            return image
        if image.palette.shape[0] <= PALETTE_SIZE:
            raise InvalidArgumentError("index out of palette range")
        rgb = image.to_rgb()
    else:
        rgb = assert_u8_image_rgb(image)

    palette = quantize(rgb, max_colors, debug=debug)
    return apply_palette(rgb, palette, dither, debug=debug)


def write_sixel(output: TextIO, indexed: IndexedImage, *, eight_bit: bool = False) -> None:
    """Write the full escape sequence for an encodable IndexedImage."""
    if indexed.palette.shape[0] > PALETTE_SIZE:
        raise InvalidArgumentError(
            f"palette size {indexed.palette.shape[0]} exceeds the maximum of {PALETTE_SIZE} colours"
        )
    if not indexed.has_valid_indices():
        raise InvalidArgumentError("index out of palette range")

    width, height = indexed.width, indexed.height

    output.write(DCS_8BIT if eight_bit else DCS_7BIT)
    output.write(SIXEL_START)
    output.write(
        f"{RASTER_ATTRIBUTES}{ASPECT_NUMERATOR};{ASPECT_DENOMINATOR};{width};{height}"
    )
    output.write(palette_definitions(indexed.palette))

    if width > 0 and height > 0:
        for top in range(0, height, BAND_HEIGHT):
            lines = encode_band(indexed, top)
            output.write(
                CARRIAGE_RETURN.join(
                    f"{COLOR_INTRODUCER}{color}{line}" for color, line in lines
                )
            )
            if top + BAND_HEIGHT < height:
                output.write(NEW_LINE)

    output.write(ST_8BIT if eight_bit else ST_7BIT)


def encode(
    output: TextIO,
    image: EncodableImage,
    *,
    max_colors: int = PALETTE_SIZE,
    dither: bool = True,
    eight_bit: bool = False,
    debug: bool = False,
) -> IndexedImage:
    """
    Encode an image as Sixel into a text stream.

    Args:
      output: any object with a write(str) method
      image: IndexedImage, uint8 [H,W,3|4] array, or a PIL image
      max_colors: palette size target in [1, 256] when quantising
      dither: Floyd–Steinberg when mapping onto a new palette
      eight_bit: use the C1 DCS/ST bytes instead of ESC P / ESC \\
      debug: print timing and palette details to stderr
    Returns:
      the IndexedImage that was written
    Raises:
      InvalidArgumentError: bad image, palette or max_colors
      InternalError: quantiser invariant violation
      OSError: whatever the output stream raises; partial output stays written
    """
    t_start = time.perf_counter()
    indexed = prepare_indexed(image, max_colors, dither, debug=debug)
    t_prepared = time.perf_counter()
    write_sixel(output, indexed, eight_bit=eight_bit)
    t_written = time.perf_counter()

    if debug:
        print_config_line(
            "encode",
            [
                ("Size", f"{indexed.width}x{indexed.height}"),
                ("Palette", int(indexed.palette.shape[0])),
                ("Prepare", format_seconds_compact(t_prepared - t_start)),
                ("Write", format_seconds_compact(t_written - t_prepared)),
            ],
        )
    return indexed


def encode_to_string(image: EncodableImage, **kwargs) -> str:
    """Encode to an in-memory string. Keyword arguments as for encode()."""
    output = StringIO()
    try:
        encode(output, image, **kwargs)
        value = output.getvalue()
    finally:
        output.close()
    return value


__all__ = [
    "EncodableImage",
    "rle_encode",
    "band_colors",
    "band_mask",
    "encode_band",
    "prepare_indexed",
    "write_sixel",
    "encode",
    "encode_to_string",
]
