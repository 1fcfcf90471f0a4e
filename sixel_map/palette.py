# sixel_map/palette.py
from __future__ import annotations

"""
Palette mapper.

Functions:
  scale_channel(value) -> int
  palette_lookup(palette) -> dict[RGBTuple, int]
  palette_definitions(palette) -> str
  map_palette(palette) -> (lookup, header_fragment)

Sixel colour registers take RGB as percentages, so each 8-bit channel is
rescaled with (value * 100) // 255: 0 -> 0, 255 -> 100.
"""

from typing import Dict, List, Tuple

import numpy as np

from .constants import (
    CHANNEL_MAX,
    COLOR_INTRODUCER,
    PALETTE_SIZE,
    PERCENT_MAX,
    RGB_SELECTOR,
)
from .core_types import PaletteArray, PaletteLike, RGBTuple, as_palette_array
from .errors import InvalidArgumentError


def scale_channel(value: int) -> int:
    """8-bit channel value to the 0..100 Sixel percentage scale (truncating)."""
    return (int(value) * PERCENT_MAX) // CHANNEL_MAX


def _checked_palette(palette: PaletteLike) -> PaletteArray:
    pal = as_palette_array(palette)
    if pal.shape[0] > PALETTE_SIZE:
        raise InvalidArgumentError(
            f"palette size {pal.shape[0]} exceeds the maximum of {PALETTE_SIZE} colours"
        )
    return pal


def palette_lookup(palette: PaletteLike) -> Dict[RGBTuple, int]:
    """Colour -> palette index. For repeated colours the first index wins."""
    lookup: Dict[RGBTuple, int] = {}
    for idx, (r, g, b) in enumerate(_checked_palette(palette).tolist()):
        lookup.setdefault((r, g, b), idx)
    return lookup


def palette_definitions(palette: PaletteLike) -> str:
    """'#<i>;2;<r%>;<g%>;<b%>' for every palette row, in index order."""
    pal = _checked_palette(palette)
    scaled = (pal.astype(np.int32) * PERCENT_MAX) // CHANNEL_MAX
    parts: List[str] = [
        f"{COLOR_INTRODUCER}{idx};{RGB_SELECTOR};{r};{g};{b}"
        for idx, (r, g, b) in enumerate(scaled.tolist())
    ]
    return "".join(parts)


def map_palette(palette: PaletteLike) -> Tuple[Dict[RGBTuple, int], str]:
    """
    Build the colour lookup and the palette-definition fragment in one go.

    Raises:
      InvalidArgumentError: more than 256 entries
    """
    pal = _checked_palette(palette)
    return palette_lookup(pal), palette_definitions(pal)


__all__ = [
    "scale_channel",
    "palette_lookup",
    "palette_definitions",
    "map_palette",
]
