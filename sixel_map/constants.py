# sixel_map/constants.py
"""
Sixel format constants shared across the project.

- Palette limit, band height and the printable bias for six-pixel columns
- Control strings for the 7-bit and 8-bit introducer / terminator
- Single-character commands used inside the Sixel body
"""
from __future__ import annotations

# ==============
# Format limits
# ==============
PALETTE_SIZE: int = 256  # common terminal limit, some support more
BAND_HEIGHT: int = 6
SIXEL_OFFSET: int = 63  # ord("?"), maps mask 0..63 into "?".."~"
CHANNEL_MAX: int = 255
PERCENT_MAX: int = 100

# ================
# Control strings
# ================
DCS_7BIT: str = "\x1bP"
DCS_8BIT: str = "\x90"
ST_7BIT: str = "\x1b\\"
ST_8BIT: str = "\x9c"
SIXEL_START: str = "q"

# =============
# Body commands
# =============
RASTER_ATTRIBUTES: str = '"'
ASPECT_NUMERATOR: int = 1
ASPECT_DENOMINATOR: int = 1
COLOR_INTRODUCER: str = "#"
RGB_SELECTOR: int = 2
RLE_MARKER: str = "!"
RLE_MIN_RUN: int = 3
CARRIAGE_RETURN: str = "$"
NEW_LINE: str = "-"

__all__ = [
    "PALETTE_SIZE",
    "BAND_HEIGHT",
    "SIXEL_OFFSET",
    "CHANNEL_MAX",
    "PERCENT_MAX",
    "DCS_7BIT",
    "DCS_8BIT",
    "ST_7BIT",
    "ST_8BIT",
    "SIXEL_START",
    "RASTER_ATTRIBUTES",
    "ASPECT_NUMERATOR",
    "ASPECT_DENOMINATOR",
    "COLOR_INTRODUCER",
    "RGB_SELECTOR",
    "RLE_MARKER",
    "RLE_MIN_RUN",
    "CARRIAGE_RETURN",
    "NEW_LINE",
]
