# sixel_map/__init__.py
"""
sixel_map package.

Purpose:
  Turn raster images into Sixel escape sequences. See img2sixel.py for CLI.

Public API:
  encode           : write an image as Sixel to a text stream.
  encode_to_string : same, returned as a str.
  quantize         : median-cut palette of at most 256 colours.
  map_palette      : colour lookup and palette-definition fragment.
  rle_encode       : Sixel run-length compression of one mask line.
  IndexedImage     : palette-indexed raster (indices + palette).
  load_image       : Pillow-backed decoding to RGB or IndexedImage.
  errors           : SixelError, InvalidArgumentError, InternalError.

Quick start:
  import sys
  from sixel_map import encode, load_image
  encode(sys.stdout, load_image("picture.png"), max_colors=64)
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import constants
from . import core_types
from . import errors
from . import palette
from . import quantize
from . import dither
from . import image_io
from . import encoder
from . import utils

from .core_types import IndexedImage  # noqa: E402,F401
from .errors import InternalError, InvalidArgumentError, SixelError  # noqa: E402,F401
from .palette import map_palette  # noqa: E402,F401
from .quantize.mediancut import quantize as median_cut_quantize  # noqa: E402,F401
from .image_io import load_image  # noqa: E402,F401
from .encoder import encode, encode_to_string, rle_encode  # noqa: E402,F401

__all__ = [
    "__version__",
    "constants",
    "core_types",
    "errors",
    "palette",
    "quantize",
    "dither",
    "image_io",
    "encoder",
    "utils",
    "IndexedImage",
    "SixelError",
    "InvalidArgumentError",
    "InternalError",
    "map_palette",
    "median_cut_quantize",
    "load_image",
    "encode",
    "encode_to_string",
    "rle_encode",
]
