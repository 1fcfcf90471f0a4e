# sixel_map/quantize/__init__.py
"""
Palette construction.

Provides:
  quantize(image, max_colors=256, palette=None, debug=False)
    Median-cut palette of at most max_colors entries.

    Args:
      image      : uint8 [H,W,3|4] or IndexedImage
      max_colors : int in [1, 256]
      palette    : None or empty; a seeded palette raises InvalidArgumentError

    Returns:
      uint8 [P,3] palette, P <= max_colors. When the image holds no more than
      max_colors unique colours they are returned as-is, sorted by (R, G, B).

  collect_colors(image)
    Unique RGB rows of an image, alpha ignored.
"""

from .mediancut import collect_colors, quantize

__all__ = ["collect_colors", "quantize"]
