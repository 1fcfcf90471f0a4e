# sixel_map/quantize/mediancut.py
from __future__ import annotations

"""
Median-cut palette construction.

Unique colours are collected with numpy.unique, so the starting bucket is in
ascending (R, G, B) order and every later step (largest-bucket pick, axis
pick, stable sort) is deterministic for identical input.
"""

from typing import List, Optional, Tuple, Union

import numpy as np

from ..constants import PALETTE_SIZE
from ..core_types import (
    IndexedImage,
    PaletteArray,
    PaletteLike,
    U8Image,
    assert_u8_image_rgb,
)
from ..errors import InternalError, InvalidArgumentError
from ..utils import debug_log, key_value_pairs_to_string

Bucket = np.ndarray  # (n, 3) uint8


def collect_colors(image: Union[U8Image, IndexedImage]) -> U8Image:
    """Return the unique RGB rows of an image as a (U,3) uint8 array. Alpha is ignored."""
    if isinstance(image, IndexedImage):
        rgb = image.to_rgb()
    else:
        rgb = assert_u8_image_rgb(image)
    flat = rgb.reshape(-1, 3)
    if flat.shape[0] == 0:
        return np.zeros((0, 3), dtype=np.uint8)
    return np.unique(flat, axis=0).astype(np.uint8, copy=False)


def longest_range_axis(bucket: Bucket) -> int:
    """Channel (0=R, 1=G, 2=B) with the widest value range; lower channel wins ties."""
    values = bucket.astype(np.int16, copy=False)
    ranges = values.max(axis=0) - values.min(axis=0)
    return int(np.argmax(ranges))


def split_bucket(bucket: Bucket) -> Tuple[Bucket, Optional[Bucket]]:
    """
    Sort a bucket along its longest axis and cut it at the middle index.

    Returns (lower, upper). A bucket of fewer than two colours cannot be cut
    and comes back unchanged with upper=None.
    """
    if bucket.shape[0] < 2:
        return bucket, None
    axis = longest_range_axis(bucket)
    order = np.argsort(bucket[:, axis], kind="stable")
    ordered = bucket[order]
    mid = ordered.shape[0] // 2
    return ordered[:mid], ordered[mid:]


def find_largest_bucket(buckets: List[Bucket]) -> int:
    """Index of the bucket with most colours, first one on ties; -1 if there are none."""
    if not buckets:
        return -1
    largest = 0
    largest_size = buckets[0].shape[0]
    for i in range(1, len(buckets)):
        if buckets[i].shape[0] > largest_size:
            largest = i
            largest_size = buckets[i].shape[0]
    return largest


def bucket_mean(bucket: Bucket) -> Tuple[int, int, int]:
    """Per-channel integer mean (truncating) of a non-empty bucket."""
    n = bucket.shape[0]
    if n == 0:
        raise InternalError("empty bucket encountered, cannot generate colour")
    sums = bucket.astype(np.int64).sum(axis=0)
    return (int(sums[0] // n), int(sums[1] // n), int(sums[2] // n))


def quantize(
    image: Union[U8Image, IndexedImage],
    max_colors: int = PALETTE_SIZE,
    palette: Optional[PaletteLike] = None,
    *,
    debug: bool = False,
) -> PaletteArray:
    """
    Build a palette of at most `max_colors` entries with median cut.

    Args:
      image: uint8 [H,W,3|4] image or an IndexedImage
      max_colors: target palette size in [1, 256]
      palette: must be None or empty; pre-seeded palettes are not supported
      debug: print split statistics
    Returns:
      uint8 [P,3] palette with P <= max_colors
    Raises:
      InvalidArgumentError: seeded palette or max_colors out of range
      InternalError: a median-cut invariant broke
    """
    if palette is not None and len(palette) > 0:
        raise InvalidArgumentError("quantizer does not support pre-defined palettes")
    if isinstance(max_colors, bool) or not isinstance(max_colors, (int, np.integer)):
        raise InvalidArgumentError(f"max_colors must be an int, got {max_colors!r}")
    if not 1 <= int(max_colors) <= PALETTE_SIZE:
        raise InvalidArgumentError(
            f"max_colors must be in [1, {PALETTE_SIZE}], got {max_colors}"
        )
    max_colors = int(max_colors)

    uniques = collect_colors(image)
    if uniques.shape[0] <= max_colors:
        if debug:
            debug_log(
                key_value_pairs_to_string(
                    [("Unique colours", int(uniques.shape[0])), ("Median cut", False)]
                )
            )
        return uniques.copy()

    buckets: List[Bucket] = [uniques]
    while len(buckets) < max_colors:
        largest = find_largest_bucket(buckets)
        if largest < 0:
            raise InternalError("no buckets found, cannot split further")
        lower, upper = split_bucket(buckets[largest])
        if upper is None:
            raise InternalError("bucket split produced no second half")
        buckets[largest] = lower
        buckets.append(upper)

    out = np.array([bucket_mean(b) for b in buckets], dtype=np.uint8).reshape(-1, 3)
    if out.shape[0] > max_colors:
        raise InternalError(
            f"median cut produced {out.shape[0]} colours, requested {max_colors}"
        )

    if debug:
        sizes = [int(b.shape[0]) for b in buckets]
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Unique colours", int(uniques.shape[0])),
                    ("Buckets", len(buckets)),
                    ("Largest", max(sizes)),
                    ("Smallest", min(sizes)),
                ]
            )
        )
    return out


__all__ = [
    "Bucket",
    "collect_colors",
    "longest_range_axis",
    "split_bucket",
    "find_largest_bucket",
    "bucket_mean",
    "quantize",
]
