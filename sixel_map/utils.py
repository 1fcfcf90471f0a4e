# sixel_map/utils.py
from __future__ import annotations

"""
Shared utilities for sixel_map.

Includes small colour helpers, Pillow resampling lookup, time formatting and
tidy logging. Log lines go to stderr because stdout carries the Sixel stream.
"""

import sys
from typing import Any, Iterable, List, Tuple

import numpy as np
from PIL import Image


#  Time formatting


def format_seconds_compact(seconds: float) -> str:
    """Human-friendly seconds: '<ms>ms', '<s>s', or 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds - 60 * minutes:.1f}s"


# Colour helpers


def unique_rgb_with_inverse(rgb: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Unique RGB rows of an (H,W,3) image and the inverse index.

    Returns:
      unique_rgb: uint8 [U,3]
      inverse_idx: intp [H*W], unique_rgb[inverse_idx] rebuilds the flat pixels
    """
    flat = rgb.reshape(-1, 3)
    if flat.shape[0] == 0:
        return np.zeros((0, 3), dtype=np.uint8), np.zeros((0,), dtype=np.intp)
    unique_rgb, inverse_idx = np.unique(flat, axis=0, return_inverse=True)
    return (
        unique_rgb.astype(np.uint8, copy=False),
        inverse_idx.reshape(-1).astype(np.intp, copy=False),
    )


def nearest_palette_indices_rgb_distance(
    src_rgb: np.ndarray, pal_rgb: np.ndarray
) -> np.ndarray:
    """For each source RGB row, pick the nearest palette row by squared Euclidean distance."""
    src = np.asarray(src_rgb, dtype=np.int32).reshape(-1, 3)
    pal = np.asarray(pal_rgb, dtype=np.int32).reshape(-1, 3)
    out = np.empty((src.shape[0],), dtype=np.intp)
    chunk = 65_536
    for i in range(0, src.shape[0], chunk):
        diff = src[i : i + chunk, None, :] - pal[None, :, :]
        dist2 = np.sum(diff * diff, axis=2)
        out[i : i + chunk] = np.argmin(dist2, axis=1)
    return out


# I/O helpers


def pillow_resample_from_name(name: str) -> int:
    """Map a string to a Pillow resampling filter enum."""
    if name == "nearest":
        return Image.Resampling.NEAREST
    if name == "bilinear":
        return Image.Resampling.BILINEAR
    if name == "bicubic":
        return Image.Resampling.BICUBIC
    if name == "lanczos":
        return Image.Resampling.LANCZOS
    return Image.Resampling.BICUBIC  # default


# Pretty logging


def format_bool_on_off(value: Any) -> str:
    """Pretty boolean: 'on'/'off' for bools; str(value) otherwise."""
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


def format_number_compact(value: Any) -> str:
    """Pretty number: 1_234 style for ints; compact for floats; passthrough otherwise."""
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        text = f"{value:.3f}".rstrip("0").rstrip(".")
        return text
    return str(value)


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """
    Format (name, value) pairs as 'Name: value' blocks separated by sep.
    Uses format_bool_on_off / format_number_compact for readability.
    """
    out: List[str] = []
    for name, value in pairs:
        display = (
            format_bool_on_off(value)
            if isinstance(value, bool)
            else format_number_compact(value)
        )
        out.append(f"{name}{eq}{display}")
    return sep.join(out)


def print_config_line(section: str, pairs: Iterable[Tuple[str, Any]]) -> None:
    """
    Emit a single human-readable config line through debug_log(), e.g.:
      [debug] [encode] Size: 640x480  Palette: 256  Prepare: 12.0ms
    """
    debug_log(f"[{section}] {key_value_pairs_to_string(pairs)}")


def debug_log(message: str) -> None:
    """Debug log line."""
    print(f"[debug] {message}", file=sys.stderr, flush=True)


def error(message: str) -> None:
    """Error log line."""
    print(f"[error] {message}", file=sys.stderr, flush=True)


__all__ = [
    # formatting
    "format_seconds_compact",
    "format_bool_on_off",
    "format_number_compact",
    "key_value_pairs_to_string",
    # colour helpers
    "unique_rgb_with_inverse",
    "nearest_palette_indices_rgb_distance",
    # I/O helpers
    "pillow_resample_from_name",
    # logging
    "print_config_line",
    "debug_log",
    "error",
]
