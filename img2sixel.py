#!/usr/bin/env python3
"""
img2sixel.py
Print an image to the terminal as a Sixel graphics stream.

Usage:
  python img2sixel.py [INPUT] --colors N --no-dither --width W --height H --resample [nearest|bilinear|bicubic|lanczos] --8bit --debug

Input:
  Any Pillow-readable image. With INPUT omitted or "-", the image is read
  from stdin. Paletted images with at most 256 colours are sent as-is.
  Alpha is ignored.

Output:
  The Sixel sequence on stdout. Log lines go to stderr.

Notes:
  Palette construction is median cut (sixel_map.quantize); mapping onto the
  palette uses Floyd-Steinberg unless --no-dither is given.
"""

from __future__ import annotations

import argparse
import io
import sys
import time
from pathlib import Path
from typing import List, Optional

from sixel_map.constants import PALETTE_SIZE
from sixel_map.core_types import IndexedImage
from sixel_map.encoder import encode
from sixel_map.errors import SixelError
from sixel_map.image_io import load_image, resize_image
from sixel_map.utils import (
    debug_log,
    error,
    format_seconds_compact,
    key_value_pairs_to_string,
    print_config_line,
)

# CLI args


def _colour_count(text: str) -> int:
    value = int(text)
    if not 1 <= value <= PALETTE_SIZE:
        raise argparse.ArgumentTypeError(f"must be in 1..{PALETTE_SIZE}")
    return value


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError("must be positive")
    return value


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        src: "-" for stdin or a path
        colors: palette size target
        dither: bool, Floyd-Steinberg on/off
        width / height: optional resize target
        resample: resize filter name
        eight_bit: bool, C1 control bytes
        debug: bool for timing and palette details
    """
    parser = argparse.ArgumentParser(
        prog="img2sixel",
        description="Convert an image to a Sixel stream on stdout.",
    )
    parser.add_argument(
        "src", nargs="?", default="-", help='Input image, or "-" for stdin'
    )
    parser.add_argument(
        "--colors",
        type=_colour_count,
        default=PALETTE_SIZE,
        help=f"Palette size when quantising (1..{PALETTE_SIZE})",
    )
    parser.add_argument(
        "--no-dither",
        dest="dither",
        action="store_false",
        help="Map to the nearest palette colour instead of Floyd-Steinberg",
    )
    parser.add_argument(
        "--width", type=_positive_int, default=None, help="Resize to this width"
    )
    parser.add_argument(
        "--height", type=_positive_int, default=None, help="Resize to this height"
    )
    parser.add_argument(
        "--resample",
        choices=["nearest", "bilinear", "bicubic", "lanczos"],
        default="bicubic",
        help="Scaling filter for RGB images. Paletted images always use nearest.",
    )
    parser.add_argument(
        "--8bit",
        dest="eight_bit",
        action="store_true",
        help="Use 8-bit C1 controls (DCS 0x90, ST 0x9c)",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose details on stderr")
    return parser.parse_args(argv)


def _read_source(src: str):
    """Return a path or an in-memory copy of stdin for Pillow."""
    if src == "-":
        return io.BytesIO(sys.stdin.buffer.read())
    return Path(src)


# Entry point


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns the process exit code."""
    args = parse_cli_args(argv)

    if args.debug:
        print_config_line(
            "run",
            [
                ("Source", args.src),
                ("Colours", args.colors),
                ("Dither", args.dither),
                ("8-bit", args.eight_bit),
                ("Resample", args.resample),
            ],
        )

    source = _read_source(args.src)
    if isinstance(source, Path) and not source.exists():
        error(f"not found: {source}")
        return 2

    t_start = time.perf_counter()
    try:
        image = load_image(source)
        if args.width is not None or args.height is not None:
            image = resize_image(image, args.width, args.height, args.resample)
        t_loaded = time.perf_counter()

        if args.debug:
            kind = "indexed" if isinstance(image, IndexedImage) else "rgb"
            debug_log(
                key_value_pairs_to_string(
                    [
                        ("Loaded", kind),
                        ("Time", format_seconds_compact(t_loaded - t_start)),
                    ]
                )
            )

        encode(
            sys.stdout,
            image,
            max_colors=args.colors,
            dither=args.dither,
            eight_bit=args.eight_bit,
            debug=args.debug,
        )
        sys.stdout.flush()
    except (SixelError, OSError) as e:
        error(f"cannot convert {args.src}: {e}")
        return 1

    if args.debug:
        debug_log(f"Total {format_seconds_compact(time.perf_counter() - t_start)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
