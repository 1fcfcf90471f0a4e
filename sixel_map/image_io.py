# sixel_map/image_io.py
from __future__ import annotations

import io
from pathlib import Path
from typing import BinaryIO, Optional, Tuple, Union

import numpy as np
from PIL import Image, ImageOps

from .core_types import IndexedImage, U8Image
from .errors import InvalidArgumentError
from .utils import pillow_resample_from_name

"""
Image I/O helpers: decode to sRGB uint8 or to an IndexedImage, and resize.
"""

try:
    from PIL import ImageCms  # ICC conversion if profile present
except ImportError:  # pragma: no cover
    ImageCms = None  # type: ignore[assignment]

ImageSource = Union[str, Path, BinaryIO]
LoadedImage = Union[U8Image, IndexedImage]


def _convert_to_srgb_rgb(im: Image.Image) -> Image.Image:
    icc_bytes = im.info.get("icc_profile")

    if icc_bytes and ImageCms is not None:
        try:
            src_prof = ImageCms.ImageCmsProfile(io.BytesIO(icc_bytes))
            dst_prof = ImageCms.createProfile("sRGB")
            im2 = ImageCms.profileToProfile(
                im,
                src_prof,
                dst_prof,
                renderingIntent=ImageCms.Intent.PERCEPTUAL,
                outputMode="RGB",
            )
            if im2 is None:
                return im.convert("RGB")
            return im2
        except (ImageCms.PyCMSError, OSError, ValueError):
            return im.convert("RGB")

    return im.convert("RGB")


def _palette_of(im: Image.Image) -> Optional[np.ndarray]:
    raw = im.getpalette()
    if not raw:
        return None
    pal = np.array(raw, dtype=np.uint8)
    return pal[: (pal.size // 3) * 3].reshape(-1, 3)


# Single-channel modes wider than 8 bits; values are 16-bit grey.
_WIDE_GREY_MODES = ("I", "I;16", "I;16L", "I;16B", "I;16N")


def _wide_grey_to_rgb(im: Image.Image) -> U8Image:
    # High byte of each 16-bit sample.
    grey = np.array(im).astype(np.int64)
    grey = np.clip(grey >> 8, 0, 255).astype(np.uint8)
    return np.repeat(grey[..., None], 3, axis=2)


def _premultiply_alpha(rgb: U8Image, im: Image.Image) -> U8Image:
    # Transparent pixels composite onto black.
    alpha = np.array(im.getchannel("A"), dtype=np.uint16)[..., None]
    return ((rgb.astype(np.uint16) * alpha) // 255).astype(np.uint8)


def image_from_pil(im: Image.Image) -> LoadedImage:
    """
    Convert a Pillow image.

    Mode "P" images come back as an IndexedImage with their own palette and
    indices. Everything else becomes uint8 [H,W,3] sRGB: 16-bit greys keep
    their high byte and alpha is premultiplied, so transparent areas are black.
    """
    if im.mode == "P":
        pal = _palette_of(im)
        if pal is not None:
            indices = np.array(im, dtype=np.intp)
            return IndexedImage(indices=indices, palette=pal)
    if im.mode in _WIDE_GREY_MODES:
        return _wide_grey_to_rgb(im)
    rgb_im = _convert_to_srgb_rgb(im)
    rgb = np.array(rgb_im, dtype=np.uint8).reshape(rgb_im.height, rgb_im.width, 3)
    if "A" in im.getbands():
        rgb = _premultiply_alpha(rgb, im)
    return rgb


def load_image(source: ImageSource) -> LoadedImage:
    """Open a path or binary stream with Pillow, apply EXIF orientation and convert."""
    with Image.open(source) as im0:
        im0.load()
        im = ImageOps.exif_transpose(im0)
        return image_from_pil(im)


def _target_size(
    width0: int, height0: int, width: Optional[int], height: Optional[int]
) -> Tuple[int, int]:
    if width is not None and width <= 0:
        raise InvalidArgumentError(f"width must be positive, got {width}")
    if height is not None and height <= 0:
        raise InvalidArgumentError(f"height must be positive, got {height}")
    if width is None and height is None:
        return width0, height0
    if width is None:
        width = max(1, int(round(width0 * (height / float(height0))))) if height0 else 1
    if height is None:
        height = max(1, int(round(height0 * (width / float(width0))))) if width0 else 1
    return int(width), int(height)


def resize_image(
    image: LoadedImage,
    width: Optional[int] = None,
    height: Optional[int] = None,
    resample: str = "bicubic",
) -> LoadedImage:
    """
    Resize to width x height. Omit one side to keep the aspect ratio.

    Indexed images are always resized nearest-neighbour on their indices so
    the palette stays valid.
    """
    if isinstance(image, IndexedImage):
        H0, W0 = image.height, image.width
    else:
        H0, W0 = image.shape[0], image.shape[1]
    dst_w, dst_h = _target_size(W0, H0, width, height)
    if (dst_w, dst_h) == (W0, H0) or W0 == 0 or H0 == 0:
        return image

    if isinstance(image, IndexedImage):
        im = Image.fromarray(image.indices.astype(np.int32))
        im2 = im.resize((dst_w, dst_h), resample=Image.Resampling.NEAREST)
        return IndexedImage(indices=np.array(im2, dtype=np.intp), palette=image.palette)

    im = Image.fromarray(np.ascontiguousarray(image[..., :3]))
    im2 = im.resize((dst_w, dst_h), resample=pillow_resample_from_name(resample))
    return np.array(im2, dtype=np.uint8)


__all__ = [
    "ImageSource",
    "LoadedImage",
    "image_from_pil",
    "load_image",
    "resize_image",
]
