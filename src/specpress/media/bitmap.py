"""Bitmap reading and writing via Pillow."""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import UnsupportedFormatError


def read_bitmap(path: str | Path) -> np.ndarray:
    """Return the pixels of an image file as an ``(height, width, 3)`` array.

    Palette, greyscale and alpha images are converted to plain RGB.
    """

    try:
        with Image.open(path) as img:
            rgb = img.convert("RGB")
    except UnidentifiedImageError as exc:
        raise UnsupportedFormatError("unrecognised image format", path=path) from exc
    return np.asarray(rgb, dtype=np.uint8)


def write_bitmap(path: str | Path, pixels: np.ndarray) -> Path:
    """Save an ``(height, width, channels)`` ``uint8`` grid as a bitmap.

    A single channel is written as a greyscale image, three channels as RGB.
    """

    arr = np.asarray(pixels, dtype=np.uint8)
    if arr.ndim == 3 and arr.shape[2] == 1:
        arr = arr[..., 0]
    if arr.ndim == 3 and arr.shape[2] != 3:
        raise ValueError(f"cannot write an image with {arr.shape[2]} channels")
    p = Path(path)
    Image.fromarray(arr).save(p, format="BMP")
    return p


__all__ = ["read_bitmap", "write_bitmap"]
