"""Image compression by corner extraction of unshifted 2D spectra.

Each colour channel is padded to power-of-two dimensions and transformed with
:func:`~specpress.core.fft2d.fft_2d`.  In an unshifted spectrum the zero
frequency sits at ``[0, 0]`` and low frequencies wrap around to the other
three corners, so the codec keeps a block from each corner and drops the
middle band where the detail lives.  No quadrant shift is involved; see
:func:`~specpress.core.fft2d.shift_quadrants` for the display-only variant.

Along each axis a target of ``t`` retained coefficients is split into a
leading corner of ``t - t // 2`` and a trailing corner of ``t // 2``.  When
``t`` is odd the leading corner, which holds the zero-frequency bin, gets the
extra coefficient.

Decompression rebuilds pixels from the magnitude of the inverse transform
rather than its real part.  The inverse of a truncated spectrum is not
guaranteed to be real, and the magnitude keeps intensities non-negative.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

import numpy as np

from ..media.bitmap import read_bitmap, write_bitmap
from ..types import ImageSize
from .fft import COMPLEX_DTYPE
from .fft2d import fft_2d, fft_2d_inverse
from .records import ImageRecord, dump_record, load_record
from .sizing import round_up_2d, truncate_2d

logger = logging.getLogger(__name__)


class CompressionLevelError(ValueError):
    """Raised when a compression level would keep the whole spectrum."""


def corner_split(target: int) -> tuple[int, int]:
    """Return ``(leading, trailing)`` coefficient counts for one axis."""

    if target < 0:
        raise ValueError("target must not be negative")
    trailing = target // 2
    return target - trailing, trailing


def target_size(padded: ImageSize, compression_level: float) -> ImageSize:
    """Return the corner grid size kept for ``compression_level``.

    ``floor(padded / compression_level)`` on each axis.

    Raises
    ------
    CompressionLevelError
        If the level would keep the full spectrum on either axis.
    """

    if compression_level <= 1:
        raise CompressionLevelError(f"compression level must be greater than 1, got {compression_level}")
    size = ImageSize(
        width=math.floor(padded.width / compression_level),
        height=math.floor(padded.height / compression_level),
    )
    if size.width >= padded.width or size.height >= padded.height:
        raise CompressionLevelError(
            f"compression level {compression_level} keeps the whole "
            f"{padded.width}x{padded.height} spectrum"
        )
    return size


def _axis_indices(length: int, target: int) -> np.ndarray:
    leading, trailing = corner_split(target)
    return np.concatenate([np.arange(leading), np.arange(length - trailing, length)]).astype(int)


def extract_corners(spectrum: np.ndarray, size: ImageSize) -> np.ndarray:
    """Pack the four low-frequency corners of ``spectrum`` into one grid.

    The result has shape ``(size.height, size.width)``.  Its top-left block is
    the top-left corner of ``spectrum``, its bottom-right block the
    bottom-right corner, and so on.
    """

    arr = np.asarray(spectrum)
    height, width = arr.shape
    if size.width >= width or size.height >= height:
        raise CompressionLevelError("corner grid must be smaller than the spectrum")
    rows = _axis_indices(height, size.height)
    cols = _axis_indices(width, size.width)
    return arr[np.ix_(rows, cols)]


def restore_corners(corners: np.ndarray, size: ImageSize) -> np.ndarray:
    """Place a packed corner grid back into a zero spectrum of ``size``.

    Inverse of :func:`extract_corners`; the middle band (possibly empty) is
    zero-filled.
    """

    arr = np.asarray(corners)
    out = np.zeros(size.shape, dtype=COMPLEX_DTYPE)
    rows = _axis_indices(size.height, arr.shape[0])
    cols = _axis_indices(size.width, arr.shape[1])
    out[np.ix_(rows, cols)] = arr
    return out


def compress(pixels: np.ndarray, compression_level: float) -> ImageRecord:
    """Compress an ``(height, width, channels)`` pixel grid.

    Parameters
    ----------
    pixels:
        Intensities in ``0..255``.  A 2D array is treated as a single channel.
    compression_level:
        Divisor applied to each padded dimension to obtain the number of
        coefficients kept along that axis.  Must be greater than 1.

    Returns
    -------
    ImageRecord
        Per-channel corner grids with the padded and original sizes.
    """

    arr = np.asarray(pixels, dtype=np.float32)
    if arr.ndim == 2:
        arr = arr[..., np.newaxis]
    if arr.ndim != 3 or arr.shape[0] == 0 or arr.shape[1] == 0:
        raise ValueError("pixels must have shape (height, width, channels)")

    padded, original = round_up_2d(arr)
    transformed = ImageSize.of(padded)
    size = target_size(transformed, compression_level)
    corners = np.stack(
        [extract_corners(fft_2d(padded[..., c]), size) for c in range(padded.shape[2])]
    )
    logger.debug(
        "compressed %dx%d image (padded %dx%d) to %dx%d corner grids",
        original.width,
        original.height,
        transformed.width,
        transformed.height,
        size.width,
        size.height,
    )
    return ImageRecord(corners=corners, transformed_size=transformed, original_size=original)


def decompress(record: ImageRecord) -> np.ndarray:
    """Rebuild an ``(height, width, channels)`` ``uint8`` pixel grid.

    Raises
    ------
    CorruptRecordError
        If the stored sizes are inconsistent.
    """

    record.validate()
    channels = []
    for corners in record.corners:
        spectrum = restore_corners(corners, record.transformed_size)
        channels.append(truncate_2d(fft_2d_inverse(spectrum), record.original_size))
    magnitude = np.abs(np.stack(channels, axis=-1))
    return np.clip(np.rint(magnitude), 0, 255).astype(np.uint8)


def compress_file(bmp_path: str | Path, output_path: str | Path, compression_level: float) -> ImageRecord:
    """Compress a bitmap file into a binary image record at ``output_path``."""

    record = compress(read_bitmap(bmp_path), compression_level)
    dump_record(record, output_path)
    logger.info(
        "compressed %s -> %s (level %s, %d bytes)",
        bmp_path,
        output_path,
        compression_level,
        Path(output_path).stat().st_size,
    )
    return record


def decompress_file(record_path: str | Path, bmp_path: str | Path) -> np.ndarray:
    """Decompress a binary image record into a bitmap file."""

    record = load_record(record_path)
    if not isinstance(record, ImageRecord):
        raise ValueError(f"{record_path} does not contain an image record")
    pixels = decompress(record)
    write_bitmap(bmp_path, pixels)
    logger.info("decompressed %s -> %s", record_path, bmp_path)
    return pixels


__all__ = [
    "CompressionLevelError",
    "corner_split",
    "target_size",
    "extract_corners",
    "restore_corners",
    "compress",
    "decompress",
    "compress_file",
    "decompress_file",
]
