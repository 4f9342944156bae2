"""Compressed records and their binary layout.

Both layouts are little-endian and consist of a fixed header followed by
``float32`` ``(re, im)`` pairs.

Audio record::

    0   4s   magic b"SPA1"
    4   u32  sample_rate
    8   u64  original_sample_count
    16  u16  bit_rate
    18  u8   sample_format (0 signed, 1 unsigned, 2 float)
    19  u8   reserved
    20  u64  trailing_zero_count
    28  u64  number of stored bins n
    36  n * (f32 re, f32 im)

Image record::

    0   4s   magic b"SPI1"
    4   u32  original width, u32 original height
    12  u32  transformed width, u32 transformed height
    20  u32  corner grid width, u32 corner grid height
    28  u8   channel count c
    29  c * height * width * (f32 re, f32 im), channel-major, row-major
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

from ..types import ImageSize, SampleFormat, sample_dtype
from .fft import COMPLEX_DTYPE, is_power_of_two

AUDIO_MAGIC = b"SPA1"
IMAGE_MAGIC = b"SPI1"

_AUDIO_HEADER = struct.Struct("<4sIQHBBQQ")
_IMAGE_HEADER = struct.Struct("<4sIIIIIIB")
_PAIR_DTYPE = np.dtype("<f4")


class CorruptRecordError(ValueError):
    """Raised when a compressed record has inconsistent sizes or bytes."""


def _pairs_to_bytes(values: np.ndarray) -> bytes:
    arr = np.asarray(values, dtype=COMPLEX_DTYPE)
    pairs = np.empty(arr.shape + (2,), dtype=_PAIR_DTYPE)
    pairs[..., 0] = arr.real
    pairs[..., 1] = arr.imag
    return pairs.tobytes()


def _bytes_to_pairs(payload: bytes, shape: tuple[int, ...]) -> np.ndarray:
    pairs = np.frombuffer(payload, dtype=_PAIR_DTYPE).reshape(shape + (2,))
    out = np.empty(shape, dtype=COMPLEX_DTYPE)
    out.real = pairs[..., 0]
    out.imag = pairs[..., 1]
    return out


def _check_payload(data: bytes, offset: int, count: int) -> bytes:
    expected = offset + count * 2 * _PAIR_DTYPE.itemsize
    if len(data) != expected:
        raise CorruptRecordError(
            f"record payload has {len(data)} bytes, header declares {expected}"
        )
    return data[offset:]


# ---------------------------------------------------------------------------
# Audio
# ---------------------------------------------------------------------------


@dataclass
class AudioRecord:
    """Low-passed spectrum of a mono waveform.

    ``truncated_spectrum`` holds bins ``0 .. highest_bin`` of the transform of
    the zero-padded waveform.  The remaining ``trailing_zero_count`` bins were
    discarded and are restored as zeros on decompression.
    """

    sample_rate: int
    original_sample_count: int
    bit_rate: int
    truncated_spectrum: np.ndarray
    trailing_zero_count: int
    sample_format: SampleFormat = SampleFormat.SIGNED

    def __post_init__(self) -> None:
        self.truncated_spectrum = np.asarray(self.truncated_spectrum, dtype=COMPLEX_DTYPE).reshape(-1)
        self.sample_format = SampleFormat(self.sample_format)

    @property
    def padded_sample_count(self) -> int:
        return int(self.truncated_spectrum.size) + int(self.trailing_zero_count)

    def validate(self) -> None:
        """Raise :class:`CorruptRecordError` when the sizes or sample type are inconsistent."""

        padded = self.padded_sample_count
        if self.trailing_zero_count < 0:
            raise CorruptRecordError("trailing_zero_count must not be negative")
        if not is_power_of_two(padded):
            raise CorruptRecordError(
                f"spectrum length {self.truncated_spectrum.size} + {self.trailing_zero_count} "
                "trailing zeros is not a power of 2"
            )
        if not 0 < self.original_sample_count <= padded:
            raise CorruptRecordError(
                f"original sample count {self.original_sample_count} does not fit "
                f"the padded length {padded}"
            )
        if self.sample_rate <= 0:
            raise CorruptRecordError("sample_rate must be positive")
        try:
            sample_dtype(self.bit_rate, self.sample_format)
        except ValueError as exc:
            raise CorruptRecordError(str(exc)) from None

    def to_bytes(self) -> bytes:
        header = _AUDIO_HEADER.pack(
            AUDIO_MAGIC,
            self.sample_rate,
            self.original_sample_count,
            self.bit_rate,
            int(self.sample_format),
            0,
            self.trailing_zero_count,
            self.truncated_spectrum.size,
        )
        return header + _pairs_to_bytes(self.truncated_spectrum)

    @classmethod
    def from_bytes(cls, data: bytes) -> "AudioRecord":
        if len(data) < _AUDIO_HEADER.size:
            raise CorruptRecordError("audio record is shorter than its header")
        (magic, sample_rate, original, bit_rate, fmt, _reserved, zeros, count) = _AUDIO_HEADER.unpack_from(data)
        if magic != AUDIO_MAGIC:
            raise CorruptRecordError(f"not an audio record (magic {magic!r})")
        try:
            sample_format = SampleFormat(fmt)
        except ValueError:
            raise CorruptRecordError(f"unknown sample format code {fmt}") from None
        payload = _check_payload(data, _AUDIO_HEADER.size, count)
        return cls(
            sample_rate=sample_rate,
            original_sample_count=original,
            bit_rate=bit_rate,
            truncated_spectrum=_bytes_to_pairs(payload, (count,)),
            trailing_zero_count=zeros,
            sample_format=sample_format,
        )


# ---------------------------------------------------------------------------
# Image
# ---------------------------------------------------------------------------


@dataclass
class ImageRecord:
    """Corner coefficients of each colour channel of a transformed image.

    ``corners`` has shape ``(channels, corner_height, corner_width)``; each
    channel grid holds the four retained corners of the unshifted spectrum
    packed next to each other (see :func:`specpress.core.image.extract_corners`).
    """

    corners: np.ndarray
    transformed_size: ImageSize
    original_size: ImageSize
    channels: int = field(init=False)

    def __post_init__(self) -> None:
        self.corners = np.asarray(self.corners, dtype=COMPLEX_DTYPE)
        if self.corners.ndim != 3:
            raise ValueError("corners must have shape (channels, height, width)")
        self.channels = int(self.corners.shape[0])

    @property
    def corner_size(self) -> ImageSize:
        return ImageSize(width=int(self.corners.shape[2]), height=int(self.corners.shape[1]))

    def validate(self) -> None:
        """Raise :class:`CorruptRecordError` when the declared sizes disagree."""

        transformed, original, corner = self.transformed_size, self.original_size, self.corner_size
        if not (is_power_of_two(transformed.width) and is_power_of_two(transformed.height)):
            raise CorruptRecordError(
                f"transformed size {transformed.width}x{transformed.height} is not a power of 2"
            )
        if original.width > transformed.width or original.height > transformed.height:
            raise CorruptRecordError("original size exceeds the transformed size")
        if original.width <= 0 or original.height <= 0:
            raise CorruptRecordError("original size must be positive")
        if corner.width >= transformed.width or corner.height >= transformed.height:
            raise CorruptRecordError("corner grid must be smaller than the transformed size")
        if self.channels == 0:
            raise CorruptRecordError("image record has no channels")

    def to_bytes(self) -> bytes:
        corner = self.corner_size
        header = _IMAGE_HEADER.pack(
            IMAGE_MAGIC,
            self.original_size.width,
            self.original_size.height,
            self.transformed_size.width,
            self.transformed_size.height,
            corner.width,
            corner.height,
            self.channels,
        )
        return header + _pairs_to_bytes(self.corners)

    @classmethod
    def from_bytes(cls, data: bytes) -> "ImageRecord":
        if len(data) < _IMAGE_HEADER.size:
            raise CorruptRecordError("image record is shorter than its header")
        magic, ow, oh, tw, th, cw, ch, channels = _IMAGE_HEADER.unpack_from(data)
        if magic != IMAGE_MAGIC:
            raise CorruptRecordError(f"not an image record (magic {magic!r})")
        payload = _check_payload(data, _IMAGE_HEADER.size, channels * ch * cw)
        return cls(
            corners=_bytes_to_pairs(payload, (channels, ch, cw)),
            transformed_size=ImageSize(tw, th),
            original_size=ImageSize(ow, oh),
        )


# ---------------------------------------------------------------------------
# File helpers
# ---------------------------------------------------------------------------


def dump_record(record: AudioRecord | ImageRecord, path: str | Path) -> Path:
    """Write ``record`` to ``path`` and return the path."""

    p = Path(path)
    p.write_bytes(record.to_bytes())
    return p


def load_record(path: str | Path) -> AudioRecord | ImageRecord:
    """Read an audio or image record, dispatching on its magic bytes."""

    data = Path(path).read_bytes()
    magic = data[:4]
    if magic == AUDIO_MAGIC:
        return AudioRecord.from_bytes(data)
    if magic == IMAGE_MAGIC:
        return ImageRecord.from_bytes(data)
    raise CorruptRecordError(f"{path}: unrecognised record magic {magic!r}")


__all__ = [
    "AUDIO_MAGIC",
    "IMAGE_MAGIC",
    "CorruptRecordError",
    "AudioRecord",
    "ImageRecord",
    "dump_record",
    "load_record",
]
