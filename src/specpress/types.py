"""Common type helpers for specpress.

This module defines the lightweight containers exchanged between the media
readers, the codecs and the analysis helpers.  The structures are
intentionally minimal but add clarity around frequently exchanged data.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

import numpy as np


class SampleFormat(IntEnum):
    """Encoding of PCM samples; the value is stored in compressed records."""

    SIGNED = 0
    UNSIGNED = 1
    FLOAT = 2


@dataclass(frozen=True)
class ImageSize:
    """Width/height pair of a pixel or coefficient grid."""

    width: int
    height: int

    @classmethod
    def of(cls, grid: np.ndarray) -> "ImageSize":
        """Return the size of the two leading axes of ``grid``."""

        return cls(width=int(grid.shape[1]), height=int(grid.shape[0]))

    @property
    def shape(self) -> tuple[int, int]:
        """Return ``(height, width)`` in NumPy axis order."""

        return (self.height, self.width)


@dataclass
class Waveform:
    """Mono waveform with the metadata needed to rebuild a WAV file."""

    samples: np.ndarray
    sample_rate: int
    bit_rate: int
    sample_format: SampleFormat = SampleFormat.SIGNED

    def __post_init__(self) -> None:
        self.samples = np.asarray(self.samples)
        if self.samples.ndim != 1:
            raise ValueError("waveform samples must be one-dimensional")
        if self.sample_rate <= 0:
            raise ValueError("sample_rate must be positive")
        self.sample_format = SampleFormat(self.sample_format)

    @property
    def sample_size(self) -> int:
        return int(self.samples.size)

    @property
    def frequency_resolution(self) -> float:
        """Width in Hz of one frequency bin for a transform of this waveform."""

        return self.sample_rate / self.sample_size

    @property
    def duration(self) -> float:
        """Return the waveform length in seconds."""

        return self.sample_size / self.sample_rate


_INTEGER_TYPES = {
    (8, SampleFormat.UNSIGNED): np.uint8,
    (16, SampleFormat.SIGNED): np.int16,
    (32, SampleFormat.SIGNED): np.int32,
}
_FLOAT_TYPES = {32: np.float32, 64: np.float64}


def default_sample_format(bit_rate: int) -> SampleFormat:
    """Return the PCM convention for integer samples of ``bit_rate`` bits.

    8-bit WAV data is unsigned, wider integer data is signed.
    """

    return SampleFormat.UNSIGNED if bit_rate == 8 else SampleFormat.SIGNED


def sample_dtype(bit_rate: int, sample_format: SampleFormat = SampleFormat.SIGNED) -> np.dtype:
    """Return the NumPy dtype used to store samples of the given width."""

    sample_format = SampleFormat(sample_format)
    if sample_format is SampleFormat.FLOAT:
        dtype = _FLOAT_TYPES.get(bit_rate)
    else:
        dtype = _INTEGER_TYPES.get((bit_rate, sample_format))
    if dtype is None:
        raise ValueError(f"unsupported sample width: {bit_rate}-bit {sample_format.name.lower()}")
    return np.dtype(dtype)
