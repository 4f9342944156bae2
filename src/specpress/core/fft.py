"""Radix-2 Cooley–Tukey Fourier transforms.

The transforms operate along the last axis of their input.  Any leading axes
are treated as a batch of independent sequences, which lets the 2D helpers in
:mod:`specpress.core.fft2d` transform every row of a grid in a single call.

All results are single precision (``complex64``).  The length of the
transformed axis must be a power of two; shorter or longer buffers have to be
normalised with :mod:`specpress.core.sizing` first.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

COMPLEX_DTYPE = np.complex64


class NotPowerOfTwoError(ValueError):
    """Raised when a transform receives a length that is not ``2**n``."""

    def __init__(self, size: int):
        self.size = size
        super().__init__(f"Sample size is not a power of 2: {size}")


def is_power_of_two(n: int) -> bool:
    """Return ``True`` when ``n`` is a positive power of two."""

    return n > 0 and (n & (n - 1)) == 0


def _as_complex(samples: Sequence[complex] | np.ndarray) -> np.ndarray:
    arr = np.asarray(samples)
    if arr.ndim == 0:
        raise ValueError("samples must have at least one dimension")
    if not is_power_of_two(arr.shape[-1]):
        raise NotPowerOfTwoError(arr.shape[-1])
    return arr.astype(COMPLEX_DTYPE)


def _twiddles(size: int, sign: float) -> np.ndarray:
    # computed in double precision, stored as complex64
    k = np.arange(size // 2)
    return np.exp(sign * -2j * np.pi * k / size).astype(COMPLEX_DTYPE)


def _fft_recursive(samples: np.ndarray, sign: float) -> np.ndarray:
    size = samples.shape[-1]
    if size == 1:
        return samples
    half = size // 2

    evens = _fft_recursive(samples[..., 0::2], sign)
    odds = _fft_recursive(samples[..., 1::2], sign)

    # e^(-i2pi(k+N/2)/N) == -e^(-i2pi k/N), so one twiddle serves both halves
    weighted = _twiddles(size, sign) * odds
    out = np.empty(samples.shape, dtype=COMPLEX_DTYPE)
    out[..., :half] = evens + weighted
    out[..., half:] = evens - weighted
    return out


def fft(samples: Sequence[complex] | np.ndarray) -> np.ndarray:
    """Return the discrete Fourier transform of ``samples``.

    Parameters
    ----------
    samples:
        Real or complex values.  The last axis is transformed and its length
        must be a power of two.

    Returns
    -------
    numpy.ndarray
        ``complex64`` spectrum with the same shape as ``samples``.

    Raises
    ------
    NotPowerOfTwoError
        If the length of the last axis is not a power of two.
    """

    return _fft_recursive(_as_complex(samples), 1.0)


def fft_inverse(spectrum: Sequence[complex] | np.ndarray) -> np.ndarray:
    """Return the inverse transform of ``spectrum``, scaled by ``1/N``.

    ``fft_inverse(fft(x))`` reproduces ``x`` up to single precision rounding.
    """

    arr = _as_complex(spectrum)
    size = arr.shape[-1]
    return (_fft_recursive(arr, -1.0) / size).astype(COMPLEX_DTYPE)


def frequency_bins(spectrum: Sequence[complex] | np.ndarray) -> np.ndarray:
    """Return the one-sided amplitude of each discernible frequency.

    Bins ``0 .. N/2`` (exclusive) are kept and scaled by ``2/N`` so that a
    sinusoid of amplitude ``a`` shows up with height ``a``.  Only meant for
    display; the codecs never use it.
    """

    arr = np.asarray(spectrum)
    size = arr.shape[-1]
    alias_index = size // 2
    return (np.abs(arr[..., :alias_index]) * 2.0 / size).astype(np.float32)


def frequency_axis(sample_size: int, sample_rate: float) -> np.ndarray:
    """Return the frequency in Hz of each bin produced by :func:`frequency_bins`."""

    resolution = sample_rate / sample_size
    return np.arange(sample_size // 2, dtype=float) * resolution


__all__ = [
    "COMPLEX_DTYPE",
    "NotPowerOfTwoError",
    "is_power_of_two",
    "fft",
    "fft_inverse",
    "frequency_bins",
    "frequency_axis",
]
