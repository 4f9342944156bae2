"""Separable two-dimensional transforms built from :mod:`specpress.core.fft`.

Grids are indexed ``[row, column]``.  The horizontal transform acts on each
row, the vertical transform on each column.  Both dimensions must already be
powers of two; :mod:`specpress.core.sizing` takes care of that upstream.
"""

from __future__ import annotations

import numpy as np

from .fft import fft, fft_inverse


def fft_2d_horizontal(grid: np.ndarray) -> np.ndarray:
    """Transform every row of ``grid``."""

    return fft(grid)


def fft_2d_horizontal_inverse(grid: np.ndarray) -> np.ndarray:
    """Inverse-transform every row of ``grid``."""

    return fft_inverse(grid)


def fft_2d_vertical(grid: np.ndarray) -> np.ndarray:
    """Transform every column of ``grid``."""

    return fft(np.asarray(grid).T).T


def fft_2d_vertical_inverse(grid: np.ndarray) -> np.ndarray:
    """Inverse-transform every column of ``grid``."""

    return fft_inverse(np.asarray(grid).T).T


def fft_2d(grid: np.ndarray) -> np.ndarray:
    """Return the 2D transform of ``grid`` (rows first, then columns)."""

    return fft_2d_vertical(fft_2d_horizontal(grid))


def fft_2d_inverse(grid: np.ndarray) -> np.ndarray:
    """Return the inverse 2D transform (columns first, then rows)."""

    return fft_2d_horizontal_inverse(fft_2d_vertical_inverse(grid))


def shift_quadrants(grid: np.ndarray) -> np.ndarray:
    """Swap diagonal quadrants so the zero-frequency bin moves to the centre.

    Only used to make spectra readable in plots.  The leading two axes are
    shifted by half their length; any trailing axes (e.g. colour channels) are
    carried along.  For even sizes the operation is its own inverse.
    """

    arr = np.asarray(grid)
    half_rows, half_cols = arr.shape[0] // 2, arr.shape[1] // 2
    return np.roll(arr, (half_rows, half_cols), axis=(0, 1))


__all__ = [
    "fft_2d",
    "fft_2d_inverse",
    "fft_2d_horizontal",
    "fft_2d_horizontal_inverse",
    "fft_2d_vertical",
    "fft_2d_vertical_inverse",
    "shift_quadrants",
]
