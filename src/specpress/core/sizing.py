"""Power-of-two size normalisation.

The radix-2 transforms only accept power-of-two lengths.  The helpers here pad
buffers with zeros up to the next power of two and cut them back to an exact
size afterwards.  Padding never loses information:
``truncate(round_up(x)[0], len(x))`` always equals ``x``.

One-dimensional buffers are padded and truncated at the end.  Grids are padded
symmetrically on both leading axes; when the amount of padding is odd the
extra row/column goes after the data.  :func:`truncate_2d` removes the edges
with the same split.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..types import ImageSize


def next_power_of_two(n: int) -> int:
    """Return the smallest power of two that is ``>= n``."""

    if n <= 0:
        raise ValueError("size must be positive")
    return 1 << (int(n) - 1).bit_length()


def previous_power_of_two(n: int) -> int:
    """Return the largest power of two that is ``<= n``."""

    if n <= 0:
        raise ValueError("size must be positive")
    return 1 << (int(n).bit_length() - 1)


def _split(extra: int) -> tuple[int, int]:
    before = extra // 2
    return before, extra - before


def round_up(samples: Sequence[float] | np.ndarray) -> tuple[np.ndarray, int]:
    """Zero-pad ``samples`` at the end to a power-of-two length.

    Returns the padded array and the original length.
    """

    arr = np.asarray(samples)
    original = arr.shape[0]
    target = next_power_of_two(original)
    pad = [(0, target - original)] + [(0, 0)] * (arr.ndim - 1)
    return np.pad(arr, pad), original


def round_down(samples: Sequence[float] | np.ndarray) -> np.ndarray:
    """Drop trailing elements so the length becomes a power of two."""

    arr = np.asarray(samples)
    return arr[: previous_power_of_two(arr.shape[0])]


def truncate(samples: Sequence[float] | np.ndarray, size: int) -> np.ndarray:
    """Keep the first ``size`` elements of ``samples``."""

    arr = np.asarray(samples)
    if size < 0 or size > arr.shape[0]:
        raise ValueError(f"cannot truncate {arr.shape[0]} samples to {size}")
    return arr[:size]


def round_up_2d(grid: np.ndarray) -> tuple[np.ndarray, ImageSize]:
    """Pad the two leading axes of ``grid`` to powers of two.

    Trailing axes such as colour channels are left untouched.  Returns the
    padded grid and the original :class:`~specpress.types.ImageSize`.
    """

    arr = np.asarray(grid)
    if arr.ndim < 2:
        raise ValueError("grid must have at least two dimensions")
    original = ImageSize.of(arr)
    rows = _split(next_power_of_two(original.height) - original.height)
    cols = _split(next_power_of_two(original.width) - original.width)
    pad = [rows, cols] + [(0, 0)] * (arr.ndim - 2)
    return np.pad(arr, pad), original


def truncate_2d(grid: np.ndarray, size: ImageSize) -> np.ndarray:
    """Cut ``grid`` down to ``size``, undoing :func:`round_up_2d`."""

    arr = np.asarray(grid)
    height, width = arr.shape[0], arr.shape[1]
    if not (0 <= size.height <= height and 0 <= size.width <= width):
        raise ValueError(f"cannot truncate {width}x{height} grid to {size.width}x{size.height}")
    top, _ = _split(height - size.height)
    left, _ = _split(width - size.width)
    return arr[top : top + size.height, left : left + size.width]


__all__ = [
    "next_power_of_two",
    "previous_power_of_two",
    "round_up",
    "round_down",
    "truncate",
    "round_up_2d",
    "truncate_2d",
]
