"""Colour and frequency domain views of an image."""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from ..core.fft2d import fft_2d, fft_2d_horizontal, fft_2d_vertical, shift_quadrants
from ..core.sizing import round_up_2d
from .helpers import save_figure, show_grid
from .styles import apply_style


def spectrum_to_intensity(grids: np.ndarray, log_factor: float = 1.0, shift: bool = False) -> np.ndarray:
    """Map complex ``(height, width, channels)`` grids to displayable pixels.

    Magnitudes are divided by the largest magnitude over all channels, raised
    to ``log_factor`` to lift faint coefficients, and scaled to ``0..255``.
    With ``shift`` the zero frequency is moved to the centre.
    """

    if log_factor <= 0:
        raise ValueError("log_factor must be positive")
    magnitude = np.abs(np.asarray(grids))
    peak = magnitude.max() if magnitude.size else 0.0
    if peak == 0:
        scaled = np.zeros(magnitude.shape, dtype=np.uint8)
    else:
        scaled = ((magnitude / peak) ** log_factor * 255.0).astype(np.uint8)
    return shift_quadrants(scaled) if shift else scaled


def _per_channel(transform, pixels: np.ndarray) -> np.ndarray:
    return np.stack([transform(pixels[..., c]) for c in range(pixels.shape[2])], axis=-1)


def plot_image_analysis(pixels: np.ndarray, path: str | Path, log_factor: float = 0.2, title: str | None = None) -> Path:
    """Save a 2x2 figure: pixels, 2D spectrum, row-only and column-only spectra.

    The image is padded to power-of-two dimensions first; the spectra are
    quadrant-shifted for display.
    """

    padded, _ = round_up_2d(np.asarray(pixels, dtype=np.float32))
    if padded.ndim == 2:
        padded = padded[..., np.newaxis]

    panels = [
        ("Color domain", np.clip(padded, 0, 255).astype(np.uint8)),
        ("Frequency domain", spectrum_to_intensity(_per_channel(fft_2d, padded), log_factor, shift=True)),
        (
            "Horizontal frequency domain",
            spectrum_to_intensity(_per_channel(fft_2d_horizontal, padded), log_factor, shift=True),
        ),
        (
            "Vertical frequency domain",
            spectrum_to_intensity(_per_channel(fft_2d_vertical, padded), log_factor, shift=True),
        ),
    ]

    apply_style("image")
    fig, axes = plt.subplots(2, 2)
    for ax, (name, grid) in zip(axes.flat, panels):
        if grid.shape[2] == 1:
            grid = np.repeat(grid, 3, axis=2)
        show_grid(ax, grid, name)
    if title:
        fig.suptitle(title)
    return save_figure(fig, path)
