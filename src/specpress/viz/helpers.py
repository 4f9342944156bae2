"""Utility helpers shared by the plotting modules."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np


def plot_series(
    ax: plt.Axes,
    x: Sequence[float] | np.ndarray,
    y: Sequence[float] | np.ndarray,
    label: str | None = None,
    **kwargs,
) -> None:
    """Plot ``y`` against ``x`` on ``ax`` with an optional label."""
    ax.plot(x, y, label=label, **kwargs)
    if label:
        ax.legend()


def show_grid(ax: plt.Axes, pixels: np.ndarray, title: str) -> None:
    """Draw an ``(height, width, 3)`` ``uint8`` grid under the active image style."""
    ax.imshow(pixels)
    ax.set_title(title)


def save_figure(fig: plt.Figure, path: str | Path) -> Path:
    """Save ``fig`` to ``path``, creating parent directories, and close it."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(p, bbox_inches="tight")
    plt.close(fig)
    return p
