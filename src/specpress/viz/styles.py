"""Matplotlib styles for the waveform and spectrum figures."""

from __future__ import annotations

import matplotlib.pyplot as plt

# Time/frequency line plots of a waveform.
WAVEFORM_STYLE = {
    "figure.figsize": (12, 7),
    "axes.grid": True,
    "grid.linestyle": "--",
    "grid.alpha": 0.5,
    "axes.titlesize": "large",
    "axes.labelsize": "medium",
    "axes.xmargin": 0.0,
    "lines.linewidth": 0.8,
}

# Pixel and spectrum panels: square, no grid or ticks, one coefficient per
# pixel without smoothing.
IMAGE_STYLE = {
    "figure.figsize": (12, 12),
    "axes.grid": False,
    "axes.titlesize": "medium",
    "xtick.bottom": False,
    "xtick.labelbottom": False,
    "ytick.left": False,
    "ytick.labelleft": False,
    "image.interpolation": "nearest",
    "image.origin": "upper",
    "figure.facecolor": "white",
}

STYLES = {"waveform": WAVEFORM_STYLE, "image": IMAGE_STYLE}


def apply_style(kind: str = "waveform", extra: dict | None = None) -> None:
    """Apply the rcParams for ``kind`` (``"waveform"`` or ``"image"``).

    Parameters
    ----------
    kind:
        Which figure family is about to be drawn.
    extra:
        Optional dictionary of rcParams that override the chosen style.
    """
    try:
        style = dict(STYLES[kind])
    except KeyError:
        raise ValueError(f"unknown plot style: {kind}") from None
    if extra:
        style.update(extra)
    plt.rcParams.update(style)
