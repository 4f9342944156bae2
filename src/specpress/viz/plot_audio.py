"""Time and frequency domain plots of a waveform."""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from ..core.fft import fft, frequency_axis, frequency_bins
from ..core.sizing import round_up
from ..types import Waveform
from .helpers import plot_series, save_figure
from .styles import apply_style


def waveform_spectrum(waveform: Waveform) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(frequencies_hz, amplitudes)`` of the one-sided spectrum.

    The samples are zero-padded to a power of two before the transform, so the
    frequency resolution is that of the padded length.
    """

    padded, _ = round_up(np.asarray(waveform.samples, dtype=np.float32))
    bins = frequency_bins(fft(padded))
    return frequency_axis(padded.size, waveform.sample_rate), bins


def plot_waveform_analysis(waveform: Waveform, path: str | Path, title: str | None = None) -> Path:
    """Save a two-panel figure of ``waveform`` and its spectrum to ``path``."""

    apply_style("waveform")
    fig, (ax_time, ax_freq) = plt.subplots(2, 1)

    times = np.arange(waveform.sample_size) / waveform.sample_rate
    plot_series(ax_time, times, waveform.samples, color="tab:blue")
    ax_time.set_xlabel("Time (seconds)")
    ax_time.set_ylabel("Amplitude")

    freqs, bins = waveform_spectrum(waveform)
    plot_series(ax_freq, freqs, bins, color="indianred")
    ax_freq.set_xlabel("Frequency (Hz)")
    ax_freq.set_ylabel("Amplitude")

    if title:
        fig.suptitle(title)
    return save_figure(fig, path)
