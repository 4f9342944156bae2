"""Produce analysis figures for WAV and bitmap files."""

from __future__ import annotations

import logging
from pathlib import Path

from ..media import read_bitmap, read_wav
from ..media.errors import UnsupportedFormatError
from .plot_audio import plot_waveform_analysis
from .plot_image import plot_image_analysis

logger = logging.getLogger(__name__)

AUDIO_SUFFIXES = {".wav"}
IMAGE_SUFFIXES = {".bmp"}


def analyze_file(
    path: str | Path,
    output_dir: str | Path,
    *,
    log_factor: float = 0.2,
    figure_name: str = "analysis.png",
) -> Path:
    """Write the analysis figure for ``path`` into ``output_dir``.

    ``.wav`` files get time/frequency plots, ``.bmp`` files the 2x2 spectrum
    overview.  Returns the path of the written figure.
    """

    src = Path(path)
    out = Path(output_dir) / figure_name
    suffix = src.suffix.lower()
    if suffix in AUDIO_SUFFIXES:
        figure = plot_waveform_analysis(read_wav(src), out, title=src.name)
    elif suffix in IMAGE_SUFFIXES:
        figure = plot_image_analysis(read_bitmap(src), out, log_factor=log_factor, title=src.name)
    else:
        raise UnsupportedFormatError(f"cannot analyse {suffix or 'extensionless'} files", path=src)
    logger.info("wrote analysis of %s to %s", src, figure)
    return figure
