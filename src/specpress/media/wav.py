"""Mono WAV reading and writing backed by :mod:`scipy.io.wavfile`.

SciPy returns the samples in their native type, which determines the bit
rate and sample format recorded on the :class:`~specpress.types.Waveform`:

========  ========  ========
dtype     bit_rate  format
========  ========  ========
uint8     8         unsigned
int16     16        signed
int32     32        signed
float32   32        float
float64   64        float
========  ========  ========

24-bit files are widened by SciPy to left-justified ``int32`` samples and are
therefore written back as 32-bit PCM.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
from scipy.io import wavfile

from ..types import SampleFormat, Waveform, sample_dtype
from .errors import UnsupportedChannelsError, UnsupportedFormatError

_FORMATS = {
    np.dtype(np.uint8): (8, SampleFormat.UNSIGNED),
    np.dtype(np.int16): (16, SampleFormat.SIGNED),
    np.dtype(np.int32): (32, SampleFormat.SIGNED),
    np.dtype(np.float32): (32, SampleFormat.FLOAT),
    np.dtype(np.float64): (64, SampleFormat.FLOAT),
}


def read_wav(path: str | Path) -> Waveform:
    """Load a mono WAV file.

    Raises
    ------
    UnsupportedChannelsError
        If the file has more than one channel.
    UnsupportedFormatError
        If the file is not a WAV file or uses an unsupported sample type.
    """

    try:
        sample_rate, data = wavfile.read(path)
    except ValueError as exc:
        raise UnsupportedFormatError(str(exc), path=path) from exc

    if data.ndim == 2:
        if data.shape[1] != 1:
            raise UnsupportedChannelsError(
                f"{data.shape[1]} channels not supported - convert to mono", path=path
            )
        data = data[:, 0]
    if data.size == 0:
        raise UnsupportedFormatError("file contains no samples", path=path)

    fmt = _FORMATS.get(data.dtype)
    if fmt is None:
        raise UnsupportedFormatError(f"unsupported sample type {data.dtype}", path=path)
    bit_rate, sample_format = fmt
    return Waveform(samples=data, sample_rate=int(sample_rate), bit_rate=bit_rate, sample_format=sample_format)


def write_wav(path: str | Path, waveform: Waveform) -> Path:
    """Write ``waveform`` as a mono WAV file and return the path."""

    dtype = sample_dtype(waveform.bit_rate, waveform.sample_format)
    p = Path(path)
    wavfile.write(p, waveform.sample_rate, np.asarray(waveform.samples).astype(dtype, copy=False))
    return p


__all__ = ["read_wav", "write_wav"]
