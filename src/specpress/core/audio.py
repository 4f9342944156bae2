"""Low-pass audio compression in the Fourier domain.

The waveform is zero-padded to a power of two, transformed, and every bin at
or above the cutoff frequency is dropped.  Only the number of dropped bins is
stored so the spectrum can be rebuilt with zeros before the inverse
transform.  Content above the cutoff is lost for good; the compression ratio
is governed solely by ``freq_cutoff``.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Sequence

import numpy as np

from ..media.wav import read_wav, write_wav
from ..types import SampleFormat, Waveform, default_sample_format, sample_dtype
from .fft import COMPLEX_DTYPE, fft, fft_inverse
from .records import AudioRecord, dump_record, load_record
from .sizing import round_up, truncate

logger = logging.getLogger(__name__)


def _cast_samples(values: np.ndarray, dtype: np.dtype) -> np.ndarray:
    if np.issubdtype(dtype, np.floating):
        return values.astype(dtype)
    info = np.iinfo(dtype)
    # float32 cannot represent the int32 bounds exactly
    wide = np.rint(values.astype(np.float64))
    return np.clip(wide, info.min, info.max).astype(dtype)


def highest_bin(freq_cutoff: float, frequency_resolution: float, spectrum_length: int) -> int:
    """Return the number of leading bins kept for ``freq_cutoff``.

    ``ceil(freq_cutoff / frequency_resolution)`` clamped to
    ``[0, spectrum_length]``.
    """

    index = math.ceil(freq_cutoff / frequency_resolution)
    return max(0, min(index, spectrum_length))


def compress(
    waveform: Sequence[float] | np.ndarray,
    sample_rate: int,
    bit_rate: int,
    freq_cutoff: float,
    *,
    sample_format: SampleFormat | None = None,
) -> AudioRecord:
    """Compress ``waveform`` by discarding every bin above ``freq_cutoff``.

    Parameters
    ----------
    waveform:
        Mono samples.  Any length is accepted; the samples are zero-padded to
        the next power of two before the transform.
    sample_rate:
        Sampling rate in Hz.
    bit_rate:
        Bits per sample of the source, stored so decompression can restore
        the sample type.
    freq_cutoff:
        Highest frequency in Hz to keep.  Lower values give smaller records.
    sample_format:
        PCM convention of the source; inferred from ``bit_rate`` when omitted
        (unsigned for 8-bit, signed otherwise).

    Returns
    -------
    AudioRecord
        Record holding the retained bins and the number of discarded ones.

    Raises
    ------
    ValueError
        If ``bit_rate`` and ``sample_format`` name no supported sample type.
    """

    if sample_format is None:
        sample_format = default_sample_format(bit_rate)
    sample_dtype(bit_rate, sample_format)
    if sample_rate <= 0:
        raise ValueError("sample_rate must be positive")
    samples = np.asarray(waveform, dtype=np.float32)
    if samples.ndim != 1:
        raise ValueError("waveform must be one-dimensional")

    padded, original = round_up(samples)
    spectrum = fft(padded)
    frequency_resolution = sample_rate / padded.size
    kept = highest_bin(freq_cutoff, frequency_resolution, spectrum.size)
    record = AudioRecord(
        sample_rate=int(sample_rate),
        original_sample_count=original,
        bit_rate=int(bit_rate),
        truncated_spectrum=spectrum[:kept],
        trailing_zero_count=spectrum.size - kept,
        sample_format=sample_format,
    )
    logger.debug(
        "compressed %d samples (padded to %d): kept %d bins below %.1f Hz",
        original,
        padded.size,
        kept,
        freq_cutoff,
    )
    return record


def compress_waveform(waveform: Waveform, freq_cutoff: float) -> AudioRecord:
    """Compress a :class:`~specpress.types.Waveform` using its own metadata."""

    return compress(
        waveform.samples,
        waveform.sample_rate,
        waveform.bit_rate,
        freq_cutoff,
        sample_format=waveform.sample_format,
    )


def decompress(record: AudioRecord) -> np.ndarray:
    """Rebuild the samples stored in ``record``.

    The retained bins are extended with ``trailing_zero_count`` zeros, inverse
    transformed and cut back to the original sample count.  The real part is
    rounded and clipped to the sample type given by the record's bit rate.

    Raises
    ------
    CorruptRecordError
        If the stored sizes are inconsistent.
    """

    record.validate()
    dtype = sample_dtype(record.bit_rate, record.sample_format)
    spectrum = np.concatenate(
        [record.truncated_spectrum, np.zeros(record.trailing_zero_count, dtype=COMPLEX_DTYPE)]
    )
    time_domain = truncate(fft_inverse(spectrum), record.original_sample_count)
    return _cast_samples(time_domain.real, dtype)


def decompress_waveform(record: AudioRecord) -> Waveform:
    """Like :func:`decompress` but keep the sample rate and format."""

    return Waveform(
        samples=decompress(record),
        sample_rate=record.sample_rate,
        bit_rate=record.bit_rate,
        sample_format=record.sample_format,
    )


def flatten_frequency_range(
    spectrum: np.ndarray,
    frequency_resolution: float,
    low_hz: float,
    high_hz: float,
) -> np.ndarray:
    """Return a copy of ``spectrum`` with a band of bins set to zero.

    Bins ``int(low_hz / res)`` through ``int(high_hz / res)`` inclusive are
    cleared.  Acts as a crude notch filter when applied before the inverse
    transform.
    """

    if high_hz < low_hz:
        raise ValueError("high_hz must not be below low_hz")
    out = np.array(spectrum, dtype=COMPLEX_DTYPE, copy=True)
    start = int(low_hz / frequency_resolution)
    end = int(high_hz / frequency_resolution)
    out[start : end + 1] = 0
    return out


def compress_file(wav_path: str | Path, output_path: str | Path, freq_cutoff: float) -> AudioRecord:
    """Compress a ``.wav`` file into a binary audio record at ``output_path``."""

    waveform = read_wav(wav_path)
    record = compress_waveform(waveform, freq_cutoff)
    dump_record(record, output_path)
    size = Path(output_path).stat().st_size
    logger.info(
        "compressed %s -> %s (%d bins kept, %d bytes)",
        wav_path,
        output_path,
        record.truncated_spectrum.size,
        size,
    )
    return record


def decompress_file(record_path: str | Path, wav_path: str | Path) -> Waveform:
    """Decompress a binary audio record into a ``.wav`` file."""

    record = load_record(record_path)
    if not isinstance(record, AudioRecord):
        raise ValueError(f"{record_path} does not contain an audio record")
    waveform = decompress_waveform(record)
    write_wav(wav_path, waveform)
    logger.info("decompressed %s -> %s (%d samples)", record_path, wav_path, waveform.sample_size)
    return waveform


__all__ = [
    "highest_bin",
    "compress",
    "compress_waveform",
    "decompress",
    "decompress_waveform",
    "flatten_frequency_range",
    "compress_file",
    "decompress_file",
]
