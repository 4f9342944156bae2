import numpy as np
import pytest

from specpress.core import audio
from specpress.core.records import AudioRecord, CorruptRecordError
from specpress.types import SampleFormat, Waveform


def _tone(n=1000, rate=8000, freqs=(200.0,), amplitude=8000.0):
    t = np.arange(n) / rate
    signal = sum(np.sin(2 * np.pi * f * t) for f in freqs)
    return np.rint(amplitude * signal).astype(np.int16)


def test_record_invariant_and_metadata():
    wave = _tone()
    record = audio.compress(wave, 8000, 16, 1000)
    assert record.original_sample_count == 1000
    assert record.padded_sample_count == 1024
    assert record.truncated_spectrum.size + record.trailing_zero_count == 1024
    # resolution 8000/1024 Hz -> ceil(1000 / 7.8125) = 128 bins
    assert record.truncated_spectrum.size == 128
    assert record.sample_rate == 8000
    assert record.bit_rate == 16
    assert record.sample_format is SampleFormat.SIGNED


def test_full_band_cutoff_is_lossless():
    wave = _tone(freqs=(200.0, 3100.0))
    record = audio.compress(wave, 8000, 16, 8000)
    assert record.trailing_zero_count == 0
    restored = audio.decompress(record)
    assert restored.dtype == np.int16
    np.testing.assert_array_equal(restored, wave)


def test_nyquist_cutoff_keeps_lower_half_of_bins():
    rng = np.random.default_rng(3)
    wave = rng.integers(-8000, 8000, size=1024).astype(np.int16)
    record = audio.compress(wave, 8000, 16, 4000)
    assert record.truncated_spectrum.size == 512
    assert record.trailing_zero_count == 512
    assert not np.array_equal(audio.decompress(record), wave)


def test_zero_cutoff_is_silent():
    wave = _tone()
    record = audio.compress(wave, 8000, 16, 0)
    assert record.truncated_spectrum.size == 0
    restored = audio.decompress(record)
    assert restored.shape == wave.shape
    assert np.all(restored == 0)


def test_negative_and_huge_cutoffs_are_clamped():
    wave = _tone(n=64)
    assert audio.compress(wave, 8000, 16, -5).truncated_spectrum.size == 0
    assert audio.compress(wave, 8000, 16, 1e9).trailing_zero_count == 0


def test_cutoff_discards_high_frequencies():
    n, rate = 4096, 8000
    mixed = _tone(n=n, rate=rate, freqs=(250.0, 3000.0))
    record = audio.compress(mixed, rate, 16, 1000)
    restored = audio.decompress(record).astype(float)
    high = np.abs(np.fft.rfft(restored))[np.fft.rfftfreq(n, 1 / rate) > 1500]
    assert high.max() < 0.05 * np.abs(np.fft.rfft(mixed.astype(float))).max()
    assert restored.shape == mixed.shape


def test_highest_bin_clamps():
    assert audio.highest_bin(1000, 7.8125, 1024) == 128
    assert audio.highest_bin(1000.5, 7.8125, 1024) == 129
    assert audio.highest_bin(1e6, 7.8125, 1024) == 1024
    assert audio.highest_bin(-1, 7.8125, 1024) == 0


def test_eight_bit_defaults_to_unsigned():
    wave = np.array([128, 130, 140, 120, 100, 128, 128, 129], dtype=np.uint8)
    record = audio.compress(wave, 8000, 8, 8000)
    assert record.sample_format is SampleFormat.UNSIGNED
    restored = audio.decompress(record)
    assert restored.dtype == np.uint8
    np.testing.assert_array_equal(restored, wave)


def test_decompress_clips_to_sample_range():
    record = AudioRecord(
        sample_rate=8000,
        original_sample_count=4,
        bit_rate=16,
        truncated_spectrum=np.array([4 * 40000.0]),
        trailing_zero_count=3,
    )
    np.testing.assert_array_equal(audio.decompress(record), [32767] * 4)


def test_decompress_clips_32_bit_overshoot():
    record = AudioRecord(
        sample_rate=8000,
        original_sample_count=4,
        bit_rate=32,
        truncated_spectrum=np.array([4 * 3.0e9]),
        trailing_zero_count=3,
    )
    restored = audio.decompress(record)
    assert restored.dtype == np.int32
    np.testing.assert_array_equal(restored, [2147483647] * 4)

    record.truncated_spectrum = -record.truncated_spectrum
    np.testing.assert_array_equal(audio.decompress(record), [-2147483648] * 4)


@pytest.mark.parametrize(
    "bit_rate, fmt",
    [(24, SampleFormat.SIGNED), (8, SampleFormat.SIGNED), (16, SampleFormat.FLOAT), (70000, None)],
)
def test_compress_rejects_unsupported_sample_type(bit_rate, fmt):
    with pytest.raises(ValueError, match="unsupported sample width"):
        audio.compress(_tone(), 8000, bit_rate, 1000, sample_format=fmt)


def test_record_with_unsupported_sample_type_is_corrupt():
    record = AudioRecord(
        sample_rate=8000,
        original_sample_count=4,
        bit_rate=24,
        truncated_spectrum=np.zeros(4),
        trailing_zero_count=0,
    )
    with pytest.raises(CorruptRecordError, match="24-bit"):
        audio.decompress(record)


def test_waveform_helpers_keep_metadata():
    wave = Waveform(samples=np.linspace(-0.5, 0.5, 100, dtype=np.float32), sample_rate=44100, bit_rate=32,
                    sample_format=SampleFormat.FLOAT)
    record = audio.compress_waveform(wave, 44100)
    restored = audio.decompress_waveform(record)
    assert restored.sample_rate == 44100
    assert restored.sample_format is SampleFormat.FLOAT
    assert restored.samples.dtype == np.float32
    np.testing.assert_allclose(restored.samples, wave.samples, atol=1e-5)


@pytest.mark.parametrize(
    "spectrum_len, zeros, original",
    [(3, 2, 4), (4, 4, 9), (4, 0, 0)],
)
def test_corrupt_records_are_rejected(spectrum_len, zeros, original):
    record = AudioRecord(
        sample_rate=8000,
        original_sample_count=original,
        bit_rate=16,
        truncated_spectrum=np.zeros(spectrum_len),
        trailing_zero_count=zeros,
    )
    with pytest.raises(CorruptRecordError):
        audio.decompress(record)


def test_flatten_frequency_range():
    spectrum = np.ones(16, dtype=np.complex64)
    flattened = audio.flatten_frequency_range(spectrum, 10.0, 20.0, 45.0)
    np.testing.assert_array_equal(np.nonzero(flattened == 0)[0], [2, 3, 4])
    assert np.all(spectrum == 1)
    with pytest.raises(ValueError):
        audio.flatten_frequency_range(spectrum, 10.0, 50.0, 20.0)
