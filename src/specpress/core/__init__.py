"""Fourier transforms, size normalisation and the audio/image codecs."""

from . import audio, image
from .fft import NotPowerOfTwoError, fft, fft_inverse, frequency_axis, frequency_bins, is_power_of_two
from .fft2d import (
    fft_2d,
    fft_2d_horizontal,
    fft_2d_horizontal_inverse,
    fft_2d_inverse,
    fft_2d_vertical,
    fft_2d_vertical_inverse,
    shift_quadrants,
)
from .image import CompressionLevelError
from .records import AudioRecord, CorruptRecordError, ImageRecord, dump_record, load_record
from .sizing import round_down, round_up, round_up_2d, truncate, truncate_2d

__all__ = [
    "audio",
    "image",
    "NotPowerOfTwoError",
    "fft",
    "fft_inverse",
    "frequency_bins",
    "frequency_axis",
    "is_power_of_two",
    "fft_2d",
    "fft_2d_inverse",
    "fft_2d_horizontal",
    "fft_2d_horizontal_inverse",
    "fft_2d_vertical",
    "fft_2d_vertical_inverse",
    "shift_quadrants",
    "CompressionLevelError",
    "AudioRecord",
    "ImageRecord",
    "CorruptRecordError",
    "dump_record",
    "load_record",
    "round_up",
    "round_down",
    "truncate",
    "round_up_2d",
    "truncate_2d",
]
