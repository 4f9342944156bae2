"""Readers and writers for the container formats handled by specpress."""

from .bitmap import read_bitmap, write_bitmap
from .errors import UnsupportedChannelsError, UnsupportedFormatError
from .wav import read_wav, write_wav

__all__ = [
    "read_wav",
    "write_wav",
    "read_bitmap",
    "write_bitmap",
    "UnsupportedFormatError",
    "UnsupportedChannelsError",
]
