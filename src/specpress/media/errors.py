"""Exceptions raised while decoding media containers."""

from __future__ import annotations

from pathlib import Path


class UnsupportedFormatError(ValueError):
    """Raised when a file uses an encoding specpress cannot handle."""

    def __init__(self, message: str, *, path: str | Path | None = None):
        self.path = None if path is None else str(path)
        super().__init__(f"{self.path}: {message}" if self.path else message)


class UnsupportedChannelsError(UnsupportedFormatError):
    """Raised for audio with more than one channel."""
