"""Helpers for reporting domain errors through Typer."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

import typer

from .core.image import CompressionLevelError
from .core.records import CorruptRecordError
from .media.errors import UnsupportedFormatError

#: Errors caused by the user's input rather than a bug.
USER_ERRORS = (UnsupportedFormatError, CorruptRecordError, CompressionLevelError)


@contextmanager
def reported_as_bad_parameter(param_hint: Optional[str] = None) -> Iterator[None]:
    """Convert :data:`USER_ERRORS` raised in the block to :class:`typer.BadParameter`.

    Typer prints ``BadParameter`` as a usage error with exit code 2 instead of
    a traceback.  Every other exception propagates unchanged.
    """

    try:
        yield
    except USER_ERRORS as exc:
        raise typer.BadParameter(str(exc), param_hint=param_hint) from exc
