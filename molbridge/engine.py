"""Control of the RDKit engine's own log output."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from rdkit import RDLogger


@contextmanager
def quiet(levels: str = "rdApp.*") -> Iterator[None]:
    """Silence RDKit log channels for the duration of the block.

    RDKit writes parse and sanitization complaints straight to stderr;
    failures still surface as exceptions from molbridge calls.

    Args:
        levels: RDKit log channel pattern, e.g. ``"rdApp.*"`` or ``"rdApp.warning"``.

    Example:
        >>> with quiet():
        ...     parse("C1CC")
        Traceback (most recent call last):
        ...
        molbridge.exceptions.ParseError: ...
    """
    RDLogger.DisableLog(levels)
    try:
        yield
    finally:
        RDLogger.EnableLog(levels)
