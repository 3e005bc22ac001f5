"""Exceptions raised while loading shipped definitions."""
from __future__ import annotations

from pathlib import Path


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """A definition file could not be read or parsed; ``path`` names the file."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class DataValidationError(DataError):
    """A definition has the wrong shape, type or value."""


class DataReferenceError(DataError):
    """A definition names a class, element or id that does not exist."""
