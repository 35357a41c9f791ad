# Exception types raised by the scanner and surfaced by the CLIs.

from __future__ import annotations

from pathlib import Path


class VulnscanError(Exception):
    """Base class for errors raised by vulnscan."""


class ScanIOError(VulnscanError):
    """A file or directory could not be read (or written)."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"{self.path}: {cause}")
