"""
Error kinds raised at the I/O boundaries.

- LoadError: source image unreadable or undecodable; ends the run
- ExportError: one prototype artifact could not be written; non-fatal
- ReportError: the report could not be written; non-fatal
"""

from pathlib import Path
from typing import Optional

LOAD_NOT_FOUND = "not_found"
LOAD_PERMISSION = "permission"
LOAD_MALFORMED = "malformed"


class TextureError(Exception):
    """Base class for texture parsing errors."""


class LoadError(TextureError):
    """Source image could not be opened or decoded."""

    def __init__(self, path: Path, kind: str, message: str):
        super().__init__(message)
        self.path = Path(path)
        self.kind = kind


class ExportError(TextureError):
    """A prototype tile could not be persisted."""

    def __init__(self, path: Path, message: str, fingerprint: Optional[int] = None):
        super().__init__(message)
        self.path = Path(path)
        self.fingerprint = fingerprint


class ReportError(TextureError):
    """The parse report could not be written."""

    def __init__(self, path: Path, message: str):
        super().__init__(message)
        self.path = Path(path)
