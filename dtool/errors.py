"""
Exception types for dtool.

Fatal errors stop processing of the current directory and are handled by
the CLI orchestrator. FingerprintError is per-file and never escapes the
worker pool.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union


class DtoolError(Exception):
    """Base class for all dtool errors."""

    def __init__(self, message: str, path: Union[str, Path, None] = None):
        super().__init__(message)
        self.path = str(path) if path is not None else None


class TargetNotFoundError(DtoolError):
    """Target path does not exist or is not a directory."""


class DirectoryScanError(DtoolError):
    """Directory exists but could not be listed."""


class CacheCorruptedError(DtoolError):
    """Sidecar cache exists but could not be read or parsed."""


class CacheWriteError(DtoolError):
    """Sidecar cache could not be written."""


class FingerprintError(DtoolError):
    """A single image could not be fingerprinted."""


__all__ = [
    'DtoolError',
    'TargetNotFoundError',
    'DirectoryScanError',
    'CacheCorruptedError',
    'CacheWriteError',
    'FingerprintError',
]
