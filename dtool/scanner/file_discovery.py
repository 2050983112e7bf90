"""
File discovery module for the scanner package.

Selects the files of a directory that still need a fingerprint.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Optional

from ..config import IMAGE_EXTENSIONS, HEIF_EXTENSIONS
from ..errors import DirectoryScanError
from .dependencies import HAS_HEIF_SUPPORT


def scan_directory(
    directory: str | Path,
    table: dict[str, str],
    extensions: Optional[Iterable[str]] = None,
) -> list[str]:
    """
    List image files in a directory that are not in the fingerprint table.

    Only immediate entries are considered (no recursion).

    Args:
        directory: Directory to list
        table: Current fingerprint table; its keys are skipped
        extensions: Recognized extensions (default: IMAGE_EXTENSIONS)

    Returns:
        Names relative to directory, sorted lexicographically

    Raises:
        DirectoryScanError: The directory could not be listed

    Notes:
        - Extension matching is case-insensitive
        - HEIC/HEIF files are skipped if pillow-heif is not installed
        - Symlinks to regular files are included
    """
    if extensions is None:
        extensions = IMAGE_EXTENSIONS
    extensions_to_scan = {ext.lower() for ext in extensions}
    if not HAS_HEIF_SUPPORT:
        extensions_to_scan -= HEIF_EXTENSIONS

    candidates = []
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                if entry.name in table:
                    continue
                if os.path.splitext(entry.name)[1].lower() not in extensions_to_scan:
                    continue
                if entry.is_file():
                    candidates.append(entry.name)
    except OSError as e:
        raise DirectoryScanError(f"Cannot list directory {directory}: {e}", directory) from e

    return sorted(candidates)


__all__ = ['scan_directory']
