"""
Visual comparison of duplicate pairs.

Launches an external image viewer on both files and prints size,
resolution and checksum for each. The viewer command comes from
DTOOL_VIEWER (or the "viewer" key of the user config file).
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Optional, TextIO

from ..config import IDENTICAL_SENTINEL
from ..models import DuplicatePair, format_size
from ..scanner import calculate_file_hash, image_resolution


logger = logging.getLogger(__name__)


def describe_file(path: str | Path) -> dict:
    """Collect size, resolution and md5 of one file."""
    try:
        size = format_size(os.path.getsize(path))
    except OSError:
        size = '?'

    resolution = image_resolution(path)
    return {
        'path': str(path),
        'size': size,
        'resolution': f"{resolution[0]}x{resolution[1]}" if resolution else '?',
        'md5': calculate_file_hash(path, 'md5') or '?',
    }


def format_pair_details(first: str | Path, second: str | Path) -> list[str]:
    """
    Build the metadata table printed for a pair in visual mode.

    When both files have the same md5 the checksum column shows the
    identical sentinel instead of the digest.

    Returns:
        Lines of the table, without trailing newlines
    """
    rows = [describe_file(first), describe_file(second)]
    if rows[0]['md5'] != '?' and rows[0]['md5'] == rows[1]['md5']:
        for row in rows:
            row['md5'] = IDENTICAL_SENTINEL

    lines = [f"  {'size':>10}  {'resolution':>11}  {'md5':<32}  path"]
    for row in rows:
        lines.append(
            f"  {row['size']:>10}  {row['resolution']:>11}  {row['md5']:<32}  {row['path']}"
        )
    return lines


class ComparisonViewer:
    """
    Shows duplicate pairs side by side in an external program.

    The command is split with shlex and both file paths are appended.
    """

    def __init__(self, command: Optional[str], stream: Optional[TextIO] = None):
        self.argv = shlex.split(command) if command else []
        self._stream = stream
        self._warned = False

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def launch(self, first: str | Path, second: str | Path) -> bool:
        """
        Run the viewer and wait for it to exit.

        Returns:
            True if the viewer ran, False if none is configured or it
            could not be started
        """
        if not self.argv:
            if not self._warned:
                logger.warning("No viewer configured; set DTOOL_VIEWER to enable visual mode")
                self._warned = True
            return False

        try:
            completed = subprocess.run([*self.argv, str(first), str(second)], check=False)
        except OSError as e:
            logger.warning(f"Could not start viewer {self.argv[0]!r}: {e}")
            return False

        if completed.returncode != 0:
            logger.debug(f"Viewer exited with status {completed.returncode}")
        return True

    def show(self, pair: DuplicatePair, directory: str | Path) -> None:
        """Open a pair in the viewer and print its details."""
        directory = Path(directory)
        first = directory / pair.previous
        second = directory / pair.current

        self.launch(first, second)

        print(pair.fingerprint, file=self.stream)
        for line in format_pair_details(first, second):
            print(line, file=self.stream)


__all__ = ['ComparisonViewer', 'describe_file', 'format_pair_details']
