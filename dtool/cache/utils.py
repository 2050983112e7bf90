"""
Shared utilities for the sidecar cache.

Provides:
- CacheStats: Statistics dataclass for tracking cache effectiveness
- write_json_atomic: Write-then-rename helper used by CacheStore.persist
"""

from __future__ import annotations

import json
import os
import stat
import tempfile
from dataclasses import dataclass
from pathlib import Path


@dataclass
class CacheStats:
    """Statistics about cache usage for one directory."""
    cached_entries: int = 0
    new_entries: int = 0
    pruned_entries: int = 0

    @property
    def total_files(self) -> int:
        return self.cached_entries + self.new_entries

    @property
    def hit_rate(self) -> float:
        """Return cache hit rate as percentage."""
        if self.total_files == 0:
            return 0.0
        return (self.cached_entries / self.total_files) * 100


def _file_mode(path: Path) -> int:
    """Permission bits for a rewritten file: the old file's, else 0666 less umask."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_json_atomic(path: Path, data: dict) -> None:
    """
    Serialize data to path without exposing a partially written file.

    The JSON is written to a temporary file in the same directory and moved
    over the target with os.replace. On any failure the temporary file is
    removed and the original exception is re-raised.

    Args:
        path: Destination file
        data: JSON-serializable mapping
    """
    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix='.tmp', dir=str(path.parent)
    )
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, sort_keys=True)
            f.write('\n')
            f.flush()
            os.fsync(f.fileno())
        # mkstemp creates 0600
        os.chmod(tmp_name, _file_mode(path))
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


__all__ = ['CacheStats', 'write_json_atomic']
