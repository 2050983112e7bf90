"""
JSON sidecar cache for fingerprint tables.

One CacheStore owns the cache file of one directory. Keys are paths
relative to that directory, values are fingerprint strings.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Union

from ..config import CACHE_FILENAME
from ..errors import CacheCorruptedError, CacheWriteError
from .utils import write_json_atomic


logger = logging.getLogger(__name__)


class CacheStore:
    """
    Loads, persists and prunes the fingerprint table of one directory.

    Usage:
        store = CacheStore('/photos')
        table = store.load()
        table['new.jpg'] = fingerprint('/photos/new.jpg')
        store.persist(table)

    Concurrent invocations against the same directory are not coordinated;
    the last writer wins.
    """

    def __init__(self, directory: Union[str, Path], filename: str = CACHE_FILENAME):
        """
        Args:
            directory: Directory whose images the table describes
            filename: Sidecar file name inside that directory
        """
        self.directory = Path(directory)
        self.filename = filename

    @property
    def path(self) -> Path:
        """Location of the sidecar cache file."""
        return self.directory / self.filename

    @property
    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> dict[str, str]:
        """
        Read the fingerprint table from disk.

        Returns:
            The stored table, or an empty dict if there is no cache file yet

        Raises:
            CacheCorruptedError: The file exists but is unreadable, is not
                valid JSON, or is not an object mapping strings to strings
        """
        if not self.path.exists():
            logger.debug(f"No cache at {self.path}, starting empty")
            return {}

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise CacheCorruptedError(f"Cache file is not valid JSON: {self.path}: {e}", self.path) from e
        except (OSError, UnicodeDecodeError) as e:
            raise CacheCorruptedError(f"Cannot read cache file {self.path}: {e}", self.path) from e

        if not isinstance(data, dict):
            raise CacheCorruptedError(
                f"Cache file {self.path} must contain a JSON object, got {type(data).__name__}",
                self.path,
            )

        for key, value in data.items():
            if not isinstance(value, str):
                raise CacheCorruptedError(
                    f"Cache file {self.path} has a non-string fingerprint for {key!r}",
                    self.path,
                )

        logger.debug(f"Loaded {len(data):,} cached fingerprints from {self.path}")
        return data

    def persist(self, table: dict[str, str]) -> None:
        """
        Replace the cache file with the full table.

        Raises:
            CacheWriteError: The file could not be written; any previous
                cache content is left untouched
        """
        try:
            write_json_atomic(self.path, dict(table))
        except (OSError, TypeError, ValueError) as e:
            raise CacheWriteError(f"Cannot write cache file {self.path}: {e}", self.path) from e
        logger.debug(f"Persisted {len(table):,} fingerprints to {self.path}")

    def prune(self, table: dict[str, str]) -> tuple[dict[str, str], list[str]]:
        """
        Drop entries whose file is no longer a regular file.

        Args:
            table: Fingerprint table (not modified)

        Returns:
            Tuple of (pruned table, sorted list of removed keys). An empty
            list means nothing changed and no re-persist is needed.
        """
        kept: dict[str, str] = {}
        removed: list[str] = []

        for key, value in table.items():
            if os.path.isfile(self.directory / key):
                kept[key] = value
            else:
                removed.append(key)

        if removed:
            logger.debug(f"Pruned {len(removed):,} missing files from {self.path}")

        return kept, sorted(removed)


__all__ = ['CacheStore']
