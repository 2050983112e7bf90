"""
Deduplication module for the scanner package.

Finds files whose fingerprints are identical. Paths are always visited in
sorted order so that groups of three or more files produce the same pairs
on every run.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Optional

from ..cache import CacheStore
from ..models import RunConfig, DuplicatePair, DuplicateGroup


logger = logging.getLogger(__name__)


def find_duplicate_pairs(table: dict[str, str]) -> list[DuplicatePair]:
    """
    Report collisions in a fingerprint table.

    Each path is compared against the most recently seen path with the same
    fingerprint, so a group a, b, c yields (a, b) and (b, c).

    Args:
        table: Mapping of path -> fingerprint

    Returns:
        DuplicatePair objects in path order
    """
    last_seen: dict[str, str] = {}
    pairs = []

    for path in sorted(table):
        value = table[path]
        previous = last_seen.get(value)
        if previous is not None:
            pairs.append(DuplicatePair(fingerprint=value, previous=previous, current=path))
        last_seen[value] = path

    return pairs


def group_duplicates(table: dict[str, str]) -> list[DuplicateGroup]:
    """
    Collect maximal groups of paths sharing one fingerprint.

    Args:
        table: Mapping of path -> fingerprint

    Returns:
        Groups of two or more paths, ordered by their first path
    """
    by_value: dict[str, list[str]] = defaultdict(list)
    for path in sorted(table):
        by_value[table[path]].append(path)

    groups = [
        DuplicateGroup(fingerprint=value, paths=paths)
        for value, paths in by_value.items()
        if len(paths) > 1
    ]
    groups.sort(key=lambda g: g.paths[0])
    return groups


class DuplicateDetector:
    """
    Prunes a fingerprint table and reports exact fingerprint collisions.
    """

    def __init__(self, config: RunConfig, store: Optional[CacheStore] = None):
        """
        Args:
            config: Run configuration (prune flag)
            store: Cache store used to check which entries still exist
        """
        self.config = config
        self.store = store

    def detect(self, table: dict[str, str]) -> tuple[dict[str, str], list[DuplicatePair], list[str]]:
        """
        Prune (when enabled) and find duplicate pairs.

        Args:
            table: Fingerprint table (not modified)

        Returns:
            Tuple of (table after pruning, duplicate pairs, pruned keys)
        """
        pruned: list[str] = []
        if self.config.prune and self.store is not None:
            table, pruned = self.store.prune(table)
            for path in pruned:
                logger.debug(f"Dropped missing file from cache: {path}")

        pairs = find_duplicate_pairs(table)
        logger.debug(f"Found {len(pairs):,} duplicate pairs among {len(table):,} files")
        return table, pairs, pruned


__all__ = [
    'DuplicateDetector',
    'find_duplicate_pairs',
    'group_duplicates',
]
