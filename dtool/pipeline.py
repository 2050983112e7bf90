"""
Fingerprinting pipeline for one directory.

Phases run strictly in sequence:
1. Load the sidecar cache
2. Select files without a cached fingerprint
3. Fingerprint them in parallel and merge successes
4. Persist the cache
5. Prune missing files and detect duplicates
6. Persist again if pruning removed anything

Fatal errors (see dtool.errors) propagate to the caller; per-file failures
are reported by the worker pool and returned in the summary.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, TextIO

from .cache import CacheStore, CacheStats
from .errors import TargetNotFoundError
from .models import RunConfig, RunSummary
from .scanner import (
    scan_directory,
    WorkerPool,
    DuplicateDetector,
    group_duplicates,
)


logger = logging.getLogger(__name__)


def validate_target(directory: str | Path) -> Path:
    """
    Check that the target exists and is a directory.

    Raises:
        TargetNotFoundError: The path is missing or not a directory
    """
    path = Path(directory)
    if not path.exists():
        raise TargetNotFoundError(f"Directory not found: {path}", path)
    if not path.is_dir():
        raise TargetNotFoundError(f"Path is not a directory: {path}", path)
    return path


def process_directory(
    directory: str | Path,
    config: Optional[RunConfig] = None,
    fingerprint_func: Optional[Callable[[str], str]] = None,
    stdout: Optional[TextIO] = None,
) -> RunSummary:
    """
    Run the full pipeline for one directory.

    Args:
        directory: Directory holding the images
        config: Run configuration (default: RunConfig())
        fingerprint_func: Optional replacement for the dHash fingerprint
        stdout: Stream for verbose fingerprint lines

    Returns:
        RunSummary describing the run

    Raises:
        TargetNotFoundError, DirectoryScanError, CacheCorruptedError,
        CacheWriteError: The directory cannot be processed
    """
    config = config or RunConfig()
    path = validate_target(directory)
    summary = RunSummary(directory=str(path))

    store = CacheStore(path, filename=config.cache_filename)
    table = store.load()
    summary.cached = len(table)

    candidates = scan_directory(path, table, config.extensions)
    summary.candidates = len(candidates)
    logger.info(
        f"{path}: {summary.cached:,} cached, {summary.candidates:,} to fingerprint"
    )

    pool = WorkerPool(config, fingerprint_func=fingerprint_func, stdout=stdout)
    result = pool.run(path, candidates, table)
    summary.fingerprinted = len(result.succeeded)
    summary.failed = result.failed

    store.persist(table)

    detector = DuplicateDetector(config, store)
    table, summary.pairs, summary.pruned = detector.detect(table)
    if summary.pruned:
        store.persist(table)

    summary.table = table
    summary.groups = group_duplicates(table)
    summary.stats = CacheStats(
        cached_entries=summary.cached,
        new_entries=summary.fingerprinted,
        pruned_entries=len(summary.pruned),
    )

    if summary.failed:
        logger.warning(f"Could not fingerprint {summary.error_count:,} files in {path}")
    if summary.pruned:
        logger.info(f"Removed {len(summary.pruned):,} missing files from cache")
    logger.debug(f"Cache hit rate {summary.stats.hit_rate:.1f}%")
    logger.info(
        f"{path}: {len(summary.groups):,} duplicate groups, "
        f"{len(summary.pairs):,} pairs"
    )
    return summary


__all__ = ['process_directory', 'validate_target']
