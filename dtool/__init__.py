"""
dtool
=====
Finds duplicate images by perceptual fingerprint.

Features:
- dHash fingerprints computed with bounded parallelism
- Per-directory JSON sidecar cache, so re-runs only hash new files
- Automatic removal of cache entries for deleted files
- Deterministic duplicate pair reporting
- Optional visual comparison through an external viewer

Author: Tuomas Starck
"""

__version__ = "1.0.0"
__author__ = "Tuomas Starck"

from .models import (
    RunConfig,
    FingerprintOutcome,
    PoolResult,
    DuplicatePair,
    DuplicateGroup,
    RunSummary,
)
from .config import IMAGE_EXTENSIONS, CACHE_FILENAME
from .errors import (
    DtoolError,
    TargetNotFoundError,
    DirectoryScanError,
    CacheCorruptedError,
    CacheWriteError,
    FingerprintError,
)
from .cache import CacheStore, CacheStats
from .scanner import (
    fingerprint,
    scan_directory,
    WorkerPool,
    DuplicateDetector,
    find_duplicate_pairs,
    group_duplicates,
)
from .pipeline import process_directory

__all__ = [
    "RunConfig",
    "FingerprintOutcome",
    "PoolResult",
    "DuplicatePair",
    "DuplicateGroup",
    "RunSummary",
    "IMAGE_EXTENSIONS",
    "CACHE_FILENAME",
    "DtoolError",
    "TargetNotFoundError",
    "DirectoryScanError",
    "CacheCorruptedError",
    "CacheWriteError",
    "FingerprintError",
    "CacheStore",
    "CacheStats",
    "fingerprint",
    "scan_directory",
    "WorkerPool",
    "DuplicateDetector",
    "find_duplicate_pairs",
    "group_duplicates",
    "process_directory",
]
