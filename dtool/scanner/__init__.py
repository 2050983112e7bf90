"""
Scanner package for dtool.

Provides fingerprinting, candidate selection, the bounded worker pool and
exact-match duplicate detection.

Public API:
- fingerprint: Perceptual dHash of one image
- calculate_file_hash: Checksum of a file (md5 by default)
- image_resolution: Width and height of an image
- scan_directory: Files of a directory that still need a fingerprint
- WorkerPool / fingerprint_files: Fingerprint candidates in parallel
- DuplicateDetector: Prune and report duplicates
- find_duplicate_pairs / group_duplicates: Pure detection helpers
- has_heif_support: Check if HEIC/HEIF support is available
"""

from __future__ import annotations

from .file_discovery import scan_directory
from .hashing import (
    fingerprint,
    calculate_file_hash,
    image_resolution,
    set_max_image_pixels,
)
from .parallel import WorkerPool, fingerprint_files
from .deduplication import (
    DuplicateDetector,
    find_duplicate_pairs,
    group_duplicates,
)

from .dependencies import HAS_HEIF_SUPPORT


def has_heif_support() -> bool:
    """Check if HEIC/HEIF support is available."""
    return HAS_HEIF_SUPPORT


__all__ = [
    # File discovery
    'scan_directory',
    # Hashing functions
    'fingerprint',
    'calculate_file_hash',
    'image_resolution',
    'set_max_image_pixels',
    # Worker pool
    'WorkerPool',
    'fingerprint_files',
    # Duplicate detection
    'DuplicateDetector',
    'find_duplicate_pairs',
    'group_duplicates',
    # Feature detection
    'has_heif_support',
]
