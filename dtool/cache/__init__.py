"""
Sidecar cache for dtool.

Persists the path -> fingerprint table of each processed directory so that
re-runs only fingerprint files that were added since the last run.

The cache is a single JSON object stored as .dtool.json inside the
directory it describes.

Public API:
- CacheStore: Load/persist/prune the table of one directory
- CacheStats: Statistics dataclass
"""

from __future__ import annotations

from .store import CacheStore
from .utils import CacheStats, write_json_atomic


__all__ = [
    'CacheStore',
    'CacheStats',
    'write_json_atomic',
]
