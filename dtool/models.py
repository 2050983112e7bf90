"""
Data models for dtool.

Contains dataclasses for run configuration, per-file fingerprint outcomes,
duplicate reports and per-directory run summaries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .config import IMAGE_EXTENSIONS, CACHE_FILENAME, DEFAULT_PARALLEL


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable form."""
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} TB"


@dataclass(frozen=True)
class RunConfig:
    """
    Options for one pipeline invocation.

    Built once by the caller and passed down to the worker pool and the
    duplicate detector.

    Attributes:
        max_parallel: Maximum fingerprint computations in flight (>= 1)
        verbose: Print fingerprint and path for every newly computed file
        visual: Open duplicates in an external viewer instead of printing
        prune: Drop cache entries whose file no longer exists
        show_progress: Show a tqdm progress bar while fingerprinting
        extensions: Recognized image extensions (lower-case, with dot)
        cache_filename: Name of the sidecar cache inside each directory
    """
    max_parallel: int = DEFAULT_PARALLEL
    verbose: bool = False
    visual: bool = False
    prune: bool = True
    show_progress: bool = False
    extensions: frozenset = frozenset(IMAGE_EXTENSIONS)
    cache_filename: str = CACHE_FILENAME

    def __post_init__(self):
        if not isinstance(self.max_parallel, int) or self.max_parallel < 1:
            raise ValueError(f"max_parallel must be an integer >= 1, got {self.max_parallel!r}")
        # Accept any iterable of extensions, normalised to lower-case
        object.__setattr__(
            self, 'extensions', frozenset(ext.lower() for ext in self.extensions)
        )


@dataclass
class FingerprintOutcome:
    """
    Result of fingerprinting one candidate.

    Exactly one of fingerprint/error is set.
    """
    path: str
    fingerprint: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True if the fingerprint was computed."""
        return self.error is None and self.fingerprint is not None


@dataclass
class PoolResult:
    """All outcomes collected by one worker pool run."""
    outcomes: list = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> list:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list:
        return [o for o in self.outcomes if not o.ok]


@dataclass(frozen=True)
class DuplicatePair:
    """
    One reported collision.

    Attributes:
        fingerprint: Shared fingerprint value
        previous: Path seen earlier for this fingerprint
        current: Path that collided with it
    """
    fingerprint: str
    previous: str
    current: str

    def to_dict(self) -> dict:
        return {
            'fingerprint': self.fingerprint,
            'previous': self.previous,
            'current': self.current,
        }


@dataclass
class DuplicateGroup:
    """
    Maximal set of paths sharing one fingerprint.

    Computed from the fingerprint table on demand and never persisted.
    """
    fingerprint: str
    paths: list = field(default_factory=list)

    @property
    def size(self) -> int:
        """Number of files in this group."""
        return len(self.paths)

    @property
    def redundant(self) -> int:
        """Files beyond the first, i.e. candidates for removal."""
        return max(0, len(self.paths) - 1)

    def to_dict(self) -> dict:
        return {
            'fingerprint': self.fingerprint,
            'paths': list(self.paths),
            'size': self.size,
        }


@dataclass
class RunSummary:
    """
    What happened while processing one directory.

    Attributes:
        directory: Directory that was processed
        cached: Entries loaded from the sidecar cache
        candidates: Files selected for fingerprinting this run
        fingerprinted: Files fingerprinted successfully this run
        failed: Outcomes of files that could not be fingerprinted
        pruned: Cache keys removed because their file is gone
        pairs: Reported duplicate pairs
        groups: Duplicate groups over the final table
        table: Final fingerprint table (as persisted)
        stats: Cache effectiveness for this run
    """
    directory: str
    cached: int = 0
    candidates: int = 0
    fingerprinted: int = 0
    failed: list = field(default_factory=list)
    pruned: list = field(default_factory=list)
    pairs: list = field(default_factory=list)
    groups: list = field(default_factory=list)
    table: dict = field(default_factory=dict)
    stats: Optional[Any] = None

    @property
    def error_count(self) -> int:
        return len(self.failed)
