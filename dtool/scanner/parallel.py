"""
Parallel processing module for the scanner package.

Provides the bounded worker pool that fingerprints candidate files and
merges the results into the fingerprint table.
"""

from __future__ import annotations

import logging
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Optional, Callable, Any, TextIO

from ..models import RunConfig, FingerprintOutcome, PoolResult
from .dependencies import tqdm
from .hashing import fingerprint


logger = logging.getLogger(__name__)


class WorkerPool:
    """
    Fingerprints a candidate set with bounded parallelism.

    Workers only compute; the thread calling run() is the single consumer
    that collects outcomes and writes to the table.

    Usage:
        pool = WorkerPool(RunConfig(max_parallel=4))
        result = pool.run('/photos', candidates, table)
    """

    def __init__(
        self,
        config: RunConfig,
        fingerprint_func: Optional[Callable[[str], str]] = None,
        stdout: Optional[TextIO] = None,
    ):
        """
        Args:
            config: Run configuration (max_parallel, verbose, show_progress)
            fingerprint_func: Function path -> fingerprint, raising on failure
            stdout: Stream for verbose lines (default: sys.stdout)
        """
        self.config = config
        self.fingerprint_func = fingerprint_func or fingerprint
        self._stdout = stdout

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    def _compute(self, directory: Path, name: str) -> FingerprintOutcome:
        """Worker body. Never raises; failures become outcomes."""
        try:
            value = self.fingerprint_func(str(directory / name))
        except Exception as e:
            return FingerprintOutcome(path=name, error=str(e) or type(e).__name__)
        if not value:
            return FingerprintOutcome(path=name, error="Empty fingerprint")
        return FingerprintOutcome(path=name, fingerprint=str(value))

    def run(
        self,
        directory: str | Path,
        candidates: list[str],
        table: dict[str, str],
    ) -> PoolResult:
        """
        Fingerprint every candidate and merge successes into table.

        Args:
            directory: Directory the candidate names are relative to
            candidates: Relative paths to fingerprint
            table: Fingerprint table, updated in place with successes only

        Returns:
            PoolResult holding exactly one outcome per candidate
        """
        result = PoolResult()
        if not candidates:
            return result

        directory = Path(directory)

        pbar: Optional[Any] = None
        if tqdm is not None and self.config.show_progress:
            pbar = tqdm(
                total=len(candidates),
                desc="Fingerprinting",
                unit="img",
                ncols=80,
            )

        try:
            with ThreadPoolExecutor(max_workers=self.config.max_parallel) as executor:
                futures = {
                    executor.submit(self._compute, directory, name): name
                    for name in candidates
                }

                for future in as_completed(futures):
                    try:
                        outcome = future.result()
                    except Exception as e:
                        outcome = FingerprintOutcome(path=futures[future], error=str(e))

                    self._collect(outcome, directory, table)
                    result.outcomes.append(outcome)

                    if pbar is not None:
                        pbar.update(1)
        finally:
            if pbar is not None:
                pbar.close()

        logger.debug(
            f"Fingerprinted {len(result.succeeded):,} of {result.total:,} files "
            f"in {directory} ({len(result.failed):,} failed)"
        )
        return result

    def _collect(self, outcome: FingerprintOutcome, directory: Path, table: dict[str, str]) -> None:
        """Merge one outcome. Called from the consuming thread only."""
        if outcome.ok:
            table[outcome.path] = outcome.fingerprint
            if self.config.verbose:
                print(f"{outcome.fingerprint} {directory / outcome.path}", file=self.stdout)
        else:
            logger.error(f"err: '{directory / outcome.path}': {outcome.error}")


def fingerprint_files(
    directory: str | Path,
    candidates: list[str],
    table: dict[str, str],
    config: Optional[RunConfig] = None,
    fingerprint_func: Optional[Callable[[str], str]] = None,
) -> PoolResult:
    """
    Convenience wrapper around WorkerPool.run.

    Args:
        directory: Directory the candidate names are relative to
        candidates: Relative paths to fingerprint
        table: Fingerprint table, updated in place
        config: Run configuration (default: RunConfig())
        fingerprint_func: Optional replacement fingerprint function

    Returns:
        PoolResult with one outcome per candidate
    """
    pool = WorkerPool(config or RunConfig(), fingerprint_func=fingerprint_func)
    return pool.run(directory, candidates, table)


__all__ = ['WorkerPool', 'fingerprint_files']
