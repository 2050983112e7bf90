"""
Report formatting and display for the CLI interface.

Duplicate pairs are printed one per line so the output can be piped.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, TextIO

from ..models import DuplicatePair, RunSummary


def format_pair(pair: DuplicatePair, directory: str | Path) -> str:
    """
    Format a duplicate pair as '<fingerprint> <previous> <current>'.

    Paths are joined to the directory the pair was found in.
    """
    directory = Path(directory)
    return f"{pair.fingerprint} {directory / pair.previous} {directory / pair.current}"


def print_duplicate_report(summary: RunSummary, stream: Optional[TextIO] = None) -> None:
    """
    Print every duplicate pair of a run.

    Args:
        summary: Result of process_directory
        stream: Output stream (default: sys.stdout)
    """
    stream = stream or sys.stdout
    for pair in summary.pairs:
        print(format_pair(pair, summary.directory), file=stream)


__all__ = ['format_pair', 'print_duplicate_report']
