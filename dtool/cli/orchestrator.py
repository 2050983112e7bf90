"""
CLI workflow orchestration for dtool.

Provides the CLIOrchestrator class that coordinates the CLI workflow from
argument parsing through reporting, and is the only place that turns fatal
errors into an exit status.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from ..errors import DtoolError
from ..models import RunConfig, RunSummary
from ..pipeline import process_directory
from ..scanner import set_max_image_pixels
from ..user_config import get_user_config
from .arg_parser import parse_arguments
from .reporting import print_duplicate_report
from .viewer import ComparisonViewer


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the CLI.

    Args:
        verbose: Enable verbose (DEBUG level) logging

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    return logging.getLogger(__name__)


class CLIOrchestrator:
    """
    Orchestrates the CLI workflow.

    Each directory is processed to completion before the next one starts.
    The first fatal error stops the invocation.
    """

    def __init__(self, argv: Optional[list[str]] = None, stdout: Optional[TextIO] = None):
        """
        Args:
            argv: Argument list (default: sys.argv[1:])
            stdout: Stream for report output (default: sys.stdout)
        """
        self.argv = argv
        self._stdout = stdout
        self.logger: Optional[logging.Logger] = None
        self.args = None
        self.config: Optional[RunConfig] = None
        self.viewer: Optional[ComparisonViewer] = None
        self.summaries: list[RunSummary] = []

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    def run(self) -> int:
        """
        Execute the complete CLI workflow.

        Returns:
            Exit code (0 for success, 1 for a fatal error)

        Workflow phases:
        1. Setup & argument parsing
        2. Configuration
        3. Per-directory processing & reporting
        """
        self._setup_phase()
        self._configure_phase()
        return self._process_phase()

    def _setup_phase(self) -> None:
        """Phase 1: Parse arguments and setup logging."""
        self.args = parse_arguments(self.argv)
        self.logger = setup_logging(self.args.verbose)

    def _configure_phase(self) -> None:
        """Phase 2: Build the run configuration."""
        user_config = get_user_config()

        jobs = self.args.jobs if self.args.jobs is not None else user_config.default_jobs
        self.config = RunConfig(
            max_parallel=jobs,
            verbose=self.args.verbose,
            visual=self.args.visual,
            prune=not self.args.no_prune,
            show_progress=self.args.progress,
        )
        set_max_image_pixels(user_config.max_image_pixels)

        if self.config.visual:
            self.viewer = ComparisonViewer(user_config.viewer, stream=self.stdout)

        self.logger.debug(f"Running with {self.config.max_parallel} parallel jobs")

    def _process_phase(self) -> int:
        """
        Phase 3: Run the pipeline for every directory.

        Returns:
            0 if all directories were processed, 1 on the first fatal error
        """
        for directory in self.args.directories:
            try:
                summary = process_directory(directory, self.config, stdout=self.stdout)
            except DtoolError as e:
                self.logger.error(f"err: {e}")
                return 1

            self.summaries.append(summary)
            self._report(summary)

        return 0

    def _report(self, summary: RunSummary) -> None:
        """Print pairs, or show them in the viewer in visual mode."""
        if self.viewer is not None:
            for pair in summary.pairs:
                self.viewer.show(pair, summary.directory)
        else:
            print_duplicate_report(summary, self.stdout)


__all__ = ['CLIOrchestrator', 'setup_logging']
