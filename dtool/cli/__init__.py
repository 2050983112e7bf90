"""
CLI package for dtool.

Provides the command-line interface: fingerprint the images of one or more
directories, keep the sidecar caches current and report duplicate pairs.

Public API:
- main: Entry point for CLI execution
- CLIOrchestrator: CLI workflow orchestration class
- print_duplicate_report: Function to display results
- ComparisonViewer: Visual mode
"""

from __future__ import annotations

from .orchestrator import CLIOrchestrator, setup_logging
from .arg_parser import create_parser, parse_arguments
from .reporting import print_duplicate_report, format_pair
from .viewer import ComparisonViewer


def main(argv=None) -> int:
    """
    Main entry point for the CLI.

    Delegates to CLIOrchestrator to execute the complete workflow.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    orchestrator = CLIOrchestrator(argv)
    return orchestrator.run()


__all__ = [
    # Main entry point
    'main',
    # Core classes
    'CLIOrchestrator',
    'ComparisonViewer',
    # Utilities
    'setup_logging',
    'create_parser',
    'parse_arguments',
    'print_duplicate_report',
    'format_pair',
]
