"""
Argument parsing for the CLI interface.

Provides functions to create and configure the argument parser for the
dtool command-line interface.
"""

from __future__ import annotations

import argparse
from pathlib import Path


def positive_int(value: str) -> int:
    """argparse type for integers >= 1."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog='dtool',
        description='Find duplicate images by perceptual fingerprint',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s ~/Pictures
      Fingerprint new images and list duplicate pairs

  %(prog)s -j 4 -v ~/Pictures ~/Downloads
      Four parallel jobs, print every newly computed fingerprint

  DTOOL_VIEWER="compare" %(prog)s --visual ~/Pictures
      Open each duplicate pair in an external viewer

Fingerprints are cached in a .dtool.json file inside each directory.
        """
    )

    parser.add_argument(
        'directories',
        type=Path,
        nargs='+',
        metavar='DIR',
        help='Directory to scan for duplicate images'
    )

    parser.add_argument(
        '-j', '--jobs',
        type=positive_int,
        default=None,
        help='Max number of parallel jobs. Default: from DTOOL_JOBS or 1'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Print fingerprint and path for every newly computed file'
    )

    parser.add_argument(
        '--visual',
        action='store_true',
        help='Open duplicates in the viewer named by DTOOL_VIEWER and show file details'
    )

    parser.add_argument(
        '--no-prune',
        action='store_true',
        help='Keep cache entries of files that no longer exist'
    )

    parser.add_argument(
        '--progress',
        action='store_true',
        help='Show a progress bar while fingerprinting (requires tqdm)'
    )

    return parser


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: List of argument strings (default: sys.argv)

    Returns:
        Parsed arguments as Namespace object

    Examples:
        >>> args = parse_arguments(['/path/to/photos', '-j', '4'])
        >>> args.jobs
        4
    """
    parser = create_parser()
    return parser.parse_args(argv)


__all__ = [
    'create_parser',
    'parse_arguments',
    'positive_int',
]
