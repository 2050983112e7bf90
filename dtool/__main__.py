"""
Allow running the package with: python -m dtool

Examples:
    python -m dtool ~/Pictures
    python -m dtool -j 4 -v ~/Pictures ~/Downloads
"""

import sys

from .cli import main


if __name__ == '__main__':
    sys.exit(main())
