"""
Third-party imports for the scanner package.

Pillow and imagehash are required for fingerprinting. pillow-heif adds
HEIC/HEIF decoding and tqdm draws the --progress bar; both are optional.
"""

from __future__ import annotations

import logging
import warnings

from ..config import DEFAULT_MAX_IMAGE_PIXELS

logger = logging.getLogger(__name__)

try:
    from PIL import Image
    import imagehash
except ImportError:
    raise ImportError(
        "dtool needs Pillow and imagehash to fingerprint images.\n"
        "Install with: pip install Pillow imagehash"
    )

# The opener must be registered before the first HEIC file is opened
HAS_HEIF_SUPPORT = False
try:
    from pillow_heif import register_heif_opener
    register_heif_opener()
    HAS_HEIF_SUPPORT = True
except ImportError:
    logger.debug("pillow-heif not installed, .heic/.heif files are not scanned")

# Large camera photos exceed PIL's default; the CLI may override this
Image.MAX_IMAGE_PIXELS = DEFAULT_MAX_IMAGE_PIXELS
warnings.filterwarnings("ignore", category=Image.DecompressionBombWarning)

# None when tqdm is not installed
try:
    from tqdm import tqdm
except ImportError:
    tqdm = None


__all__ = ['Image', 'imagehash', 'tqdm', 'HAS_HEIF_SUPPORT']
