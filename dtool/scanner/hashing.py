"""
Hashing module for the scanner package.

Provides the perceptual fingerprint used for duplicate detection, plus the
cryptographic checksum and resolution helpers used by visual mode.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Optional

from ..config import DHASH_SIZE
from ..errors import FingerprintError
from .dependencies import Image, imagehash

logger = logging.getLogger(__name__)


def fingerprint(filepath: str | Path, hash_size: int = DHASH_SIZE) -> str:
    """
    Calculate the perceptual fingerprint (dHash) of an image.

    Safe to call concurrently for distinct paths.

    Args:
        filepath: Path to the image
        hash_size: dHash size (default 8, a 64-bit hash)

    Returns:
        Hex string of the difference hash

    Raises:
        FingerprintError: The file could not be read or decoded
    """
    try:
        with Image.open(filepath) as img:
            # Force load to detect truncated/corrupt images early
            img.load()

            if img.mode not in ('RGB', 'L'):
                img = img.convert('RGB')

            return str(imagehash.dhash(img, hash_size=hash_size))
    except Image.UnidentifiedImageError as e:
        raise FingerprintError(f"Not a valid image file: {e}", filepath) from e
    except FileNotFoundError as e:
        raise FingerprintError("File not found", filepath) from e
    except PermissionError as e:
        raise FingerprintError("File not readable (permission denied)", filepath) from e
    except Exception as e:
        raise FingerprintError(f"Failed to decode image: {e}", filepath) from e


def calculate_file_hash(filepath: str | Path, algorithm: str = 'md5') -> str:
    """
    Calculate cryptographic hash of a file.

    Args:
        filepath: Path to the file
        algorithm: Hash algorithm to use (default: md5)

    Returns:
        Hex digest of the file hash, or empty string on error
    """
    hasher = hashlib.new(algorithm)
    try:
        with open(filepath, 'rb') as f:
            for chunk in iter(lambda: f.read(65536), b''):
                hasher.update(chunk)
        return hasher.hexdigest()
    except OSError as e:
        logger.debug(f"File hash calculation failed for {filepath}: {e}")
        return ""


def image_resolution(filepath: str | Path) -> Optional[tuple[int, int]]:
    """
    Read image dimensions without decoding pixel data.

    Returns:
        (width, height), or None if the file cannot be opened as an image
    """
    try:
        with Image.open(filepath) as img:
            return img.width, img.height
    except Exception as e:
        logger.debug(f"Could not read resolution of {filepath}: {e}")
        return None


def set_max_image_pixels(limit: Optional[int]) -> None:
    """Set PIL's decompression bomb limit (None disables the check)."""
    Image.MAX_IMAGE_PIXELS = limit


__all__ = [
    'fingerprint',
    'calculate_file_hash',
    'image_resolution',
    'set_max_image_pixels',
]
