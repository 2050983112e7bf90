"""
Configuration constants for dtool.

This module contains all configurable settings including:
- Recognized image extensions
- Sidecar cache file name
- Fingerprint and parallelism defaults
"""

# Image extensions eligible for fingerprinting
IMAGE_EXTENSIONS = {
    # Common formats
    '.jpg', '.jpeg', '.png', '.gif', '.bmp', '.webp', '.tiff', '.tif',
    # Modern formats (HEIC/HEIF need pillow-heif)
    '.heic', '.heif', '.avif',
    # Netpbm family
    '.pbm', '.pgm', '.ppm', '.pnm',
    # Other formats Pillow can decode
    '.ico', '.tga', '.pcx', '.sgi', '.jp2',
}

# Extensions that only decode with pillow-heif registered
HEIF_EXTENSIONS = {'.heic', '.heif'}

# Sidecar cache file written inside every processed directory
CACHE_FILENAME = '.dtool.json'

# dHash size; 8 yields a 64-bit fingerprint (16 hex characters)
DHASH_SIZE = 8

# Default number of parallel fingerprint jobs
DEFAULT_PARALLEL = 1

# Decompression bomb limit for Pillow
DEFAULT_MAX_IMAGE_PIXELS = 500_000_000

# Checksum column value printed in visual mode for byte-identical files
IDENTICAL_SENTINEL = 'identical'
