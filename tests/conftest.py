"""
Pytest configuration and shared fixtures for test suite.
"""

import os
import threading

import pytest
import tempfile
import shutil
from pathlib import Path
from PIL import Image

from dtool.errors import FingerprintError


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


def _gradient(size, increasing=True):
    """Horizontal gradient; dHash is all ones or all zeros for it."""
    img = Image.linear_gradient('L').rotate(90 if increasing else -90)
    if size != img.size:
        img = img.resize(size)
    return img.convert('RGB')


@pytest.fixture
def sample_images(temp_dir):
    """
    Create a set of sample images for testing.

    Returns:
        dict with paths to:
        - identical1.png, identical2.png (byte-identical copies)
        - resized.png (same picture at another size, same fingerprint)
        - unique.png (different picture)
        - corrupted.jpg (not an image)
        - notes.txt (not an image extension)
    """
    images = {}

    img1 = _gradient((256, 256), increasing=True)
    path1 = temp_dir / "identical1.png"
    img1.save(path1, 'PNG')
    images['identical1'] = str(path1)

    path2 = temp_dir / "identical2.png"
    shutil.copyfile(path1, path2)
    images['identical2'] = str(path2)

    path3 = temp_dir / "resized.png"
    _gradient((128, 128), increasing=True).save(path3, 'PNG')
    images['resized'] = str(path3)

    path4 = temp_dir / "unique.png"
    _gradient((256, 256), increasing=False).save(path4, 'PNG')
    images['unique'] = str(path4)

    path5 = temp_dir / "corrupted.jpg"
    path5.write_text("not an image")
    images['corrupted'] = str(path5)

    path6 = temp_dir / "notes.txt"
    path6.write_text("not an image either")
    images['notes'] = str(path6)

    return images


class FakeFingerprinter:
    """
    Fingerprint function keyed by file name.

    Names listed in `failing` raise FingerprintError. Every call is recorded.
    """

    def __init__(self, values, failing=()):
        self.values = dict(values)
        self.failing = set(failing)
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, path):
        name = os.path.basename(path)
        with self._lock:
            self.calls.append(name)
        if name in self.failing:
            raise FingerprintError("Not a valid image file: cannot identify image file", path)
        return self.values[name]


@pytest.fixture
def make_files(temp_dir):
    """Create empty files with the given names inside temp_dir."""
    def _make(*names):
        for name in names:
            (temp_dir / name).write_bytes(b"")
        return temp_dir
    return _make


@pytest.fixture
def fake_fingerprints():
    """Factory for FakeFingerprinter instances."""
    return FakeFingerprinter
