"""Shared pytest fixtures for Contact Sheet tests."""
import os

os.environ['QT_QPA_PLATFORM'] = 'offscreen'  # must be set before QGuiApplication import

import pytest
from PIL import Image, ImageDraw


@pytest.fixture(scope='session')
def qapp():
    """Create a single headless Qt application for all tests."""
    from footer import ensure_gui_app
    app = ensure_gui_app()
    yield app


@pytest.fixture
def make_jpeg(tmp_path):
    """Factory fixture: make_jpeg(name, width, height, color) -> path of a JPEG in tmp_path."""
    def _make(name, width, height, color='red', directory=None):
        directory = directory or tmp_path
        path = os.path.join(directory, name)
        Image.new('RGB', (width, height), color).save(path, 'JPEG', quality=95)
        return path
    return _make


@pytest.fixture
def two_tone_portrait(tmp_path):
    """Portrait JPEG whose top half is red and bottom half blue."""
    img = Image.new('RGB', (200, 300), 'blue')
    draw = ImageDraw.Draw(img)
    draw.rectangle([0, 0, 199, 149], fill='red')
    path = str(tmp_path / 'portrait.jpg')
    img.save(path, 'JPEG', quality=95)
    return path


@pytest.fixture
def corrupt_jpeg(tmp_path):
    """A file with a .jpg name that is not an image."""
    path = tmp_path / 'corrupt.jpg'
    path.write_bytes(b'this is not a jpeg at all')
    return str(path)
