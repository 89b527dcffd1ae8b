import io

import pytest
from PIL import Image


@pytest.fixture
def png_data():
    """Factory of real PNG images, different colors give different data."""
    def _png_data(width, height=None, color=(0xff, 0x00, 0x00, 0xff)):
        buffer = io.BytesIO()
        Image.new('RGBA', (width, height or width), color).save(buffer, format='PNG')
        return buffer.getvalue()

    return _png_data


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """The conversions write in the current directory, so we move into an empty one."""
    path = tmp_path / 'work'
    path.mkdir()
    monkeypatch.chdir(path)
    return path


@pytest.fixture
def make_iconset(tmp_path):
    """Create a directory named like an iconset with the given files in it."""
    def _make_iconset(files, name='App.iconset'):
        iconset = tmp_path / 'src' / name
        iconset.mkdir(parents=True)
        for filename, data in files.items():
            (iconset / filename).write_bytes(data)
        return iconset

    return _make_iconset
