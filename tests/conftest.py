"""Shared test fixtures."""

import os

# Qt must not need a display for the print job tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PIL import Image

from sams.labels.images import to_data_url


def make_qr_like(size: int = 64) -> Image.Image:
    """A black/white checkerboard standing in for a decoded QR bitmap."""
    img = Image.new("RGB", (size, size), "white")
    block = max(1, size // 8)
    for y in range(0, size, block):
        for x in range(0, size, block):
            if (x // block + y // block) % 2 == 0:
                img.paste((0, 0, 0), (x, y, x + block, y + block))
    return img


def make_solid(width: int, height: int, color=(200, 30, 30)) -> str:
    """Data URL of a solid-colour image."""
    return to_data_url(Image.new("RGB", (width, height), color))


@pytest.fixture
def qr_data_url():
    """PNG data URL of a fake QR bitmap."""
    return to_data_url(make_qr_like())


@pytest.fixture
def label_images():
    """Factory for a list of solid-colour label data URLs."""
    def _make(count: int, width: int = 40, height: int = 40):
        return [make_solid(width, height) for _ in range(count)]
    return _make


@pytest.fixture
def settings_file(tmp_path, monkeypatch):
    """Redirect settings I/O to a temp file, away from real config."""
    import sams.config as config_mod
    path = tmp_path / "settings.json"
    monkeypatch.setattr(config_mod, "_SETTINGS_FILE", path)
    return path


@pytest.fixture
def solid():
    """Factory for a single solid-colour data URL."""
    return make_solid
