"""Shared fixtures for the image operation tests.

Images are generated with Pillow into ``tmp_path`` so every test starts from
known pixels.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Tuple

import pytest
from PIL import Image


@pytest.fixture
def make_image(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a solid image and returning its path."""

    def _make(
        name: str,
        size: Tuple[int, int] = (40, 20),
        color=(200, 30, 30),
        mode: str = "RGB",
        **save_params,
    ) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new(mode, size, color).save(path, **save_params)
        return path

    return _make


@pytest.fixture
def gradient_png(tmp_path: Path) -> Path:
    """256x256 PNG where pixel (x, y) is (x, y, 0, 255)."""

    img = Image.new("RGBA", (256, 256))
    img.putdata([(x, y, 0, 255) for y in range(256) for x in range(256)])
    path = tmp_path / "gradient.png"
    img.save(path)
    return path


@pytest.fixture
def striped_png(tmp_path: Path) -> Path:
    """300x100 PNG with red, green and blue 100 pixel wide vertical bands."""

    img = Image.new("RGB", (300, 100), (255, 0, 0))
    img.paste((0, 255, 0), (100, 0, 200, 100))
    img.paste((0, 0, 255), (200, 0, 300, 100))
    path = tmp_path / "striped.png"
    img.save(path)
    return path
