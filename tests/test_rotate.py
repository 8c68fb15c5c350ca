from __future__ import annotations

import pytest
from PIL import Image

from src.imageops.errors import ImageNotFoundError, UnsupportedFormatError
from src.imageops.rotate import rotate, rotate_ccw, rotate_cw

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


@pytest.fixture
def halves_png(tmp_path):
    """40x20 PNG, left half red and right half blue."""

    img = Image.new("RGB", (40, 20), RED[:3])
    img.paste(BLUE[:3], (20, 0, 40, 20))
    path = tmp_path / "halves.png"
    img.save(path)
    return path


def test_rotate_clockwise_by_default(halves_png):
    assert rotate(halves_png, 90) == halves_png
    with Image.open(halves_png) as img:
        assert img.size == (20, 40)
        # Left side ends up on top.
        assert img.getpixel((10, 5)) == RED
        assert img.getpixel((10, 35)) == BLUE


def test_rotate_counter_clockwise(halves_png):
    rotate(halves_png, 90, clockwise=False)
    with Image.open(halves_png) as img:
        assert img.size == (20, 40)
        assert img.getpixel((10, 5)) == BLUE
        assert img.getpixel((10, 35)) == RED


def test_rotate_png_fills_corners_transparent(make_image):
    src = make_image("sq.png", size=(40, 40), color=(10, 200, 10))
    rotate(src, 45)
    assert sorted(p.name for p in src.parent.iterdir()) == ["sq.png"]
    with Image.open(src) as img:
        assert img.mode == "RGBA"
        assert img.width > 40 and img.height > 40
        assert img.getpixel((0, 0))[3] == 0
        center = img.getpixel((img.width // 2, img.height // 2))
        assert center[3] == 255


def test_rotate_jpeg_fills_corners_black(make_image):
    src = make_image("sq.jpg", size=(40, 40), color=(250, 250, 250))
    rotate(src, 30)
    with Image.open(src) as img:
        assert img.width > 40
        assert max(img.getpixel((0, 0))) < 30


def test_rotate_gif(make_image):
    src = make_image("sq.gif", size=(30, 30), color=(0, 128, 255))
    rotate(src, 45, clockwise=False)
    with Image.open(src) as img:
        assert img.format == "GIF"
        assert img.width > 30
        assert img.convert("RGBA").getpixel((0, 0))[3] == 0
        center = img.convert("RGBA").getpixel((img.width // 2, img.height // 2))
        assert center[3] == 255


def test_rotate_errors(tmp_path):
    with pytest.raises(ImageNotFoundError):
        rotate(tmp_path / "missing.png", 90)
    bmp = tmp_path / "a.bmp"
    Image.new("RGB", (4, 4)).save(bmp)
    with pytest.raises(UnsupportedFormatError):
        rotate(bmp, 90)


def test_quarter_turns(halves_png):
    rotate_cw(halves_png)
    with Image.open(halves_png) as img:
        assert img.size == (20, 40)
        assert img.getpixel((10, 5)) == RED

    rotate_ccw(halves_png, turns=2)
    with Image.open(halves_png) as img:
        assert img.size == (20, 40)
        assert img.getpixel((10, 5)) == BLUE

    rotate_cw(halves_png, turns=5)
    with Image.open(halves_png) as img:
        assert img.size == (40, 20)
        assert img.getpixel((5, 10)) == RED


def test_zero_quarter_turns_leaves_file_untouched(halves_png):
    before = halves_png.read_bytes()
    rotate_ccw(halves_png, turns=4)
    assert halves_png.read_bytes() == before
