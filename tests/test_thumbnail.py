from __future__ import annotations

import pytest
from PIL import Image

from src.imageops.errors import InvalidDimensionsError, UnsupportedFormatError
from src.imageops.thumbnail import thumbnail, thumbnail_batch

GREEN = (0, 255, 0, 255)


def size_of(path):
    with Image.open(path) as img:
        return img.size


def test_wide_source_is_center_cropped_horizontally(tmp_path, striped_png):
    dst = thumbnail(striped_png, tmp_path / "thumb.png", 100, 100)
    with Image.open(dst) as img:
        assert img.size == (100, 100)
        # Only the middle band survives.
        assert img.getpixel((0, 0)) == GREEN
        assert img.getpixel((99, 99)) == GREEN
        assert img.getpixel((50, 50)) == GREEN


def test_tall_source_is_center_cropped_vertically(tmp_path):
    img = Image.new("RGB", (100, 300), (255, 0, 0))
    img.paste((0, 255, 0), (0, 100, 100, 200))
    src = tmp_path / "tall.png"
    img.save(src)

    dst = thumbnail(src, tmp_path / "thumb.png", 100, 100)
    with Image.open(dst) as out:
        assert out.size == (100, 100)
        assert out.getpixel((0, 0)) == GREEN
        assert out.getpixel((99, 99)) == GREEN


@pytest.mark.parametrize(
    "source, target",
    [
        ((300, 100), (64, 48)),  # thumb ratio < original ratio
        ((100, 300), (64, 48)),  # thumb ratio > original ratio
        ((200, 100), (50, 25)),  # equal ratios
        ((123, 457), (31, 17)),
        ((640, 480), (1000, 10)),
    ],
)
@pytest.mark.parametrize("ext", [".jpg", ".gif", ".png"])
def test_thumbnail_has_exact_size(tmp_path, make_image, source, target, ext):
    src = make_image(f"src{ext}", size=source)
    dst = thumbnail(src, tmp_path / "thumbs" / f"t{ext}", *target)
    assert size_of(dst) == target


def test_fractional_dimensions_are_floored(tmp_path, make_image):
    src = make_image("src.png", size=(80, 60))
    dst = thumbnail(src, tmp_path / "t.png", 40.9, 30.2)
    assert size_of(dst) == (40, 30)


@pytest.mark.parametrize("w, h", [(0, 10), (10, 0), (0.5, 10), (-5, 10)])
def test_invalid_dimensions(tmp_path, make_image, w, h):
    src = make_image("src.png")
    with pytest.raises(InvalidDimensionsError):
        thumbnail(src, tmp_path / "t.png", w, h)
    assert not (tmp_path / "t.png").exists()


def test_unsupported_destination(tmp_path, make_image):
    src = make_image("src.png")
    with pytest.raises(UnsupportedFormatError):
        thumbnail(src, tmp_path / "t.bmp", 10, 10)
    assert sorted(p.name for p in tmp_path.iterdir()) == ["src.png"]


def test_thumbnail_in_place(striped_png):
    thumbnail(striped_png, striped_png, 50, 50)
    assert sorted(p.name for p in striped_png.parent.iterdir()) == ["striped.png"]
    assert size_of(striped_png) == (50, 50)


def test_batch_writes_and_skips_existing(tmp_path, make_image):
    make_image("in/a.png", size=(60, 30))
    make_image("in/b.jpg", size=(30, 60))
    out_dir = tmp_path / "out"

    written = thumbnail_batch(tmp_path / "in", out_dir, 20, 20)
    assert [p.name for p in written] == ["a.png", "b.jpg"]
    assert all(size_of(p) == (20, 20) for p in written)

    assert thumbnail_batch(tmp_path / "in", out_dir, 10, 10) == []
    assert size_of(out_dir / "a.png") == (20, 20)

    rewritten = thumbnail_batch(tmp_path / "in", out_dir, 10, 10, overwrite=True)
    assert len(rewritten) == 2
    assert size_of(out_dir / "a.png") == (10, 10)
