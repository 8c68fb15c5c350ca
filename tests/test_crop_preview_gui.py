from __future__ import annotations

import pytest
from PIL import Image

pytest.importorskip("tkinter")

from src.imageops.crop import crop  # noqa: E402
from src.imageops.crop_preview_gui import (  # noqa: E402
    PreviewState,
    fit_to_canvas,
    rect_to_crop_args,
)


def test_fit_to_canvas_only_shrinks():
    assert fit_to_canvas((2000, 1000), (1000, 1000)) == (1000, 500)
    assert fit_to_canvas((1000, 3000), (1024, 768)) == (256, 768)
    assert fit_to_canvas((200, 100), (1024, 768)) == (200, 100)


def test_rect_to_crop_args_normalizes_corners():
    assert rect_to_crop_args((10, 20, 50, 60)) == (10, 20, 40, 40)
    assert rect_to_crop_args((50, 60, 10, 20)) == (10, 20, 40, 40)


def test_preview_selection_crops_full_size_region(tmp_path, gradient_png):
    state = PreviewState(
        image_path=gradient_png,
        display_image=Image.new("RGBA", (128, 128)),
        actual_size=(256, 256),
        rect=(60, 60, 10, 10),
    )
    assert state.ratio == 2
    x, y, w, h = rect_to_crop_args(state.rect)
    dst = crop(gradient_png, tmp_path / "out.png", x, y, w, h, ratio=state.ratio)
    with Image.open(dst) as img:
        assert img.size == (100, 100)
        assert img.getpixel((0, 0)) == (20, 20, 0, 255)
