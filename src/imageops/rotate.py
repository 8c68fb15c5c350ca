"""In-place rotation."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image

from config import CONFIG
from .io_utils import (
    ImageFormat,
    PathLike,
    map_resample,
    open_image,
    resolve_format,
    save_image,
    to_canvas,
)

logger = logging.getLogger(__name__)

_QUARTER_TURNS_CCW = {
    1: Image.Transpose.ROTATE_90,
    2: Image.Transpose.ROTATE_180,
    3: Image.Transpose.ROTATE_270,
}


def _background(fmt: ImageFormat):
    if fmt is ImageFormat.JPEG:
        return CONFIG.encoding.jpeg_background
    if fmt is ImageFormat.PNG:
        return CONFIG.encoding.png_rotate_fill
    return (0, 0, 0, 0)


def rotate(src: PathLike, degrees: float, clockwise: bool = True) -> Path:
    """Rotate the image at ``src`` by ``degrees`` and overwrite it.

    The canvas grows to hold the whole rotated image. Corners exposed by the
    rotation are transparent for PNG and GIF and black for JPEG.

    Parameters
    ----------
    src
        Full path to the image.
    degrees
        Rotation angle.
    clockwise
        Rotate clockwise when True, counter-clockwise otherwise.

    Returns
    -------
    Path
        ``src`` on success.
    """

    # Pillow rotates counter-clockwise for positive angles.
    angle = -degrees if clockwise else degrees

    with open_image(src) as image:
        fmt = resolve_format(src)
        canvas = to_canvas(image, fmt)
        if fmt is ImageFormat.GIF and canvas.mode != "RGBA":
            canvas = canvas.convert("RGBA")
        rotated = canvas.rotate(
            angle,
            resample=map_resample(CONFIG.behavior.rotate_resample),
            expand=True,
            fillcolor=_background(fmt),
        )
        logger.debug(
            "rotate %s by %s degrees: %dx%d -> %dx%d",
            src, angle, image.width, image.height, rotated.width, rotated.height,
        )
        return save_image(rotated, src, original_exif=image.info.get("exif"))


def _rotate_quarter(src: PathLike, turns_ccw: int) -> Path:
    with open_image(src) as image:
        turns_ccw %= 4
        if turns_ccw == 0:
            return Path(src)
        rotated = image.transpose(_QUARTER_TURNS_CCW[turns_ccw])
        logger.debug("rotate %s by %d quarter turns counter-clockwise", src, turns_ccw)
        return save_image(rotated, src, original_exif=image.info.get("exif"))


def rotate_cw(src: PathLike, turns: int = 1) -> Path:
    """Rotate ``src`` clockwise in place by ``turns`` 90-degree increments.

    Quarter turns only move pixels, so no resampling or background fill is
    involved.
    """

    return _rotate_quarter(src, -turns)


def rotate_ccw(src: PathLike, turns: int = 1) -> Path:
    """Rotate ``src`` counter-clockwise in place by ``turns`` 90-degree increments."""

    return _rotate_quarter(src, turns)
