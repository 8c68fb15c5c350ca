"""Scaling operations.

Each function reads the image at ``src``, resizes it, and writes it to ``dst``
in the format named by the destination suffix. The destination is prepared
first: its suffix is validated, an existing file is removed, and missing
directories are created.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Tuple

from PIL import Image

from config import CONFIG
from .errors import InvalidDimensionsError
from .io_utils import (
    PathLike,
    map_resample,
    open_image,
    prepare_destination,
    require_format,
    save_image,
    to_canvas,
)

logger = logging.getLogger(__name__)


def scaled_width(orig_width: int, orig_height: int, new_height: int) -> int:
    """Width matching ``new_height`` at the original aspect ratio, floored."""

    return int(math.floor(new_height * (orig_width / orig_height)))


def scaled_height(orig_width: int, orig_height: int, new_width: int) -> int:
    """Height matching ``new_width`` at the original aspect ratio, floored."""

    return int(math.floor(new_width * (orig_height / orig_width)))


def _check_size(size: Tuple[int, int]) -> None:
    if size[0] < 1 or size[1] < 1:
        raise InvalidDimensionsError(f"Invalid image dimensions: {size[0]}x{size[1]}")


def resize_to_exact(
    image: Image.Image, size: Tuple[int, int], resample: str = "lanczos"
) -> Image.Image:
    """Resize image to an exact size using the provided resample method.

    Parameters
    ----------
    image
        Source image, already in a truecolor working mode.
    size
        Target size (width, height).
    resample
        Resampling method name.

    Returns
    -------
    Image.Image
        Resized image.
    """

    return image.resize(size, map_resample(resample))


def _scale_file(src: PathLike, dst: PathLike, size_for) -> Path:
    """Shared body of the scale operations.

    ``size_for`` maps the source (width, height) to the target size.
    """

    fmt = require_format(dst)
    with open_image(src) as image:
        size = size_for(image.width, image.height)
        _check_size(size)
        prepare_destination(dst, src=src)
        canvas = to_canvas(image, fmt)
        result = resize_to_exact(canvas, size, resample=CONFIG.behavior.resample)
        logger.debug("scale %s %dx%d -> %s %dx%d", src, image.width, image.height, dst, *size)
        return save_image(result, dst, original_exif=image.info.get("exif"))


def scale(src: PathLike, dst: PathLike, new_width: int, new_height: int) -> Path:
    """Scale an image to a new width and height. This may distort aspect ratio.

    Parameters
    ----------
    src
        Path to the source image.
    dst
        Destination path including filename; its suffix selects the format.
    new_width, new_height
        Target size in pixels.

    Returns
    -------
    Path
        ``dst`` on success.

    Raises
    ------
    ImageNotFoundError, DecodeError, UnsupportedFormatError, ImageIOError,
    InvalidDimensionsError
    """

    return _scale_file(src, dst, lambda ow, oh: (int(new_width), int(new_height)))


def scale2h(src: PathLike, dst: PathLike, new_height: int) -> Path:
    """Scale an image to a new height while maintaining aspect ratio.

    The width becomes ``floor(new_height * width / height)``.
    """

    return _scale_file(
        src, dst, lambda ow, oh: (scaled_width(ow, oh, new_height), int(new_height))
    )


def scale2w(src: PathLike, dst: PathLike, new_width: int) -> Path:
    """Scale an image to a new width while maintaining aspect ratio.

    The height becomes ``floor(new_width * height / width)``.
    """

    return _scale_file(
        src, dst, lambda ow, oh: (int(new_width), scaled_height(ow, oh, new_width))
    )
