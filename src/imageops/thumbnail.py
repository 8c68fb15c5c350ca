"""Thumbnail generation.

A thumbnail always fills the requested box completely. When the aspect ratio
of the box differs from the source, the image is scaled so the box is covered
and the overflowing dimension is cropped around the center.

E.g. a 300 x 100 original and a 100 x 100 thumbnail crop the sides::

    +---------------------+
    |     |        |      |
    |     | thumb  |      |
    |     | 100x100|      |
    |     |        |      |
    +---------------------+
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import List

from .crop import crop
from .errors import InvalidDimensionsError
from .io_utils import (
    PathLike,
    aspect_ratio,
    ensure_dir,
    iter_image_paths,
    open_image,
    require_format,
)
from .resize import scale, scale2h, scale2w, scaled_height, scaled_width

logger = logging.getLogger(__name__)


def thumbnail(src: PathLike, dst: PathLike, w: float, h: float) -> Path:
    """Generate a ``w`` x ``h`` thumbnail of ``src`` at ``dst``.

    Parameters
    ----------
    src
        Full path to the source image.
    dst
        Full path where the thumbnail is written.
    w, h
        Thumbnail size in pixels. Fractions are floored.

    Returns
    -------
    Path
        ``dst`` on success.

    Raises
    ------
    InvalidDimensionsError
        If either dimension floors to less than one pixel.
    """

    w = int(math.floor(w))
    h = int(math.floor(h))
    if w < 1 or h < 1:
        raise InvalidDimensionsError("Invalid thumbnail dimensions.")

    require_format(dst)

    with open_image(src) as image:
        ox, oy = image.size

    ratio_thumb = aspect_ratio(w, h)
    ratio_orig = aspect_ratio(ox, oy)

    # Scale to height and crop the width
    if ratio_thumb < ratio_orig:
        dst = scale2h(src, dst, h)
        nx = scaled_width(ox, oy, h)
        x = abs(nx - w) // 2
        logger.debug("thumbnail %s: scaled to %dx%d, cropping x=%d", src, nx, h, x)
        return crop(dst, dst, x, 0, w, h)

    # Scale to width and crop the height
    if ratio_thumb > ratio_orig:
        dst = scale2w(src, dst, w)
        ny = scaled_height(ox, oy, w)
        y = abs(ny - h) // 2
        logger.debug("thumbnail %s: scaled to %dx%d, cropping y=%d", src, w, ny, y)
        return crop(dst, dst, 0, y, w, h)

    # Ratios equal: scale only
    return scale(src, dst, w, h)


def thumbnail_batch(
    input_path: PathLike,
    output_dir: PathLike,
    w: float,
    h: float,
    overwrite: bool = False,
) -> List[Path]:
    """Generate thumbnails for a single image or every image in a directory.

    Parameters
    ----------
    input_path
        Path to a single image or a directory.
    output_dir
        Destination directory; each thumbnail keeps its source filename.
    w, h
        Thumbnail size in pixels.
    overwrite
        Whether to overwrite existing files.

    Returns
    -------
    list of Path
        Thumbnails written, in processing order.
    """

    out_dir = Path(output_dir)
    ensure_dir(out_dir)

    written = []
    for src in iter_image_paths(Path(input_path)):
        dest = out_dir / src.name
        if dest.exists() and not overwrite:
            logger.info("skipping existing %s", dest)
            continue
        written.append(thumbnail(src, dest, w, h))
        logger.info("thumbnail %s -> %s", src, dest)
    return written
