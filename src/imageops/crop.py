"""Rectangle cropping with support for preview coordinates."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import InvalidDimensionsError
from .io_utils import PathLike, ensure_dir, open_image, require_format, save_image, to_canvas

logger = logging.getLogger(__name__)


def crop(
    src: PathLike,
    dst: PathLike,
    x: float,
    y: float,
    w: float,
    h: float,
    ratio: float = 1,
) -> Path:
    """Crop the image at ``src`` and write the selection to ``dst``.

    If ``src`` and ``dst`` are the same path the image is edited in place.

    ``ratio`` is the ratio of the image's actual pixel width to the width it
    was displayed at. If an image 2000 pixels wide was shown 1000 pixels wide
    to fit the screen, pass ``ratio=2`` together with the coordinates picked on
    screen (e.g. from a JavaScript cropping widget) and the crop is applied to
    the matching region of the full-size image.

    Parameters
    ----------
    src
        Source image path.
    dst
        Destination image path; its suffix selects the output format.
    x, y
        Top-left corner of the selection.
    w, h
        Width and height of the selection.
    ratio
        Multiplier of actual width over displayed width.

    Returns
    -------
    Path
        ``dst`` on success.
    """

    fmt = require_format(dst)
    src_x = int(ratio * x)
    src_y = int(ratio * y)
    src_w = int(ratio * w)
    src_h = int(ratio * h)
    if src_w < 1 or src_h < 1:
        raise InvalidDimensionsError(f"Invalid crop dimensions: {src_w}x{src_h}")

    with open_image(src) as image:
        ensure_dir(Path(dst).parent)
        # Pixels outside the source stay zero: transparent for PNG, black otherwise.
        region = to_canvas(image, fmt).crop((src_x, src_y, src_x + src_w, src_y + src_h))
        logger.debug(
            "crop %s (%d, %d, %d, %d) -> %s", src, src_x, src_y, src_w, src_h, dst
        )
        return save_image(region, dst, original_exif=image.info.get("exif"))
