"""Global configuration for the image manipulation toolkit.

This module centralizes defaults and user-tunable settings for:
- which file extensions are treated as images
- how each output format is encoded
- resampling used by scaling and rotation
- the crop preview window

All values can be overridden via CLI flags or direct imports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


# Supported file extensions for images. Format selection is by suffix only.
IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".gif", ".png"}


RESAMPLE_METHOD = "lanczos"  # one of {nearest, bilinear, bicubic, lanczos}
ROTATE_RESAMPLE_METHOD = "bicubic"  # rotation only accepts nearest, bilinear, bicubic


@dataclass
class Encoding:
    """Per-format encoder settings.

    Attributes
    ----------
    jpeg_quality
        JPEG quality. Outputs are always written at maximum quality.
    jpeg_subsampling
        Chroma subsampling passed to the JPEG encoder (0 means 4:4:4).
    jpeg_background
        Opaque RGB color that transparent pixels are flattened onto, and that
        fills corners exposed by a rotation.
    png_rotate_fill
        RGBA fill for corners exposed by rotating a PNG. Fully transparent.
    keep_metadata
        If True, carry JPEG EXIF over to JPEG outputs with the orientation
        tag reset.
    """

    jpeg_quality: int = 100
    jpeg_subsampling: int = 0
    jpeg_background: Tuple[int, int, int] = (0, 0, 0)
    png_rotate_fill: Tuple[int, int, int, int] = (255, 255, 255, 0)
    keep_metadata: bool = True


@dataclass
class Behavior:
    """Processing behavior toggles.

    Attributes
    ----------
    resample
        Resampling method for scale operations. One of: 'nearest', 'bilinear',
        'bicubic', 'lanczos'.
    rotate_resample
        Resampling method for arbitrary-angle rotation. One of: 'nearest',
        'bilinear', 'bicubic'.
    """

    resample: str = RESAMPLE_METHOD
    rotate_resample: str = ROTATE_RESAMPLE_METHOD


@dataclass
class Preview:
    """Defaults for the crop preview window.

    Attributes
    ----------
    canvas_width, canvas_height
        Initial canvas size. Images larger than this are shown down-scaled and
        the crop ratio compensates when the crop is written.
    outline
        Color of the crop rectangle.
    """

    canvas_width: int = 1024
    canvas_height: int = 768
    outline: str = "red"


@dataclass
class ProjectConfig:
    """Top-level configuration container."""

    encoding: Encoding = field(default_factory=Encoding)
    behavior: Behavior = field(default_factory=Behavior)
    preview: Preview = field(default_factory=Preview)


# Default singleton-style config instance used by CLI unless overridden
CONFIG = ProjectConfig()
