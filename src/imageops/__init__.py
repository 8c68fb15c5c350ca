"""Image manipulation operations for JPEG, GIF and PNG files.

Submodules
----------
io_utils
    Format resolution, file I/O and destination helpers.
resize
    Free and aspect-preserving scaling.
crop
    Rectangle cropping, optionally from preview coordinates.
thumbnail
    Cover-crop thumbnails.
rotate
    In-place rotation.
crop_preview_gui
    Tkinter tool for cropping from a down-scaled preview.
"""

from .crop import crop
from .errors import (
    DecodeError,
    ImageIOError,
    ImageNotFoundError,
    ImageOpsError,
    InvalidDimensionsError,
    UnsupportedFormatError,
)
from .resize import scale, scale2h, scale2w
from .rotate import rotate, rotate_ccw, rotate_cw
from .thumbnail import thumbnail, thumbnail_batch

__all__ = [
    "crop",
    "scale",
    "scale2h",
    "scale2w",
    "rotate",
    "rotate_cw",
    "rotate_ccw",
    "thumbnail",
    "thumbnail_batch",
    "ImageOpsError",
    "UnsupportedFormatError",
    "ImageNotFoundError",
    "ImageIOError",
    "DecodeError",
    "InvalidDimensionsError",
]
