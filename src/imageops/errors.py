"""Exceptions raised by the image operations.

Every failure is terminal for the call that raised it. Each error also derives
from the closest builtin so callers can catch either.
"""

from __future__ import annotations


class ImageOpsError(Exception):
    """Base class for all image operation failures."""


class UnsupportedFormatError(ImageOpsError, ValueError):
    """The file extension is not one of .jpg, .jpeg, .gif or .png."""


class ImageNotFoundError(ImageOpsError, FileNotFoundError):
    """The source image does not exist."""


class ImageIOError(ImageOpsError, OSError):
    """A file could not be deleted, written or encoded, or a directory created."""


class DecodeError(ImageOpsError):
    """The codec could not produce a usable image from the source file."""


class InvalidDimensionsError(ImageOpsError, ValueError):
    """A requested width or height is smaller than one pixel."""
