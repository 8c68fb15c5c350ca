"""I/O utilities and helpers for image processing.

This module resolves image formats from filename suffixes, opens and saves
images through Pillow, prepares destination paths, and maps resampling method
names to Pillow constants.
"""

from __future__ import annotations

import contextlib
import enum
import logging
import os
import stat
import tempfile
from struct import error as struct_error
from pathlib import Path
from typing import Generator, Optional, Union

import piexif
from PIL import Image, UnidentifiedImageError

from config import CONFIG, IMAGE_EXTENSIONS
from .errors import (
    DecodeError,
    ImageIOError,
    ImageNotFoundError,
    UnsupportedFormatError,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ImageFormat(enum.Enum):
    """Image formats understood by the toolkit, keyed by Pillow format name."""

    JPEG = "JPEG"
    GIF = "GIF"
    PNG = "PNG"
    UNSUPPORTED = None


_SUFFIX_FORMATS = {
    ".jpg": ImageFormat.JPEG,
    ".jpeg": ImageFormat.JPEG,
    ".gif": ImageFormat.GIF,
    ".png": ImageFormat.PNG,
}


def resolve_format(path: PathLike) -> ImageFormat:
    """Resolve the image format of ``path`` from its lowercase suffix.

    The file contents are never inspected.
    """

    path = Path(path)
    # A bare ".png" has no suffix for pathlib but is still named as a PNG.
    suffix = path.suffix or (path.name if path.name.startswith(".") else "")
    return _SUFFIX_FORMATS.get(suffix.lower(), ImageFormat.UNSUPPORTED)


def require_format(path: PathLike) -> ImageFormat:
    """Like :func:`resolve_format` but raise for unsupported suffixes."""

    fmt = resolve_format(path)
    if fmt is ImageFormat.UNSUPPORTED:
        allowed = ", ".join(sorted(IMAGE_EXTENSIONS))
        raise UnsupportedFormatError(f"File must be an image ({allowed}): {path}")
    return fmt


def iter_image_paths(input_path: PathLike) -> Generator[Path, None, None]:
    """Yield image file paths from a file or directory.

    Parameters
    ----------
    input_path
        A path to a single image or a directory containing images.

    Yields
    ------
    Path
        Individual image file paths.
    """

    path = Path(input_path)
    if path.is_file():
        if resolve_format(path) is not ImageFormat.UNSUPPORTED:
            yield path
        return
    if path.is_dir():
        for p in sorted(path.rglob("*")):
            if p.is_file() and resolve_format(p) is not ImageFormat.UNSUPPORTED:
                yield p


def ensure_dir(path: PathLike) -> None:
    """Create a directory (and its parents) if it does not exist.

    Raises
    ------
    ImageIOError
        If the directory cannot be created.
    """

    path = Path(path)
    if path.is_dir():
        return
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ImageIOError(f"Failed to create directory {path}") from exc
    logger.debug("created directory %s", path)


def _read_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


# Mode for new files, as open() would create them. Read once at import.
_NEW_FILE_MODE = 0o666 & ~_read_umask()


def _file_mode(dest_path: Path) -> int:
    """Mode for the written file: keep an existing destination's mode."""

    try:
        return stat.S_IMODE(dest_path.stat().st_mode)
    except OSError:
        return _NEW_FILE_MODE


def _same_file(a: PathLike, b: PathLike) -> bool:
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False


def prepare_destination(dst: PathLike, src: Optional[PathLike] = None) -> ImageFormat:
    """Make ``dst`` ready to receive a new image.

    The destination suffix is validated before anything on disk is touched.
    An existing file at ``dst`` is deleted unless it is ``src`` itself, in
    which case the atomic write in :func:`save_image` replaces it. Missing
    parent directories are created.

    Parameters
    ----------
    dst
        Destination image path.
    src
        Source image path, used to detect in-place edits.

    Returns
    -------
    ImageFormat
        The resolved destination format.
    """

    fmt = require_format(dst)
    dst = Path(dst)
    if dst.exists() and not (src is not None and _same_file(src, dst)):
        try:
            dst.unlink()
        except OSError as exc:
            raise ImageIOError(f"Unable to overwrite destination file {dst}") from exc
        logger.debug("removed existing destination %s", dst)
    ensure_dir(dst.parent)
    return fmt


def open_image(src: PathLike) -> Image.Image:
    """Decode the image at ``src`` as the format its suffix names.

    The pixel data is fully loaded and the file handle closed before the
    image is returned, so the source may be overwritten afterwards.

    Raises
    ------
    ImageNotFoundError
        If ``src`` does not exist.
    UnsupportedFormatError
        If the suffix is not a supported image extension.
    DecodeError
        If the codec cannot decode the file.
    """

    src = Path(src)
    if not src.is_file():
        raise ImageNotFoundError(f"File not found {src}")
    fmt = require_format(src)
    try:
        with Image.open(src, formats=[fmt.value]) as img:
            img.load()
            # Keep the first frame only; animated GIFs are treated as stills.
            loaded = img.copy()
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
    ) as exc:
        raise DecodeError(f"Could not read image {src}") from exc
    logger.debug("opened %s (%s, %dx%d, mode=%s)", src, fmt.value, loaded.width, loaded.height, loaded.mode)
    return loaded


def _has_alpha(image: Image.Image) -> bool:
    return image.mode in ("RGBA", "LA", "PA") or "transparency" in image.info


def _flatten(image: Image.Image, background) -> Image.Image:
    """Composite an image with alpha onto an opaque background."""

    rgba = image.convert("RGBA")
    canvas = Image.new("RGB", rgba.size, background)
    canvas.paste(rgba, mask=rgba.split()[-1])
    return canvas


def to_canvas(image: Image.Image, fmt: ImageFormat) -> Image.Image:
    """Convert ``image`` to the truecolor working mode for ``fmt``.

    PNG always gets an alpha channel so transparency round-trips. JPEG is
    flattened onto the configured opaque background. GIF keeps alpha only
    when the source had transparency.
    """

    if fmt is ImageFormat.PNG:
        return image if image.mode == "RGBA" else image.convert("RGBA")
    if fmt is ImageFormat.JPEG:
        if _has_alpha(image):
            return _flatten(image, CONFIG.encoding.jpeg_background)
        return image if image.mode == "RGB" else image.convert("RGB")
    if _has_alpha(image):
        return image if image.mode == "RGBA" else image.convert("RGBA")
    return image if image.mode == "RGB" else image.convert("RGB")


def _exif_for_output(original_exif: Optional[bytes], size) -> Optional[bytes]:
    """Return EXIF bytes safe to attach to a transformed image."""

    try:
        exif_dict = piexif.load(original_exif)
    except (ValueError, piexif.InvalidImageDataError, struct_error) as exc:
        logger.warning("dropping unreadable EXIF data: %s", exc)
        return None
    # Stored pixels are shown as-is and the embedded preview no longer matches.
    exif_dict["0th"][piexif.ImageIFD.Orientation] = 1
    exif_dict["Exif"][piexif.ExifIFD.PixelXDimension] = size[0]
    exif_dict["Exif"][piexif.ExifIFD.PixelYDimension] = size[1]
    exif_dict["thumbnail"] = None
    exif_dict["1st"] = {}
    try:
        return piexif.dump(exif_dict)
    except (ValueError, piexif.InvalidImageDataError, struct_error) as exc:
        logger.warning("dropping EXIF data that cannot be re-encoded: %s", exc)
        return None


def save_image(
    image: Image.Image,
    dest_path: PathLike,
    keep_metadata: Optional[bool] = None,
    original_exif: Optional[bytes] = None,
) -> Path:
    """Encode an image to disk according to the destination suffix.

    The image is written to a temporary file next to ``dest_path`` which then
    atomically replaces the destination, so an in-place edit never leaves a
    partial file behind.

    Parameters
    ----------
    image
        PIL image to save. It is converted to the working mode of the
        destination format first.
    dest_path
        Destination path where the image will be written.
    keep_metadata
        Whether to carry EXIF over to JPEG outputs. Defaults to
        ``CONFIG.encoding.keep_metadata``.
    original_exif
        EXIF bytes captured when the source was loaded.

    Returns
    -------
    Path
        ``dest_path``.
    """

    dest_path = Path(dest_path)
    fmt = require_format(dest_path)
    ensure_dir(dest_path.parent)

    if keep_metadata is None:
        keep_metadata = CONFIG.encoding.keep_metadata

    image = to_canvas(image, fmt)
    params = {}
    if fmt is ImageFormat.JPEG:
        params.update(
            {
                "quality": CONFIG.encoding.jpeg_quality,
                "subsampling": CONFIG.encoding.jpeg_subsampling,
            }
        )
        if keep_metadata and original_exif:
            exif = _exif_for_output(original_exif, image.size)
            if exif:
                params["exif"] = exif

    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{dest_path.stem}.", suffix=dest_path.suffix, dir=dest_path.parent
        )
    except OSError as exc:
        raise ImageIOError(f"Failed to write image to {dest_path}") from exc
    written = False
    try:
        with os.fdopen(fd, "wb") as fh:
            image.save(fh, format=fmt.value, **params)
        os.chmod(tmp_name, _file_mode(dest_path))
        os.replace(tmp_name, dest_path)
        written = True
    except (OSError, ValueError) as exc:
        raise ImageIOError(f"Failed to write image to {dest_path}") from exc
    finally:
        if not written:
            with contextlib.suppress(OSError):
                os.remove(tmp_name)
    logger.debug("wrote %s (%s, %dx%d)", dest_path, fmt.value, image.width, image.height)
    return dest_path


def map_resample(name: str) -> int:
    """Map a resample name to a Pillow constant.

    Parameters
    ----------
    name
        One of 'nearest', 'bilinear', 'bicubic', 'lanczos'.

    Returns
    -------
    int
        Pillow resampling constant.
    """

    name_lower = (name or "").lower()
    if name_lower == "nearest":
        return Image.Resampling.NEAREST
    if name_lower == "bilinear":
        return Image.Resampling.BILINEAR
    if name_lower == "bicubic":
        return Image.Resampling.BICUBIC
    return Image.Resampling.LANCZOS


def aspect_ratio(width: int, height: int) -> float:
    """Compute aspect ratio as width / height."""

    return float(width) / float(height)
