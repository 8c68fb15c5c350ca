"""CLI for basic image manipulation.

Commands:
  - scale: Resize to an exact width and height
  - scale2h / scale2w: Resize to a height or width, keeping aspect ratio
  - crop: Crop a rectangle, optionally given in preview coordinates
  - thumbnail: Cover-crop thumbnails for an image or a directory
  - rotate: Rotate in place by an arbitrary angle
  - rotate-cw / rotate-ccw: Rotate in place by quarter turns
  - crop-preview: Tkinter GUI for cropping from a down-scaled preview
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import click
from config import CONFIG
from src.imageops.crop import crop
from src.imageops.errors import ImageOpsError
from src.imageops.resize import scale, scale2h, scale2w
from src.imageops.rotate import rotate, rotate_ccw, rotate_cw
from src.imageops.thumbnail import thumbnail_batch

SRC_OPTION = click.option(
    "--src",
    type=click.Path(path_type=Path),
    required=True,
    help="Source image",
)
DST_OPTION = click.option(
    "--dst",
    type=click.Path(path_type=Path),
    required=True,
    help="Destination image; its extension selects the format",
)
RESAMPLE_OPTION = click.option(
    "--resample",
    type=click.Choice(
        ["nearest", "bilinear", "bicubic", "lanczos"], case_sensitive=False
    ),
    default=CONFIG.behavior.resample,
)


def _run(func, *args, **kwargs) -> Path:
    try:
        result = func(*args, **kwargs)
    except ImageOpsError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(str(result))
    return result


def _parse_size(value: Optional[str]) -> Optional[tuple[int, int]]:
    if not value:
        return None
    try:
        w, h = (int(part) for part in value.lower().split("x", 1))
    except ValueError:
        raise click.BadParameter(f"Expected WIDTHxHEIGHT, got '{value}'")
    if w < 1 or h < 1:
        raise click.BadParameter(f"Width and height must be positive, got '{value}'")
    return w, h


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--keep-metadata/--no-keep-metadata", default=CONFIG.encoding.keep_metadata)
def cli(verbose: bool, keep_metadata: bool) -> None:
    """Image manipulation toolkit."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    CONFIG.encoding.keep_metadata = keep_metadata


@cli.command(name="scale")
@SRC_OPTION
@DST_OPTION
@click.option("--width", type=int, required=True)
@click.option("--height", type=int, required=True)
@RESAMPLE_OPTION
def cmd_scale(src: Path, dst: Path, width: int, height: int, resample: str) -> None:
    """Scale to an exact size. This may distort the aspect ratio."""

    CONFIG.behavior.resample = resample
    _run(scale, src, dst, width, height)


@cli.command(name="scale2h")
@SRC_OPTION
@DST_OPTION
@click.option("--height", type=int, required=True)
@RESAMPLE_OPTION
def cmd_scale2h(src: Path, dst: Path, height: int, resample: str) -> None:
    """Scale to a height, keeping the aspect ratio."""

    CONFIG.behavior.resample = resample
    _run(scale2h, src, dst, height)


@cli.command(name="scale2w")
@SRC_OPTION
@DST_OPTION
@click.option("--width", type=int, required=True)
@RESAMPLE_OPTION
def cmd_scale2w(src: Path, dst: Path, width: int, resample: str) -> None:
    """Scale to a width, keeping the aspect ratio."""

    CONFIG.behavior.resample = resample
    _run(scale2w, src, dst, width)


@cli.command(name="crop")
@SRC_OPTION
@click.option(
    "--dst",
    type=click.Path(path_type=Path),
    default=None,
    help="Destination image (defaults to editing the source in place)",
)
@click.option("--x", "x", type=float, required=True)
@click.option("--y", "y", type=float, required=True)
@click.option("--width", type=float, required=True)
@click.option("--height", type=float, required=True)
@click.option(
    "--ratio",
    type=float,
    default=1.0,
    show_default=True,
    help="Actual image width divided by the width the coordinates were taken on",
)
def cmd_crop(
    src: Path,
    dst: Optional[Path],
    x: float,
    y: float,
    width: float,
    height: float,
    ratio: float,
) -> None:
    """Crop a rectangle from an image."""

    _run(crop, src, dst or src, x, y, width, height, ratio=ratio)


@cli.command(name="thumbnail")
@click.option(
    "--input-path",
    type=click.Path(path_type=Path, exists=True),
    required=True,
    help="Image file or directory",
)
@click.option(
    "--output-dir",
    type=click.Path(path_type=Path),
    required=True,
    help="Output directory",
)
@click.option("--width", type=int, required=True)
@click.option("--height", type=int, required=True)
@click.option("--overwrite/--no-overwrite", default=False)
@RESAMPLE_OPTION
def cmd_thumbnail(
    input_path: Path,
    output_dir: Path,
    width: int,
    height: int,
    overwrite: bool,
    resample: str,
) -> None:
    """Generate cover-crop thumbnails of exactly WIDTH x HEIGHT."""

    CONFIG.behavior.resample = resample
    try:
        written = thumbnail_batch(input_path, output_dir, width, height, overwrite=overwrite)
    except ImageOpsError as exc:
        raise click.ClickException(str(exc)) from exc
    for path in written:
        click.echo(str(path))


@cli.command(name="rotate")
@SRC_OPTION
@click.option("--degrees", type=float, required=True)
@click.option("--clockwise/--counter-clockwise", default=True)
def cmd_rotate(src: Path, degrees: float, clockwise: bool) -> None:
    """Rotate an image in place."""

    _run(rotate, src, degrees, clockwise=clockwise)


@cli.command(name="rotate-cw")
@SRC_OPTION
@click.option("--turns", type=int, default=1, show_default=True)
def cmd_rotate_cw(src: Path, turns: int) -> None:
    """Rotate an image clockwise in place by 90-degree turns."""

    _run(rotate_cw, src, turns)


@cli.command(name="rotate-ccw")
@SRC_OPTION
@click.option("--turns", type=int, default=1, show_default=True)
def cmd_rotate_ccw(src: Path, turns: int) -> None:
    """Rotate an image counter-clockwise in place by 90-degree turns."""

    _run(rotate_ccw, src, turns)


@cli.command(name="crop-preview")
@click.option(
    "--input-dir",
    type=click.Path(path_type=Path, exists=True, file_okay=False),
    required=True,
)
@click.option("--output-dir", type=click.Path(path_type=Path), required=True)
@click.option("--aspect", type=str, default=None, help="Lock selection to WIDTHxHEIGHT")
@click.option("--overwrite/--no-overwrite", default=False)
def cmd_crop_preview(
    input_dir: Path, output_dir: Path, aspect: Optional[str], overwrite: bool
) -> None:
    """Launch the crop preview GUI."""

    # Tk is only needed here
    from src.imageops.crop_preview_gui import run_crop_preview

    run_crop_preview(
        input_dir=input_dir,
        output_dir=output_dir,
        aspect=_parse_size(aspect),
        overwrite=overwrite,
    )


if __name__ == "__main__":
    cli()
