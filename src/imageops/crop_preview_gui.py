"""Crop images from a down-scaled preview using Tkinter.

The GUI displays images from an input directory one by one, fitted to the
window, and lets the user drag a red rectangle to choose the crop region. The
rectangle is picked in preview coordinates; on save it is handed to
:func:`crop` together with the ratio between the actual and the displayed
width, so the crop lands on the matching region of the full-size image.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

import tkinter as tk
from tkinter import ttk, messagebox
from PIL import Image, ImageTk

from config import CONFIG
from .crop import crop
from .errors import ImageOpsError
from .io_utils import iter_image_paths, map_resample, open_image

logger = logging.getLogger(__name__)


@dataclass
class PreviewState:
    """State of the image currently shown."""

    image_path: Path
    display_image: Image.Image
    actual_size: Tuple[int, int]
    rect: Tuple[int, int, int, int]  # x0, y0, x1, y1 in display coords

    @property
    def ratio(self) -> float:
        """Actual pixel width over displayed pixel width."""

        return self.actual_size[0] / self.display_image.width


def fit_to_canvas(
    size: Tuple[int, int], canvas_size: Tuple[int, int]
) -> Tuple[int, int]:
    """Display size for an image of ``size`` inside ``canvas_size``.

    Images are only ever shrunk, never enlarged.
    """

    width, height = size
    scale = min(canvas_size[0] / width, canvas_size[1] / height, 1.0)
    return max(1, int(round(width * scale))), max(1, int(round(height * scale)))


def rect_to_crop_args(rect: Tuple[int, int, int, int]) -> Tuple[int, int, int, int]:
    """Convert a corner rectangle to ``(x, y, w, h)``, normalizing the corners."""

    x0, y0, x1, y1 = rect
    left, right = sorted((x0, x1))
    top, bottom = sorted((y0, y1))
    return left, top, right - left, bottom - top


class CropPreviewApp:
    """Tkinter application for cropping from a preview.

    Parameters
    ----------
    input_dir
        Directory containing images.
    output_dir
        Destination for cropped images.
    aspect
        Optional (width, height) the selection is locked to, e.g. the size of
        a thumbnail that will later be generated from the crop.
    overwrite
        Whether to overwrite existing outputs without asking.
    """

    def __init__(
        self,
        input_dir: Path,
        output_dir: Path,
        aspect: Optional[Tuple[int, int]] = None,
        overwrite: bool = False,
    ) -> None:
        self.image_paths: List[Path] = list(iter_image_paths(Path(input_dir)))
        if not self.image_paths:
            raise ValueError("No images found in input directory.")

        self.root = tk.Tk()
        self.root.title("Crop Preview")

        self.output_dir = Path(output_dir)
        self.aspect = aspect
        self.overwrite = overwrite
        self.index = 0
        self.current: Optional[PreviewState] = None

        # UI layout
        self.toolbar = ttk.Frame(self.root)
        self.toolbar.pack(side=tk.TOP, fill=tk.X)

        # Format selector; empty keeps the source format
        self.format_var = tk.StringVar(value="")
        ttk.Label(self.toolbar, text="Format:").pack(side=tk.LEFT, padx=(6, 2))
        self.format_combo = ttk.Combobox(
            self.toolbar, textvariable=self.format_var, width=6, state="readonly"
        )
        self.format_combo["values"] = ["", ".png", ".jpg", ".gif"]
        self.format_combo.current(0)
        self.format_combo.pack(side=tk.LEFT, padx=2)

        self.size_label = ttk.Label(self.toolbar, text="")
        self.size_label.pack(side=tk.LEFT, padx=8)

        self.save_btn = ttk.Button(
            self.toolbar, text="Save & Next", command=self.on_save
        )
        self.save_btn.pack(side=tk.RIGHT, padx=4)
        self.skip_btn = ttk.Button(self.toolbar, text="Next", command=self.on_next)
        self.skip_btn.pack(side=tk.RIGHT, padx=4)
        self.prev_btn = ttk.Button(self.toolbar, text="Back", command=self.on_prev)
        self.prev_btn.pack(side=tk.RIGHT, padx=4)

        self.canvas = tk.Canvas(
            self.root,
            bg="black",
            width=CONFIG.preview.canvas_width,
            height=CONFIG.preview.canvas_height,
        )
        self.canvas.pack(fill=tk.BOTH, expand=True)

        self.canvas.bind("<ButtonPress-1>", self.on_mouse_down)
        self.canvas.bind("<B1-Motion>", self.on_mouse_drag)

        self.anchor: Optional[Tuple[int, int]] = None
        self.drag_offset: Optional[Tuple[int, int]] = None
        self.origin: Tuple[int, int] = (0, 0)
        self.tk_image: Optional[ImageTk.PhotoImage] = None

        self.load_current()

    def run(self) -> None:
        """Start Tk event loop."""

        self.root.mainloop()

    # --- Event handlers ---

    def on_mouse_down(self, event: tk.Event) -> None:
        if not self.current:
            return
        px, py = self._to_image(event.x, event.y)
        x0, y0, x1, y1 = self.current.rect
        if x0 <= px <= x1 and y0 <= py <= y1:
            # Move the existing selection
            self.drag_offset = (px - x0, py - y0)
            self.anchor = None
        else:
            # Start a new selection
            self.drag_offset = None
            self.anchor = (px, py)
            self.current.rect = (px, py, px, py)
        self._redraw()

    def on_mouse_drag(self, event: tk.Event) -> None:
        if not self.current:
            return
        px, py = self._to_image(event.x, event.y)
        if self.drag_offset:
            self._move_rect_to(px - self.drag_offset[0], py - self.drag_offset[1])
        elif self.anchor:
            self._resize_rect_to(px, py)
        self._redraw()

    def on_save(self) -> None:
        if not self.current:
            return
        x, y, w, h = rect_to_crop_args(self.current.rect)
        if w < 1 or h < 1:
            messagebox.showwarning("No selection", "Drag a rectangle to crop first.")
            return
        src = self.current.image_path
        dest = self.output_dir / f"{src.stem}{self.format_var.get() or src.suffix}"
        if dest.exists() and not self.overwrite:
            if not messagebox.askyesno("Overwrite?", f"{dest.name} exists. Overwrite?"):
                self.on_next()
                return
        try:
            crop(src, dest, x, y, w, h, ratio=self.current.ratio)
        except ImageOpsError as exc:
            logger.error("crop failed for %s: %s", src, exc)
            messagebox.showerror("Crop failed", str(exc))
            return
        logger.info("cropped %s -> %s", src, dest)
        self.on_next()

    def on_prev(self) -> None:
        if self.index <= 0:
            return
        self.index -= 1
        self.load_current()

    def on_next(self) -> None:
        self.index += 1
        if self.index >= len(self.image_paths):
            messagebox.showinfo("Done", "All images processed.")
            self.root.destroy()
            return
        self.load_current()

    # --- Helpers ---

    def load_current(self) -> None:
        path = self.image_paths[self.index]
        canvas_w = max(1, int(self.canvas.winfo_width()) or CONFIG.preview.canvas_width)
        canvas_h = max(1, int(self.canvas.winfo_height()) or CONFIG.preview.canvas_height)
        with open_image(path) as pil:
            disp_size = fit_to_canvas(pil.size, (canvas_w, canvas_h))
            display = pil.convert("RGBA").resize(
                disp_size, map_resample(CONFIG.behavior.resample)
            )
            actual_size = pil.size
        self.current = PreviewState(
            image_path=path,
            display_image=display,
            actual_size=actual_size,
            rect=(0, 0, disp_size[0], disp_size[1]),
        )
        self._redraw()

    def _to_image(self, x: int, y: int) -> Tuple[int, int]:
        """Canvas coordinates to display-image coordinates, clamped."""

        disp_w, disp_h = self.current.display_image.size
        return (
            max(0, min(disp_w, x - self.origin[0])),
            max(0, min(disp_h, y - self.origin[1])),
        )

    def _move_rect_to(self, x: int, y: int) -> None:
        disp_w, disp_h = self.current.display_image.size
        left, top, rect_w, rect_h = rect_to_crop_args(self.current.rect)
        nx0 = max(0, min(disp_w - rect_w, x))
        ny0 = max(0, min(disp_h - rect_h, y))
        self.current.rect = (nx0, ny0, nx0 + rect_w, ny0 + rect_h)

    def _resize_rect_to(self, px: int, py: int) -> None:
        ax, ay = self.anchor
        if self.aspect:
            # Lock to aspect: follow the larger of the two drags
            target = self.aspect[0] / self.aspect[1]
            dx, dy = px - ax, py - ay
            if abs(dx) >= abs(dy) * target:
                dy = int(round(abs(dx) / target)) * (1 if dy >= 0 else -1)
            else:
                dx = int(round(abs(dy) * target)) * (1 if dx >= 0 else -1)
            disp_w, disp_h = self.current.display_image.size
            if not (0 <= ax + dx <= disp_w and 0 <= ay + dy <= disp_h):
                return
            px, py = ax + dx, ay + dy
        self.current.rect = (ax, ay, px, py)

    def _redraw(self) -> None:
        if not self.current:
            return
        self.canvas.delete("all")
        # Center image on canvas
        cw = max(1, int(self.canvas.winfo_width()) or CONFIG.preview.canvas_width)
        ch = max(1, int(self.canvas.winfo_height()) or CONFIG.preview.canvas_height)
        img = self.current.display_image
        self.tk_image = ImageTk.PhotoImage(img)
        x = (cw - img.width) // 2
        y = (ch - img.height) // 2
        self.origin = (x, y)
        self.canvas.create_image(x, y, image=self.tk_image, anchor=tk.NW)

        left, top, w, h = rect_to_crop_args(self.current.rect)
        self.canvas.create_rectangle(
            x + left,
            y + top,
            x + left + w,
            y + top + h,
            outline=CONFIG.preview.outline,
            width=2,
        )
        ratio = self.current.ratio
        self.size_label.config(
            text=f"{self.current.image_path.name}  crop {int(w * ratio)}x{int(h * ratio)}"
            f"  (preview ratio {ratio:.2f})"
        )


def run_crop_preview(
    input_dir: Path,
    output_dir: Path,
    aspect: Optional[Tuple[int, int]] = None,
    overwrite: bool = False,
) -> None:
    """Launch the crop preview GUI.

    Parameters
    ----------
    input_dir
        Directory with images to process.
    output_dir
        Directory to write results.
    aspect
        Optional (width, height) to lock the selection aspect to.
    overwrite
        Whether to overwrite existing files.
    """

    app = CropPreviewApp(
        Path(input_dir),
        Path(output_dir),
        aspect=aspect,
        overwrite=overwrite,
    )
    app.run()
