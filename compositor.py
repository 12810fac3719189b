"""Sheet compositor: places thumbnails and the footer on a white canvas.

Thumbnails are landscape-oriented, contain-fitted and letterboxed to the
exact cell size. A file that fails to decode leaves its cell blank and is
reported as a warning; it never aborts the sheet.
"""

import logging
import os
import tempfile
from concurrent.futures import ThreadPoolExecutor

from PIL import Image, ImageDraw, ImageOps

from footer import footer_lines, render_footer
from layout import LayoutEngine
from models import (
    SheetConfig, SheetLayout, SheetResult, SourceImage, ThumbnailResult, MetadataRecord,
    EmptyInputError, OutputWriteError, WHITE, RULE_COLOR,
)

logger = logging.getLogger(__name__)

# Pillow raises these for corrupt, truncated or unsupported files.
DECODE_ERRORS = (OSError, ValueError, SyntaxError, Image.DecompressionBombError)


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def make_thumbnail(path: str, width: int, height: int) -> Image.Image:
    """Open *path* and return an exact width x height RGB thumbnail.

    Portrait sources are turned 90 degrees clockwise first so every thumbnail
    reads as landscape. The image is scaled to fit entirely inside the cell
    and the rest is filled with white, never cropped or stretched.
    """
    with Image.open(path) as src:
        img = src.convert("RGB")
    if img.height > img.width:
        img = img.transpose(Image.Transpose.ROTATE_270)
    return ImageOps.pad(img, (width, height), method=Image.Resampling.LANCZOS, color=WHITE)


def load_thumbnail(index: int, source: SourceImage, width: int, height: int) -> ThumbnailResult:
    """Build one thumbnail, capturing decode failures in the result."""
    try:
        thumb = make_thumbnail(source.path, width, height)
    except DECODE_ERRORS as e:
        return ThumbnailResult(index=index, source=source, error=str(e) or type(e).__name__)
    return ThumbnailResult(index=index, source=source, image=thumb)


class SheetCompositor:
    """Builds the contact sheet image for one run.

    *workers* > 1 decodes and resizes thumbnails in a thread pool; pasting
    onto the canvas always happens in input order.
    """

    def __init__(self, config: SheetConfig | None = None, workers: int = 1):
        self.config = config or SheetConfig()
        self.engine = LayoutEngine(self.config)
        self.workers = max(1, workers)

    # ------------------------------------------------------------------ #
    #  Public API                                                         #
    # ------------------------------------------------------------------ #

    def compose(self, images: list[SourceImage],
                metadata: MetadataRecord | None = None) -> SheetResult:
        """Compose *images* (row-major) and the *metadata* footer."""
        if not images:
            raise EmptyInputError("No JPEG images to place on the sheet")

        layout = self.engine.layout()
        if len(images) > layout.capacity:
            logger.debug("Ignoring %d image(s) beyond the %d-cell grid",
                         len(images) - layout.capacity, layout.capacity)
            images = images[:layout.capacity]

        logger.info("Creating contact sheet with %d image(s)", len(images))
        canvas = Image.new("RGB", (layout.canvas_px, layout.canvas_px), WHITE)
        result = SheetResult(image=canvas, layout=layout)

        for thumb in self._thumbnails(images, layout):
            if not thumb.ok:
                logger.warning("Skipping %s: %s", thumb.source.displayed_filename, thumb.error)
                result.skipped.append(thumb)
                continue
            cell = layout.cells[thumb.index]
            canvas.paste(thumb.image, (cell.origin_x, cell.origin_y))
            thumb.image.close()
            result.placed.append(cell)

        if metadata is not None and not metadata.is_empty:
            self._paint_footer(canvas, layout, metadata)
            result.footer_lines = footer_lines(metadata)

        return result

    def save(self, sheet: SheetResult | Image.Image, path) -> str:
        """Encode the sheet as a print-quality JPEG at *path*.

        The file is written under a temporary name and renamed into place, so a
        failed write never leaves a partial file behind.
        """
        image = sheet.image if isinstance(sheet, SheetResult) else sheet
        path = os.fspath(path)
        directory = os.path.dirname(os.path.abspath(path))
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(
                prefix=".contact-sheet-", suffix=".jpg", dir=directory)
            with os.fdopen(fd, "wb") as f:
                image.save(f, format="JPEG", quality=self.config.jpeg_quality,
                           subsampling=0, dpi=(self.config.sheet.dpi, self.config.sheet.dpi))
            # mkstemp creates 0600; give the sheet the usual umask-derived mode
            os.chmod(tmp_path, 0o666 & ~_current_umask())
            os.replace(tmp_path, path)
        except (OSError, ValueError) as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise OutputWriteError(path, getattr(e, "strerror", None) or str(e)) from e
        logger.info("Wrote %s", path)
        return path

    # ------------------------------------------------------------------ #
    #  Internals                                                          #
    # ------------------------------------------------------------------ #

    def _thumbnails(self, images, layout: SheetLayout):
        w, h = layout.cell_width, layout.cell_height

        def prepare(item):
            index, source = item
            return load_thumbnail(index, source, w, h)

        if self.workers == 1:
            for item in enumerate(images):
                yield prepare(item)
            return
        with ThreadPoolExecutor(max_workers=self.workers) as ex:
            # map() yields in submission order, keeping the paste order stable
            yield from ex.map(prepare, enumerate(images))

    def _paint_footer(self, canvas: Image.Image, layout: SheetLayout, metadata: MetadataRecord):
        """Draw the separator rule and paste the footer text block."""
        draw = ImageDraw.Draw(canvas)
        x0 = layout.margin
        draw.line([(x0, layout.rule_y), (x0 + layout.content_width - 1, layout.rule_y)],
                  fill=RULE_COLOR, width=1)

        if layout.footer_height <= 0:
            logger.debug("No footer band below the grid, skipping footer text")
            return
        overlay = render_footer(metadata, layout.content_width, layout.footer_height)
        if overlay is not None:
            canvas.paste(overlay, (layout.margin, layout.footer_top), overlay)
            overlay.close()
