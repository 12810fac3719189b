"""Data model classes, constants and error types for Contact Sheet.

All layout math happens in 300 DPI pixel space.
"""

import os
from dataclasses import dataclass, field

from PIL import Image


# === Constants (all layout math in 300 DPI pixel space) ===
DPI = 300
MM_PER_INCH = 25.4
SHEET_SIZE_MM = 120.0          # 120 x 120 mm print

GRID_ROWS = 6
GRID_COLS = 6
MAX_IMAGES = GRID_ROWS * GRID_COLS

MARGIN = 12                    # ~1mm at 300 DPI
CELL_PADDING = 4               # ~0.3mm between cells, rows and columns
CELL_WIDTH = 228
CELL_HEIGHT = 175

FOOTER_OFFSET = 20             # gap between grid bottom and footer block
RULE_OFFSET = 8                # separator rule sits this far below the grid

JPEG_QUALITY = 95
JPEG_EXTENSIONS = ('.jpg', '.jpeg')

WHITE = (255, 255, 255)
RULE_COLOR = (224, 224, 224)   # #E0E0E0


# === Errors ===

class ContactSheetError(Exception):
    """Base class for contact sheet failures."""


class ConfigurationError(ContactSheetError):
    """Fixed geometry constants do not fit on the sheet."""


class EmptyInputError(ContactSheetError):
    """No qualifying images were supplied."""


class PerImageDecodeError(ContactSheetError):
    """A single source image could not be decoded or processed."""

    def __init__(self, source: "SourceImage", reason: str):
        super().__init__(f"{source.displayed_filename}: {reason}")
        self.source = source
        self.reason = reason


class OutputWriteError(ContactSheetError):
    """The finished sheet could not be written."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Could not write {path}: {reason}")
        self.path = path
        self.reason = reason


# === Configuration ===

@dataclass(frozen=True)
class PhysicalSheetSpec:
    """Physical print size of the square sheet."""
    size_mm: float = SHEET_SIZE_MM
    dpi: int = DPI

    @property
    def canvas_px(self) -> int:
        return round(self.size_mm / MM_PER_INCH * self.dpi)


@dataclass(frozen=True)
class GridSpec:
    """Thumbnail grid geometry, in pixels.

    The cell sizes are hand-tuned and do not fill the canvas exactly; the
    leftover vertical space belongs to the footer.
    """
    rows: int = GRID_ROWS
    cols: int = GRID_COLS
    margin_px: int = MARGIN
    cell_padding_px: int = CELL_PADDING
    cell_width_px: int = CELL_WIDTH
    cell_height_px: int = CELL_HEIGHT

    @property
    def capacity(self) -> int:
        return self.rows * self.cols

    @property
    def grid_width_px(self) -> int:
        return self.cols * self.cell_width_px + (self.cols - 1) * self.cell_padding_px

    @property
    def grid_height_px(self) -> int:
        return self.rows * self.cell_height_px + (self.rows - 1) * self.cell_padding_px


@dataclass(frozen=True)
class SheetConfig:
    """Validated, immutable configuration for one sheet.

    Construct once at startup and pass it to the LayoutEngine and
    SheetCompositor. Raises ConfigurationError when the geometry does not fit.
    """
    sheet: PhysicalSheetSpec = field(default_factory=PhysicalSheetSpec)
    grid: GridSpec = field(default_factory=GridSpec)
    footer_offset_px: int = FOOTER_OFFSET
    rule_offset_px: int = RULE_OFFSET
    jpeg_quality: int = JPEG_QUALITY

    def __post_init__(self):
        self.validate()

    @property
    def canvas_px(self) -> int:
        return self.sheet.canvas_px

    @property
    def footer_top(self) -> int:
        return self.grid.margin_px + self.grid.grid_height_px + self.footer_offset_px

    @property
    def footer_height(self) -> int:
        return self.canvas_px - self.footer_top - self.grid.margin_px

    def validate(self):
        s, g = self.sheet, self.grid
        if s.size_mm <= 0 or s.dpi <= 0:
            raise ConfigurationError(
                f"Sheet size and DPI must be positive (got {s.size_mm}mm @ {s.dpi} DPI)")
        if g.rows <= 0 or g.cols <= 0:
            raise ConfigurationError(f"Grid must have at least one cell (got {g.rows}x{g.cols})")
        if g.cell_width_px <= 0 or g.cell_height_px <= 0:
            raise ConfigurationError(
                f"Cell size must be positive (got {g.cell_width_px}x{g.cell_height_px})")
        if min(g.margin_px, g.cell_padding_px, self.footer_offset_px, self.rule_offset_px) < 0:
            raise ConfigurationError("Margins, padding and offsets must not be negative")
        if not 1 <= self.jpeg_quality <= 100:
            raise ConfigurationError(f"JPEG quality must be 1-100 (got {self.jpeg_quality})")

        canvas = self.canvas_px
        if 2 * g.margin_px + g.grid_width_px > canvas:
            raise ConfigurationError(
                f"Grid width {g.grid_width_px}px plus margins exceeds canvas {canvas}px")
        if 2 * g.margin_px + g.grid_height_px > canvas:
            raise ConfigurationError(
                f"Grid height {g.grid_height_px}px plus margins exceeds canvas {canvas}px")
        if self.footer_height < 0:
            raise ConfigurationError(
                f"No room for the footer: it would start at {self.footer_top}px "
                f"on a {canvas}px canvas")


# === Data Model ===

@dataclass(frozen=True)
class SourceImage:
    """Read-only reference to a JPEG on disk."""
    path: str
    displayed_filename: str

    @classmethod
    def from_path(cls, path) -> "SourceImage":
        path = os.fspath(path)
        return cls(path=path, displayed_filename=os.path.basename(path))


@dataclass(frozen=True)
class CellPlacement:
    """Pixel origin of one grid cell (row-major index)."""
    index: int
    row: int
    col: int
    origin_x: int
    origin_y: int


@dataclass(frozen=True)
class SheetLayout:
    """Complete pixel geometry for one sheet."""
    canvas_px: int
    cell_width: int
    cell_height: int
    margin: int
    cells: tuple[CellPlacement, ...]
    footer_top: int
    footer_height: int
    rule_y: int
    content_width: int

    @property
    def capacity(self) -> int:
        return len(self.cells)


FOOTER_LABELS = (
    ('serial_number', 'Roll'),
    ('laboratory', 'Scanned by'),
    ('date', 'Date'),
    ('notes', 'Notes'),
)


@dataclass(frozen=True)
class MetadataRecord:
    """Optional footer fields. Blank values are treated as absent."""
    serial_number: str | None = None
    laboratory: str | None = None
    date: str | None = None
    notes: str | None = None

    def __post_init__(self):
        for name, _ in FOOTER_LABELS:
            value = getattr(self, name)
            if value is not None:
                value = str(value).strip() or None
            object.__setattr__(self, name, value)

    def fields(self) -> list[tuple[str, str]]:
        """Present fields as (label, value) pairs, in footer order."""
        return [(label, getattr(self, name)) for name, label in FOOTER_LABELS
                if getattr(self, name) is not None]

    @property
    def is_empty(self) -> bool:
        return not self.fields()


@dataclass
class ThumbnailResult:
    """Outcome of preparing one source image: a thumbnail or a failure reason."""
    index: int
    source: SourceImage
    image: Image.Image | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.image is not None

    def as_error(self) -> PerImageDecodeError:
        return PerImageDecodeError(self.source, self.error or "unknown error")


@dataclass
class SheetResult:
    """A composed sheet plus what happened while building it."""
    image: Image.Image
    layout: SheetLayout
    placed: list[CellPlacement] = field(default_factory=list)
    skipped: list[ThumbnailResult] = field(default_factory=list)
    footer_lines: list[str] = field(default_factory=list)

    @property
    def warnings(self) -> list[str]:
        return [str(r.as_error()) for r in self.skipped]
