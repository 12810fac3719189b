"""Layout engine: fixed-grid pixel geometry for the contact sheet.

Pure computation, no I/O. Cells are numbered in row-major order:
index 0 is the top-left cell, index ``cols`` starts the second row.
"""

from models import SheetConfig, SheetLayout, CellPlacement


class LayoutEngine:
    """Maps a SheetConfig to canvas size, cell origins and footer bounds."""

    def __init__(self, config: SheetConfig | None = None):
        c = config or SheetConfig()
        self.config = c
        self.canvas = c.canvas_px
        self.rows = c.grid.rows
        self.cols = c.grid.cols
        self.margin = c.grid.margin_px
        self.padding = c.grid.cell_padding_px
        self.cell_w = c.grid.cell_width_px
        self.cell_h = c.grid.cell_height_px

    # ------------------------------------------------------------------ #
    #  Public API                                                         #
    # ------------------------------------------------------------------ #

    @property
    def capacity(self) -> int:
        return self.rows * self.cols

    def cell(self, index: int) -> CellPlacement:
        """Origin of the cell holding the *index*-th image."""
        if not 0 <= index < self.capacity:
            raise IndexError(f"Cell index {index} outside a {self.rows}x{self.cols} grid")
        row, col = divmod(index, self.cols)
        return CellPlacement(
            index=index,
            row=row,
            col=col,
            origin_x=self.margin + col * (self.cell_w + self.padding),
            origin_y=self.margin + row * (self.cell_h + self.padding),
        )

    def layout(self) -> SheetLayout:
        """Compute the full sheet geometry once."""
        grid_bottom = self.margin + self.config.grid.grid_height_px
        return SheetLayout(
            canvas_px=self.canvas,
            cell_width=self.cell_w,
            cell_height=self.cell_h,
            margin=self.margin,
            cells=tuple(self.cell(i) for i in range(self.capacity)),
            footer_top=self.config.footer_top,
            footer_height=self.config.footer_height,
            rule_y=grid_bottom + self.config.rule_offset_px,
            content_width=self.canvas - 2 * self.margin,
        )
