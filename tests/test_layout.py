"""Unit tests for sheet configuration and the LayoutEngine."""
import pytest

from layout import LayoutEngine
from models import (
    SheetConfig, PhysicalSheetSpec, GridSpec, ConfigurationError,
    MARGIN, CELL_PADDING, CELL_WIDTH, CELL_HEIGHT, MAX_IMAGES,
)


class TestCanvasSize:
    """Physical size to pixel conversion."""

    def test_default_sheet_is_1417px(self):
        assert PhysicalSheetSpec().canvas_px == 1417
        assert SheetConfig().canvas_px == 1417

    @pytest.mark.parametrize('size_mm, dpi', [(120.0, 300), (100.0, 600), (25.4, 72), (50.0, 150)])
    def test_rounds_mm_to_pixels(self, size_mm, dpi):
        spec = PhysicalSheetSpec(size_mm=size_mm, dpi=dpi)
        assert spec.canvas_px == round(size_mm / 25.4 * dpi)

    def test_is_stable(self):
        assert PhysicalSheetSpec(120, 300).canvas_px == PhysicalSheetSpec(120, 300).canvas_px


class TestConfigValidation:
    """Invalid fixed geometry is rejected at construction."""

    def test_default_config_is_valid(self):
        config = SheetConfig()
        assert config.grid.capacity == MAX_IMAGES == 36
        assert config.grid.grid_height_px == 1070

    def test_rejects_non_positive_sheet(self):
        with pytest.raises(ConfigurationError):
            SheetConfig(sheet=PhysicalSheetSpec(size_mm=0))
        with pytest.raises(ConfigurationError):
            SheetConfig(sheet=PhysicalSheetSpec(dpi=-300))

    def test_rejects_grid_taller_than_canvas(self):
        with pytest.raises(ConfigurationError, match="height"):
            SheetConfig(grid=GridSpec(cell_height_px=240))

    def test_rejects_grid_wider_than_canvas(self):
        with pytest.raises(ConfigurationError, match="width"):
            SheetConfig(grid=GridSpec(cell_width_px=240))

    def test_rejects_missing_footer_room(self):
        with pytest.raises(ConfigurationError, match="footer"):
            SheetConfig(grid=GridSpec(cell_height_px=220), footer_offset_px=100)

    def test_rejects_empty_grid(self):
        with pytest.raises(ConfigurationError):
            SheetConfig(grid=GridSpec(rows=0))

    def test_rejects_bad_jpeg_quality(self):
        with pytest.raises(ConfigurationError):
            SheetConfig(jpeg_quality=0)


class TestCellOrigins:
    """Row-major cell placement."""

    def test_first_cell_at_margin(self):
        cell = LayoutEngine().cell(0)
        assert (cell.row, cell.col) == (0, 0)
        assert (cell.origin_x, cell.origin_y) == (MARGIN, MARGIN)

    def test_row_major_order(self):
        engine = LayoutEngine()
        cell = engine.cell(7)
        assert (cell.row, cell.col) == (1, 1)
        assert cell.origin_x == MARGIN + CELL_WIDTH + CELL_PADDING
        assert cell.origin_y == MARGIN + CELL_HEIGHT + CELL_PADDING

    def test_end_of_first_row(self):
        cell = LayoutEngine().cell(5)
        assert (cell.row, cell.col) == (0, 5)
        assert cell.origin_x == 12 + 5 * 232

    def test_out_of_range_index(self):
        engine = LayoutEngine()
        with pytest.raises(IndexError):
            engine.cell(36)
        with pytest.raises(IndexError):
            engine.cell(-1)

    def test_all_cells_inside_canvas(self):
        layout = LayoutEngine().layout()
        assert layout.capacity == 36
        for cell in layout.cells:
            assert cell.origin_x >= 0 and cell.origin_y >= 0
            assert cell.origin_x + layout.cell_width <= layout.canvas_px
            assert cell.origin_y + layout.cell_height <= layout.footer_top

    def test_cells_do_not_overlap(self):
        layout = LayoutEngine().layout()
        boxes = [(c.origin_x, c.origin_y, c.origin_x + layout.cell_width,
                  c.origin_y + layout.cell_height) for c in layout.cells]
        for i, a in enumerate(boxes):
            for b in boxes[i + 1:]:
                assert a[2] <= b[0] or b[2] <= a[0] or a[3] <= b[1] or b[3] <= a[1]


class TestFooterBand:
    """Footer bounds below the grid."""

    def test_footer_geometry(self):
        layout = LayoutEngine().layout()
        assert layout.rule_y == 12 + 1070 + 8
        assert layout.footer_top == 12 + 1070 + 20
        assert layout.footer_height == 1417 - layout.footer_top - 12
        assert layout.content_width == 1417 - 24

    def test_footer_below_grid(self):
        layout = LayoutEngine().layout()
        last = layout.cells[-1]
        assert last.origin_y + layout.cell_height < layout.rule_y < layout.footer_top
