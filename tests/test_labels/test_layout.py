"""Tests for A4 page geometry and fit sizing."""

import pytest

from sams.labels.layout import compute_a4_layout, fit_size, mm_to_px


class TestMmToPx:
    def test_one_inch_at_96_dpi(self):
        assert mm_to_px(25.4, 96) == 96

    def test_rounds_to_nearest_pixel(self):
        assert mm_to_px(10, 96) == 38
        assert mm_to_px(4, 96) == 15


class TestComputeA4Layout:
    def test_default_portrait_screen_layout(self):
        layout = compute_a4_layout(
            orientation="portrait", columns=3, margin_mm=10, gap_mm=4, dpi=96,
        )
        assert (layout.page_width, layout.page_height) == (794, 1123)
        assert layout.margin == 38
        assert layout.gap == 15
        assert layout.cell_width == 229
        assert layout.cell_height == layout.cell_width
        assert layout.rows == 4
        assert layout.capacity == 12

    def test_landscape_swaps_page_sides(self):
        layout = compute_a4_layout(orientation="landscape")
        assert (layout.page_width, layout.page_height) == (1123, 794)
        assert layout.cell_width == 339
        assert layout.rows == 2
        assert layout.capacity == 6

    def test_print_resolution(self):
        layout = compute_a4_layout(dpi=192)
        assert (layout.page_width, layout.page_height) == (1587, 2245)
        assert layout.cell_width == 458
        assert layout.capacity == 12

    def test_cells_are_square(self):
        for columns in range(1, 8):
            layout = compute_a4_layout(columns=columns)
            assert layout.cell_width == layout.cell_height

    def test_rows_never_below_one(self):
        """One landscape column is taller than the page allows."""
        layout = compute_a4_layout(orientation="landscape", columns=1)
        assert layout.rows == 1
        assert layout.capacity == 1

    def test_capacity_is_rows_times_columns(self):
        layout = compute_a4_layout(columns=5, margin_mm=5, gap_mm=2)
        assert layout.capacity == layout.rows * layout.columns
        assert layout.capacity >= 1

    def test_cells_fit_inside_page(self):
        layout = compute_a4_layout(columns=4, margin_mm=12, gap_mm=3)
        right = layout.margin + layout.columns * layout.cell_width + (
            layout.columns - 1) * layout.gap
        bottom = layout.margin + layout.rows * layout.cell_height + (
            layout.rows - 1) * layout.gap
        assert right <= layout.page_width - layout.margin
        assert bottom <= layout.page_height - layout.margin

    def test_cell_origin_row_major(self):
        layout = compute_a4_layout()
        step = layout.cell_width + layout.gap
        assert layout.cell_origin(0) == (layout.margin, layout.margin)
        assert layout.cell_origin(1) == (layout.margin + step, layout.margin)
        assert layout.cell_origin(3) == (layout.margin, layout.margin + step)

    def test_zero_columns_rejected(self):
        with pytest.raises(ValueError):
            compute_a4_layout(columns=0)

    def test_unknown_orientation_rejected(self):
        with pytest.raises(ValueError):
            compute_a4_layout(orientation="diagonal")

    def test_non_positive_dpi_rejected(self):
        with pytest.raises(ValueError):
            compute_a4_layout(dpi=0)

    def test_negative_margin_rejected(self):
        with pytest.raises(ValueError):
            compute_a4_layout(margin_mm=-1)


class TestFitSize:
    def test_contain_fits_inside_box(self):
        assert fit_size((200, 100), (50, 50), "contain") == (50, 25)

    def test_cover_fills_box(self):
        assert fit_size((200, 100), (50, 50), "cover") == (100, 50)

    def test_contain_upscales_small_images(self):
        assert fit_size((10, 20), (100, 100), "contain") == (50, 100)

    def test_unknown_fit_rejected(self):
        with pytest.raises(ValueError):
            fit_size((10, 10), (10, 10), "stretch")
