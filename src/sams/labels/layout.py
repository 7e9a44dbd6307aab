"""Page geometry for label sheets.

Everything here is a pure function of physical dimensions: millimetres go
in, pixel geometry comes out.  A4 cells are always square.
"""

import math
from dataclasses import dataclass

from sams.utils.constants import (
    A4_HEIGHT_MM,
    A4_WIDTH_MM,
    FIT_MODES,
    MM_PER_INCH,
    ORIENTATIONS,
)


@dataclass(frozen=True)
class PageLayout:
    orientation: str
    dpi: float
    page_width: int
    page_height: int
    margin: int
    gap: int
    columns: int
    rows: int
    cell_width: int
    cell_height: int

    @property
    def capacity(self) -> int:
        return max(1, self.rows * self.columns)

    def cell_origin(self, index: int) -> tuple[int, int]:
        """Top-left pixel of the *index*-th cell in row-major order."""
        row, col = divmod(index, self.columns)
        return (
            self.margin + col * (self.cell_width + self.gap),
            self.margin + row * (self.cell_height + self.gap),
        )


def mm_to_px(mm: float, dpi: float) -> int:
    """Convert millimetres to whole pixels at *dpi*."""
    return round(mm / MM_PER_INCH * dpi)


def check_orientation(orientation: str):
    if orientation not in ORIENTATIONS:
        raise ValueError(
            f"orientation must be one of {ORIENTATIONS}, got {orientation!r}"
        )


def check_fit(fit: str):
    if fit not in FIT_MODES:
        raise ValueError(f"fit must be one of {FIT_MODES}, got {fit!r}")


def compute_a4_layout(
    orientation: str = "portrait",
    columns: int = 3,
    margin_mm: float = 10,
    gap_mm: float = 4,
    dpi: float = 96,
) -> PageLayout:
    """Lay out *columns* square cells on an A4 page.

    Use ``dpi=96`` for on-screen previews and ``dpi=192`` for print-quality
    exports.
    """
    check_orientation(orientation)
    if columns < 1:
        raise ValueError("columns must be at least 1")
    if dpi <= 0:
        raise ValueError("dpi must be positive")
    if margin_mm < 0 or gap_mm < 0:
        raise ValueError("margin and gap cannot be negative")

    width_mm, height_mm = A4_WIDTH_MM, A4_HEIGHT_MM
    if orientation == "landscape":
        width_mm, height_mm = height_mm, width_mm

    page_w = mm_to_px(width_mm, dpi)
    page_h = mm_to_px(height_mm, dpi)
    margin = mm_to_px(margin_mm, dpi)
    gap = mm_to_px(gap_mm, dpi)

    cell_w = max(1, math.floor(
        (page_w - 2 * margin - gap * (columns - 1)) / columns
    ))
    cell_h = cell_w
    rows = max(1, math.floor((page_h - 2 * margin + gap) / (cell_h + gap)))

    return PageLayout(
        orientation=orientation,
        dpi=dpi,
        page_width=page_w,
        page_height=page_h,
        margin=margin,
        gap=gap,
        columns=columns,
        rows=rows,
        cell_width=cell_w,
        cell_height=cell_h,
    )


def fit_size(src: tuple[int, int], box: tuple[int, int],
             fit: str = "contain") -> tuple[int, int]:
    """Scale *src* to *box* keeping its aspect ratio.

    ``contain`` returns a size inside the box; ``cover`` returns a size that
    covers the box (one side overflows and is cropped by the caller).
    """
    check_fit(fit)
    src_w, src_h = src
    box_w, box_h = box
    ratios = (box_w / src_w, box_h / src_h)
    scale = min(ratios) if fit == "contain" else max(ratios)
    return max(1, round(src_w * scale)), max(1, round(src_h * scale))
