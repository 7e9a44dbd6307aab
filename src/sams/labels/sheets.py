"""Tile label images onto sheets.

Two flavours:

* :func:`compose_grid_sheet`: a free-size grid that grows to fit every
  image (bulk PNG export, on-screen overview).
* :func:`compose_a4_sheet`: one physical A4 page; images beyond the page
  capacity are left off and the caller paginates with
  :func:`paginate_a4_sheets`.
"""

import math
from dataclasses import dataclass

from PIL import Image

from sams.labels.errors import EmptySheetError
from sams.labels.images import (
    fit_image,
    load_image,
    paste_centered,
    to_data_url,
)
from sams.labels.layout import PageLayout, compute_a4_layout
from sams.utils.constants import DEFAULT_BACKGROUND_COLOR


@dataclass
class SheetResult:
    data_url: str
    capacity: int
    placed: int
    layout: PageLayout


def compose_grid_sheet(
    images: list,
    *,
    columns: int = 3,
    cell_width: int | None = None,
    cell_height: int | None = None,
    gap: int = 16,
    padding: int = 16,
    background: str = DEFAULT_BACKGROUND_COLOR,
) -> str:
    """Tile *images* row-major into one PNG sized to fit them exactly.

    Cell size defaults to the largest image.  Raises
    :class:`EmptySheetError` when *images* is empty.
    """
    if not images:
        raise EmptySheetError("cannot compose a sheet without images")
    if columns < 1:
        raise ValueError("columns must be at least 1")

    decoded = [load_image(src) for src in images]
    cell_w = (max(img.width for img in decoded) if cell_width is None
              else cell_width)
    cell_h = (max(img.height for img in decoded) if cell_height is None
              else cell_height)
    if cell_w < 1 or cell_h < 1:
        raise ValueError("cell width and height must be at least 1")

    used_cols = min(columns, len(decoded))
    rows = math.ceil(len(decoded) / used_cols)
    width = 2 * padding + used_cols * cell_w + gap * (used_cols - 1)
    height = 2 * padding + rows * cell_h + gap * (rows - 1)

    sheet = Image.new("RGB", (width, height), background)
    for idx, img in enumerate(decoded):
        row, col = divmod(idx, used_cols)
        left = padding + col * (cell_w + gap)
        top = padding + row * (cell_h + gap)
        _place(sheet, img, (left, top, cell_w, cell_h))
    return to_data_url(sheet)


def compose_a4_sheet(
    images: list,
    *,
    orientation: str = "portrait",
    columns: int = 3,
    margin_mm: float = 10,
    gap_mm: float = 4,
    dpi: float = 96,
    background: str = DEFAULT_BACKGROUND_COLOR,
) -> SheetResult:
    """Place up to one page's worth of *images* on an A4 canvas.

    Images past the page capacity are ignored; compare ``placed`` with
    ``len(images)`` to detect that.
    """
    if not images:
        raise EmptySheetError("cannot compose a sheet without images")
    layout = compute_a4_layout(
        orientation=orientation, columns=columns,
        margin_mm=margin_mm, gap_mm=gap_mm, dpi=dpi,
    )
    on_page = images[: layout.capacity]

    sheet = Image.new(
        "RGB", (layout.page_width, layout.page_height), background
    )
    for idx, src in enumerate(on_page):
        left, top = layout.cell_origin(idx)
        _place(sheet, load_image(src),
               (left, top, layout.cell_width, layout.cell_height))

    return SheetResult(
        data_url=to_data_url(sheet),
        capacity=layout.capacity,
        placed=len(on_page),
        layout=layout,
    )


def paginate_a4_sheets(images: list, **layout_options) -> list[SheetResult]:
    """Compose as many A4 sheets as needed to hold every image."""
    if not images:
        raise EmptySheetError("cannot compose a sheet without images")
    capacity = compute_a4_layout(**{
        k: v for k, v in layout_options.items() if k != "background"
    }).capacity
    return [
        compose_a4_sheet(images[start:start + capacity], **layout_options)
        for start in range(0, len(images), capacity)
    ]


def _place(sheet: Image.Image, img: Image.Image,
           cell: tuple[int, int, int, int]):
    """Fit *img* inside *cell* and paste it centered."""
    _, _, cell_w, cell_h = cell
    if img.width > cell_w or img.height > cell_h:
        img = fit_image(img, (cell_w, cell_h), "contain")
    paste_centered(sheet, img, cell)
