"""Save composed labels to disk as PNG files or a printable A4 PDF.

The PDF places labels on the same square-cell grid as
:func:`~sams.labels.layout.compute_a4_layout`, starting a new page every
``capacity`` labels::

    from sams.labels.export import generate_label_pdf

    pdf_path = generate_label_pdf(label_data_urls, columns=4)
"""

import os
import tempfile
from pathlib import Path

from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from sams.labels.errors import EmptySheetError
from sams.labels.images import decode_data_url, load_image
from sams.labels.layout import compute_a4_layout
from sams.utils.constants import A4_HEIGHT_MM, A4_WIDTH_MM


def save_data_url(data_url: str, path) -> Path:
    """Write a PNG data URL to *path*, creating parent folders."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(decode_data_url(data_url))
    return path


def generate_label_pdf(
    images: list,
    output_path: str | None = None,
    *,
    orientation: str = "portrait",
    columns: int = 3,
    margin_mm: float = 10,
    gap_mm: float = 4,
) -> str:
    """Generate a multi-page A4 PDF of label images.

    Args:
        images: Label images (data URLs, bytes, paths or PIL images).
        output_path: Optional output PDF path.  If *None*, creates a
            temp file in the system temp directory.
        orientation, columns, margin_mm, gap_mm: Page grid, as for
            :func:`compute_a4_layout`.

    Returns:
        Absolute path to the generated PDF file.
    """
    if not images:
        raise EmptySheetError("cannot export a PDF without images")
    if not output_path:
        output_path = os.path.join(
            tempfile.gettempdir(), "sams_qr_labels.pdf"
        )

    # 72 dpi makes one layout pixel one PDF point
    layout = compute_a4_layout(
        orientation=orientation, columns=columns,
        margin_mm=margin_mm, gap_mm=gap_mm, dpi=72,
    )
    page_w, page_h = A4_WIDTH_MM * mm, A4_HEIGHT_MM * mm
    if orientation == "landscape":
        page_w, page_h = page_h, page_w

    c = canvas.Canvas(output_path, pagesize=(page_w, page_h))
    c.setTitle("SAMS QR Labels")

    for idx, src in enumerate(images):
        slot = idx % layout.capacity
        # New page if needed (except for the very first label)
        if idx > 0 and slot == 0:
            c.showPage()

        left, top = layout.cell_origin(slot)
        img = load_image(src)
        scale = min(layout.cell_width / img.width,
                    layout.cell_height / img.height)
        draw_w, draw_h = img.width * scale, img.height * scale
        x = left + (layout.cell_width - draw_w) / 2
        # PDF origin is bottom-left
        y = (page_h - top - layout.cell_height
             + (layout.cell_height - draw_h) / 2)
        c.drawImage(ImageReader(img), x, y, width=draw_w, height=draw_h,
                    mask="auto")

    c.save()
    return os.path.abspath(output_path)
