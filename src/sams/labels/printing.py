"""Print labels on a physical label printer, one label per page.

The print flow mirrors what a user does by hand: render every label onto
its own page of exactly the label stock's size, open the native print
dialog once the pages are ready, then tidy up the temporary files.

Job states::

    idle -> frame-built -> image-loaded | timed-out
         -> print-triggered -> frame-removed

The "frame" is a temporary directory holding one PNG per page plus a PDF
with the same pages, sized ``width_in`` x ``height_in`` inches as given.
``orientation`` does not change the page size; it is handed to the printer
as the page layout orientation.  The print dialog is opened as soon as the
first page image decodes, or after a short fallback delay if it does not.
There are no retries, and cancelling the dialog is not reported back.
"""

import logging
import shutil
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from PIL import Image
from PySide6.QtCore import QCoreApplication, QObject, QTimer, Signal
from PySide6.QtGui import QImage
from reportlab.lib.units import inch
from reportlab.pdfgen import canvas

from sams.config import Config
from sams.labels.images import fit_image, load_image, paste_centered
from sams.labels.layout import check_fit, check_orientation, fit_size
from sams.utils.constants import (
    DEFAULT_BACKGROUND_COLOR,
    PRINT_CLEANUP_DELAY_MS,
    PRINT_LOAD_FALLBACK_MS,
)

logger = logging.getLogger(__name__)


class PrintState(Enum):
    IDLE = "idle"
    FRAME_BUILT = "frame-built"
    IMAGE_LOADED = "image-loaded"
    TIMED_OUT = "timed-out"
    PRINT_TRIGGERED = "print-triggered"
    FRAME_REMOVED = "frame-removed"


@dataclass
class PrintFrame:
    directory: Path
    width_in: float
    height_in: float
    orientation: str = "portrait"
    pages: list[Path] = field(default_factory=list)
    pdf_path: Path | None = None


def check_label_size(width_in: float, height_in: float):
    """Reject label stock without a positive width and height."""
    if width_in <= 0 or height_in <= 0:
        raise ValueError(
            f"label width and height must be positive, "
            f"got {width_in!r} x {height_in!r}"
        )


def build_print_frame(
    images: list,
    width_in: float,
    height_in: float,
    orientation: str = "portrait",
    fit: str = "contain",
    dpi: int | None = None,
) -> PrintFrame:
    """Render each image onto its own label-sized page in a temp folder.

    The temp folder is removed again if any page or the PDF fails.
    """
    check_fit(fit)
    check_orientation(orientation)
    check_label_size(width_in, height_in)
    dpi = dpi or Config.PRINT_DPI
    page_px = (round(width_in * dpi), round(height_in * dpi))

    frame = PrintFrame(
        directory=Path(tempfile.mkdtemp(prefix="sams_labels_")),
        width_in=width_in,
        height_in=height_in,
        orientation=orientation,
    )
    try:
        for idx, src in enumerate(images, start=1):
            page = Image.new("RGB", page_px, DEFAULT_BACKGROUND_COLOR)
            fitted = fit_image(load_image(src), page_px, fit)
            paste_centered(page, fitted, (0, 0, *page_px))
            path = frame.directory / f"label_{idx:03d}.png"
            page.save(path, format="PNG", dpi=(dpi, dpi))
            frame.pages.append(path)

        frame.pdf_path = frame.directory / "labels.pdf"
        c = canvas.Canvas(str(frame.pdf_path),
                          pagesize=(width_in * inch, height_in * inch))
        c.setTitle("SAMS Labels")
        for path in frame.pages:
            c.drawImage(str(path), 0, 0,
                        width=width_in * inch, height=height_in * inch)
            c.showPage()
        c.save()
    except BaseException:
        shutil.rmtree(frame.directory, ignore_errors=True)
        raise
    return frame


def native_print(frame: PrintFrame) -> bool:
    """Open the system print dialog and paint each page if accepted.

    Returns ``False`` when the user cancels the dialog.
    """
    from PySide6.QtCore import QMarginsF, QRectF, QSizeF
    from PySide6.QtGui import QPageLayout, QPageSize, QPainter
    from PySide6.QtPrintSupport import QPrintDialog, QPrinter

    printer = QPrinter(QPrinter.PrinterMode.HighResolution)
    # Qt describes page sizes in portrait and rotates them via the layout
    short, long = sorted((frame.width_in, frame.height_in))
    page_size = QPageSize(
        QSizeF(short, long), QPageSize.Unit.Inch, "SAMS Label",
        QPageSize.SizeMatchPolicy.ExactMatch,
    )
    orientation = (
        QPageLayout.Orientation.Landscape
        if frame.orientation == "landscape"
        else QPageLayout.Orientation.Portrait
    )
    printer.setPageLayout(
        QPageLayout(page_size, orientation, QMarginsF(0, 0, 0, 0))
    )

    dialog = QPrintDialog(printer)
    if dialog.exec() != QPrintDialog.DialogCode.Accepted:
        return False

    painter = QPainter()
    if not painter.begin(printer):
        raise RuntimeError("Could not start painting on the printer")
    try:
        viewport = painter.viewport()
        for idx, path in enumerate(frame.pages):
            if idx:
                printer.newPage()
            image = QImage(str(path))
            w, h = fit_size((image.width(), image.height()),
                            (viewport.width(), viewport.height()),
                            "contain")
            target = QRectF(viewport.x() + (viewport.width() - w) / 2,
                            viewport.y() + (viewport.height() - h) / 2,
                            w, h)
            painter.drawImage(target, image)
    finally:
        painter.end()
    return True


class LabelPrintJob(QObject):
    """Drive one print run from frame build to cleanup on Qt timers."""

    state_changed = Signal(str)
    finished = Signal()

    def __init__(self, images: list, width_in: float, height_in: float,
                 orientation: str = "portrait", fit: str = "contain",
                 printer=None, dpi: int | None = None,
                 load_fallback_ms: int = PRINT_LOAD_FALLBACK_MS,
                 cleanup_delay_ms: int = PRINT_CLEANUP_DELAY_MS,
                 parent: QObject | None = None):
        super().__init__(parent)
        check_fit(fit)
        check_orientation(orientation)
        check_label_size(width_in, height_in)
        self.images = list(images)
        self.width_in = width_in
        self.height_in = height_in
        self.orientation = orientation
        self.fit = fit
        self.dpi = dpi
        self.printer = printer or native_print
        self.load_fallback_ms = load_fallback_ms
        self.cleanup_delay_ms = cleanup_delay_ms
        self.state = PrintState.IDLE
        self.frame: PrintFrame | None = None

    def _set_state(self, state: PrintState):
        self.state = state
        self.state_changed.emit(state.value)

    def start(self):
        """Build the frame and arm the load and fallback triggers."""
        if self.state is not PrintState.IDLE or not self.images:
            return
        self.frame = build_print_frame(
            self.images, self.width_in, self.height_in,
            self.orientation, self.fit, self.dpi,
        )
        self._set_state(PrintState.FRAME_BUILT)
        QTimer.singleShot(0, self._on_first_page_loaded)
        QTimer.singleShot(self.load_fallback_ms, self._on_load_timeout)

    def _on_first_page_loaded(self):
        if self.state is not PrintState.FRAME_BUILT:
            return
        if QImage(str(self.frame.pages[0])).isNull():
            return  # the fallback timer takes over
        self._set_state(PrintState.IMAGE_LOADED)
        self._trigger_print()

    def _on_load_timeout(self):
        if self.state is not PrintState.FRAME_BUILT:
            return
        self._set_state(PrintState.TIMED_OUT)
        self._trigger_print()

    def _trigger_print(self):
        self._set_state(PrintState.PRINT_TRIGGERED)
        logger.info("Printing %d label(s) at %sx%s in",
                    len(self.frame.pages), self.frame.width_in,
                    self.frame.height_in)
        try:
            self.printer(self.frame)
        except Exception:
            logger.exception("Label printing failed")
        QTimer.singleShot(self.cleanup_delay_ms, self._remove_frame)

    def _remove_frame(self):
        shutil.rmtree(self.frame.directory, ignore_errors=True)
        self._set_state(PrintState.FRAME_REMOVED)
        self.finished.emit()


def print_as_labels(
    images: list,
    *,
    width_in: float | None = None,
    height_in: float | None = None,
    orientation: str | None = None,
    fit: str | None = None,
    printer=None,
):
    """Print each image as one physical label; fire-and-forget.

    Unset options fall back to the label printer settings in
    :class:`~sams.config.Config`.  An empty *images* list does nothing.
    The job is parented to the running Qt application, which keeps it
    alive until its frame is removed.
    """
    if not images:
        return
    app = QCoreApplication.instance()
    if app is None:
        raise RuntimeError("print_as_labels needs a running Qt application")
    job = LabelPrintJob(
        images,
        width_in=Config.LABEL_WIDTH_IN if width_in is None else width_in,
        height_in=Config.LABEL_HEIGHT_IN if height_in is None else height_in,
        orientation=(Config.LABEL_ORIENTATION if orientation is None
                     else orientation),
        fit=Config.LABEL_FIT if fit is None else fit,
        printer=printer,
        parent=app,
    )
    job.finished.connect(job.deleteLater)
    try:
        job.start()
    except Exception:
        job.setParent(None)
        raise
