"""Command line entry point: generate, export or print asset QR labels."""

import logging
import sys
from pathlib import Path

from sams.config import Config
from sams.utils.constants import APP_NAME, APP_ORGANIZATION, APP_VERSION

USAGE = (
    "Usage: sams-labels <png|sheet|pdf|print> <asset_id> [asset_id ...]\n"
    "  png    one PNG per asset in the export directory\n"
    "  sheet  one grid PNG with every label\n"
    "  pdf    paginated A4 PDF\n"
    "  print  one asset per label on the label printer"
)


def configure_logging(level: str | None = None):
    """Configure root logging from ``Config.LOG_LEVEL``."""
    logging.basicConfig(
        level=(level or Config.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _print_labels(labels: list[str]) -> int:
    """Run a Qt event loop just long enough to print *labels*."""
    from PySide6.QtWidgets import QApplication

    from sams.labels.printing import LabelPrintJob

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setOrganizationName(APP_ORGANIZATION)
    app.setApplicationVersion(APP_VERSION)

    job = LabelPrintJob(
        labels,
        width_in=Config.LABEL_WIDTH_IN,
        height_in=Config.LABEL_HEIGHT_IN,
        orientation=Config.LABEL_ORIENTATION,
        fit=Config.LABEL_FIT,
    )
    job.finished.connect(app.quit)
    job.start()
    return app.exec()


def main(argv: list[str] | None = None) -> int:
    """Generate labels for the asset ids on the command line."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 2:
        print(USAGE)
        return 1

    configure_logging()
    mode, asset_ids = args[0].lower(), args[1:]
    if mode not in ("png", "sheet", "pdf", "print"):
        print(f"Unknown mode: {mode}.\n{USAGE}")
        return 1

    from sams.labels.export import generate_label_pdf, save_data_url
    from sams.labels.sheets import compose_grid_sheet
    from sams.utils.formatters import label_filename
    from sams.utils.qr_generator import generate_asset_label

    labels = [generate_asset_label(asset_id) for asset_id in asset_ids]
    out_dir = Path(Config.EXPORT_DIRECTORY)

    if mode == "png":
        for asset_id, label in zip(asset_ids, labels):
            path = save_data_url(label, out_dir / label_filename(asset_id))
            print(f"Saved {path}")
    elif mode == "sheet":
        sheet = compose_grid_sheet(labels, columns=Config.SHEET_COLUMNS)
        path = save_data_url(sheet, out_dir / "qr-labels-sheet.png")
        print(f"Saved {len(labels)} label(s) to {path}")
    elif mode == "pdf":
        out_dir.mkdir(parents=True, exist_ok=True)
        path = generate_label_pdf(
            labels,
            str(out_dir / "qr-labels.pdf"),
            columns=Config.SHEET_COLUMNS,
            margin_mm=Config.SHEET_MARGIN_MM,
            gap_mm=Config.SHEET_GAP_MM,
        )
        print(f"Saved {len(labels)} label(s) to {path}")
    else:
        return _print_labels(labels)
    return 0


if __name__ == "__main__":
    sys.exit(main())
