"""Application-wide constants."""

APP_NAME = "SAMS"
APP_VERSION = "1.0.0"
APP_ORGANIZATION = "SAMS Project"

# ── Page geometry ────────────────────────────────────────────────
MM_PER_INCH = 25.4
A4_WIDTH_MM = 210
A4_HEIGHT_MM = 297

ORIENTATIONS = ("portrait", "landscape")
FIT_MODES = ("contain", "cover")

# ── Label card (pixels) ──────────────────────────────────────────
LABEL_WIDTH = 360
LABEL_QR_SIZE = 300
LABEL_PADDING = 16
LABEL_TOP_BAND = 18
LABEL_GAP = 8
LABEL_BOTTOM_BAND = 16
LABEL_BORDER_RADIUS = 12
LABEL_BORDER_WIDTH = 2
LABEL_FONT_SIZE = 12
# Identifier baseline sits this far below the bottom edge of the QR
LABEL_BOTTOM_BASELINE = 18

DEFAULT_TOP_TEXT = "Scan to view asset"
DEFAULT_BORDER_COLOR = "#E5E7EB"
DEFAULT_TEXT_COLOR = "#111827"
DEFAULT_BACKGROUND_COLOR = "#FFFFFF"

# Regular / bold TrueType faces tried in order before Pillow's built-in font
SANS_FONTS = ("DejaVuSans.ttf", "Arial.ttf", "arial.ttf",
              "LiberationSans-Regular.ttf", "Helvetica.ttc")
SANS_BOLD_FONTS = ("DejaVuSans-Bold.ttf", "Arial Bold.ttf", "arialbd.ttf",
                   "LiberationSans-Bold.ttf")

# ── Raw QR bitmap ────────────────────────────────────────────────
QR_IMAGE_WIDTH = 512
QR_IMAGE_MARGIN = 2

# ── Request cache ────────────────────────────────────────────────
DEFAULT_CACHE_TTL_MS = 60_000

# ── Print flow timing (milliseconds) ────────────────────────────
PRINT_LOAD_FALLBACK_MS = 300
PRINT_CLEANUP_DELAY_MS = 1000

# ── QR code records ──────────────────────────────────────────────
QR_CODE_DEFAULT_STATUS = "Generated"
QR_CACHE_PREFIX = "qrcodes:"
