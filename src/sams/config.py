"""Application configuration: loads .env, then overrides from settings.json."""

import json
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Find the project root (where .env lives)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

logger = logging.getLogger(__name__)

# Runtime settings file for in-app configuration
_SETTINGS_FILE = _PROJECT_ROOT / "data" / "settings.json"


def _load_settings() -> dict:
    """Load saved runtime settings from JSON file."""
    if _SETTINGS_FILE.exists():
        try:
            return json.loads(_SETTINGS_FILE.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Ignoring unreadable %s: %s", _SETTINGS_FILE, exc)
    return {}


def _save_settings(settings: dict):
    """Persist runtime settings to JSON file."""
    _SETTINGS_FILE.parent.mkdir(parents=True, exist_ok=True)
    _SETTINGS_FILE.write_text(
        json.dumps(settings, indent=2), encoding="utf-8"
    )


# Load saved settings once at import time
_runtime = _load_settings()


class Config:
    """Central configuration: .env defaults, settings.json overrides."""

    # Paths
    PROJECT_ROOT: Path = _PROJECT_ROOT
    EXPORT_DIRECTORY: str = _runtime.get(
        "export_directory",
        os.getenv("EXPORT_DIRECTORY", str(_PROJECT_ROOT / "data" / "labels")),
    )

    # QR payloads point at the public asset page
    PUBLIC_BASE_URL: str = _runtime.get(
        "public_base_url",
        os.getenv("PUBLIC_BASE_URL", "https://samsproject.in"),
    )

    # Request cache
    CACHE_TTL_MS: int = int(_runtime.get(
        "cache_ttl_ms",
        os.getenv("CACHE_TTL_MS", "60000"),
    ))

    # Label card
    LABEL_TOP_TEXT: str = _runtime.get(
        "label_top_text",
        os.getenv("LABEL_TOP_TEXT", "Scan to view asset"),
    )

    # Physical label printer (settings.json overrides .env)
    LABEL_WIDTH_IN: float = float(_runtime.get(
        "label_width_in",
        os.getenv("LABEL_WIDTH_IN", "2.0"),
    ))
    LABEL_HEIGHT_IN: float = float(_runtime.get(
        "label_height_in",
        os.getenv("LABEL_HEIGHT_IN", "2.0"),
    ))
    LABEL_ORIENTATION: str = _runtime.get(
        "label_orientation",
        os.getenv("LABEL_ORIENTATION", "portrait"),
    )
    LABEL_FIT: str = _runtime.get(
        "label_fit",
        os.getenv("LABEL_FIT", "contain"),
    )

    # A4 sheets
    SHEET_COLUMNS: int = int(_runtime.get(
        "sheet_columns",
        os.getenv("SHEET_COLUMNS", "3"),
    ))
    SHEET_MARGIN_MM: float = float(_runtime.get(
        "sheet_margin_mm",
        os.getenv("SHEET_MARGIN_MM", "10"),
    ))
    SHEET_GAP_MM: float = float(_runtime.get(
        "sheet_gap_mm",
        os.getenv("SHEET_GAP_MM", "4"),
    ))

    # Label printer resolution
    PRINT_DPI: int = int(os.getenv("PRINT_DPI", "192"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def update_label_settings(cls, width_in: float, height_in: float,
                              orientation: str, fit: str):
        """Update physical label printer settings and persist to disk."""
        cls.LABEL_WIDTH_IN = width_in
        cls.LABEL_HEIGHT_IN = height_in
        cls.LABEL_ORIENTATION = orientation
        cls.LABEL_FIT = fit

        settings = _load_settings()
        settings["label_width_in"] = width_in
        settings["label_height_in"] = height_in
        settings["label_orientation"] = orientation
        settings["label_fit"] = fit
        _save_settings(settings)

    @classmethod
    def update_sheet_settings(cls, columns: int, margin_mm: float,
                              gap_mm: float):
        """Update A4 sheet layout defaults and persist."""
        cls.SHEET_COLUMNS = columns
        cls.SHEET_MARGIN_MM = margin_mm
        cls.SHEET_GAP_MM = gap_mm

        settings = _load_settings()
        settings["sheet_columns"] = columns
        settings["sheet_margin_mm"] = margin_mm
        settings["sheet_gap_mm"] = gap_mm
        _save_settings(settings)

    @classmethod
    def update_top_text(cls, text: str):
        """Update the default caption printed above the QR code."""
        cls.LABEL_TOP_TEXT = text
        settings = _load_settings()
        settings["label_top_text"] = text
        _save_settings(settings)

    @classmethod
    def update_public_base_url(cls, base_url: str):
        """Update the base URL encoded into asset QR codes and persist."""
        cls.PUBLIC_BASE_URL = base_url
        settings = _load_settings()
        settings["public_base_url"] = base_url
        _save_settings(settings)

    @classmethod
    def update_cache_ttl(cls, ttl_ms: int):
        """Update the default request cache lifetime (milliseconds)."""
        cls.CACHE_TTL_MS = ttl_ms
        settings = _load_settings()
        settings["cache_ttl_ms"] = ttl_ms
        _save_settings(settings)

