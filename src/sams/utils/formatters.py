"""Formatting utilities for label text and file names."""

import re


def truncate(text: str, max_len: int) -> str:
    """Truncate text with ellipsis if too long."""
    if len(text) > max_len:
        return text[: max_len - 1] + "\u2026"
    return text


def label_filename(asset_id: str) -> str:
    """File name used when a single asset label is saved."""
    safe = re.sub(r"[^A-Za-z0-9._-]+", "_", asset_id.strip()) or "asset"
    return f"qr-code-{safe}.png"
