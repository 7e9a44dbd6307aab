"""Generate QR codes and labelled QR cards for assets.

Each asset QR encodes a direct link to the asset's public page so any phone
camera opens it::

    https://samsproject.in/assets/<asset_id>

Usage::

    from sams.utils.qr_generator import generate_asset_label

    data_url = generate_asset_label(
        "AST-001", asset_name="Dell Latitude", property_name="Main Office",
    )
"""

import io

import qrcode
from PIL import Image

from sams.config import Config
from sams.labels.composer import compose_label
from sams.labels.images import load_image, to_data_url
from sams.utils.constants import QR_IMAGE_MARGIN, QR_IMAGE_WIDTH


def build_asset_link(asset_id: str, base_url: str | None = None) -> str:
    """Build the URL encoded in an asset's QR code."""
    base = (base_url if base_url is not None else Config.PUBLIC_BASE_URL)
    return f"{base.rstrip('/')}/assets/{asset_id}"


def make_qr_image(data: str, width: int = QR_IMAGE_WIDTH,
                  margin: int = QR_IMAGE_MARGIN) -> str:
    """Encode *data* as a black-on-white QR and return a PNG data URL."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=margin,
    )
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    resized = load_image(buf.getvalue()).convert("RGB").resize(
        (width, width), Image.Resampling.NEAREST
    )
    return to_data_url(resized)


def generate_asset_label(
    asset_id: str,
    asset_name: str = "",
    property_name: str = "",
    top_text: str | None = None,
    base_url: str | None = None,
    hide_bottom_text: bool = False,
) -> str:
    """Compose the printable label card for one asset.

    The caption defaults to ``"<asset name> - <property name>"`` when either
    name is known, otherwise to the configured default caption.
    """
    if top_text is None:
        names = [n for n in (asset_name, property_name) if n]
        top_text = " - ".join(names) if names else Config.LABEL_TOP_TEXT
    raw = make_qr_image(build_asset_link(asset_id, base_url))
    return compose_label(
        raw, asset_id, top_text=top_text, hide_bottom_text=hide_bottom_text,
    )
