"""Image decoding and PNG data URL helpers shared by the label code."""

import base64
import binascii
import io
from pathlib import Path

from PIL import Image

from sams.labels.layout import fit_size

PNG_DATA_URL_PREFIX = "data:image/png;base64,"


def decode_data_url(data_url: str) -> bytes:
    """Return the raw bytes of a base64 ``data:`` URL."""
    header, sep, payload = data_url.partition(",")
    if not sep or not header.startswith("data:") or ";base64" not in header:
        raise ValueError("expected a base64 data URL")
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"malformed base64 payload: {e}") from e


def load_image(source) -> Image.Image:
    """Decode *source* into a fully loaded Pillow image.

    *source* may be a data URL, raw encoded bytes, a filesystem path or an
    existing image (returned as a copy).  Undecodable bytes raise
    ``PIL.UnidentifiedImageError``.
    """
    if isinstance(source, Image.Image):
        return source.copy()
    if isinstance(source, str) and source.startswith("data:"):
        source = decode_data_url(source)
    if isinstance(source, (bytes, bytearray)):
        img = Image.open(io.BytesIO(source))
    else:
        img = Image.open(Path(source))
    img.load()
    if img.mode not in ("RGB", "RGBA"):
        img = img.convert("RGBA")
    return img


def to_png_bytes(img: Image.Image) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def to_data_url(img: Image.Image) -> str:
    """Encode *img* as a PNG data URL."""
    return PNG_DATA_URL_PREFIX + base64.b64encode(to_png_bytes(img)).decode(
        "ascii"
    )


def fit_image(img: Image.Image, box: tuple[int, int],
              fit: str = "contain") -> Image.Image:
    """Scale *img* into *box*.  ``cover`` crops the overflow evenly."""
    scaled = img.resize(
        fit_size(img.size, box, fit), Image.Resampling.LANCZOS
    )
    if fit == "contain":
        return scaled
    box_w, box_h = box
    left = (scaled.width - box_w) // 2
    top = (scaled.height - box_h) // 2
    return scaled.crop((left, top, left + box_w, top + box_h))


def paste_centered(canvas: Image.Image, img: Image.Image,
                   box: tuple[int, int, int, int]):
    """Paste *img* centered inside *box* (left, top, width, height)."""
    left, top, width, height = box
    x = left + (width - img.width) // 2
    y = top + (height - img.height) // 2
    if img.mode == "RGBA":
        canvas.paste(img, (x, y), img)
    else:
        canvas.paste(img, (x, y))
