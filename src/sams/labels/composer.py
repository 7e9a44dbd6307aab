"""Compose a raw QR bitmap into a bordered, captioned label card.

Card layout, top to bottom::

    padding
    top caption band      (only when there is top text)
    gap
    QR square
    gap + identifier band (unless hide_bottom_text)
    padding

The card is drawn with Pillow and returned as a PNG data URL, ready to be
shown, saved or tiled onto sheets.
"""

import logging
from dataclasses import dataclass

from PIL import Image, ImageDraw, ImageFont

from sams.labels.images import load_image, paste_centered, to_data_url
from sams.utils.constants import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_BORDER_COLOR,
    DEFAULT_TEXT_COLOR,
    DEFAULT_TOP_TEXT,
    LABEL_BORDER_RADIUS,
    LABEL_BORDER_WIDTH,
    LABEL_BOTTOM_BAND,
    LABEL_BOTTOM_BASELINE,
    LABEL_FONT_SIZE,
    LABEL_GAP,
    LABEL_PADDING,
    LABEL_QR_SIZE,
    LABEL_TOP_BAND,
    LABEL_WIDTH,
    SANS_BOLD_FONTS,
    SANS_FONTS,
)
from sams.utils.formatters import truncate

logger = logging.getLogger(__name__)


@dataclass
class LabelDimensions:
    width: int = LABEL_WIDTH
    qr_size: int = LABEL_QR_SIZE
    padding: int = LABEL_PADDING
    top_band: int = LABEL_TOP_BAND
    gap: int = LABEL_GAP
    bottom_band: int = LABEL_BOTTOM_BAND

    def card_height(self, has_top_text: bool, hide_bottom_text: bool) -> int:
        height = self.padding + self.gap + self.qr_size + self.padding
        if has_top_text:
            height += self.top_band
        if not hide_bottom_text:
            height += self.gap + self.bottom_band
        return height

    def qr_top(self, has_top_text: bool) -> int:
        top = self.padding + self.gap
        if has_top_text:
            top += self.top_band
        return top


@dataclass
class LabelColors:
    border: str = DEFAULT_BORDER_COLOR
    text: str = DEFAULT_TEXT_COLOR
    background: str = DEFAULT_BACKGROUND_COLOR


def compose_label(
    qr_image,
    identifier: str,
    *,
    top_text: str = DEFAULT_TOP_TEXT,
    dimensions: LabelDimensions | None = None,
    colors: LabelColors | None = None,
    hide_bottom_text: bool = False,
):
    """Render *qr_image* onto a label card and return it as a data URL.

    Args:
        qr_image: PNG data URL (or bytes / path / PIL image) of the QR.
        identifier: Asset identifier printed under the QR.
        top_text: Caption above the QR.  Empty string drops the band.
        dimensions: Pixel geometry, defaults to a 360px wide card.
        colors: Border, text and background colors.
        hide_bottom_text: Leave out the identifier band.

    Returns:
        The composed PNG data URL.  If no canvas can be created for the
        requested size, *qr_image* is returned unchanged.
    """
    dims = dimensions or LabelDimensions()
    palette = colors or LabelColors()
    has_top = bool(top_text)
    width = dims.width
    height = dims.card_height(has_top, hide_bottom_text)

    try:
        card = _new_canvas(width, height, palette.background)
    except (ValueError, MemoryError) as e:
        logger.warning("Label canvas unavailable (%sx%s): %s",
                       width, height, e)
        return qr_image

    draw = ImageDraw.Draw(card)
    draw.rounded_rectangle(
        [1, 1, width - 2, height - 2],
        radius=LABEL_BORDER_RADIUS,
        outline=palette.border,
        width=LABEL_BORDER_WIDTH,
    )

    max_text_width = width - 2 * dims.padding
    if has_top:
        font = _load_font(SANS_FONTS)
        caption = _fit_text(draw, top_text, font, max_text_width)
        draw.text((width / 2, dims.padding), caption,
                  fill=palette.text, font=font, anchor="mt")

    qr = load_image(qr_image)
    if qr.size != (dims.qr_size, dims.qr_size):
        qr = qr.resize((dims.qr_size, dims.qr_size), Image.Resampling.NEAREST)
    qr_y = dims.qr_top(has_top)
    paste_centered(card, qr, (0, qr_y, width, dims.qr_size))

    if not hide_bottom_text:
        bold = _load_font(SANS_BOLD_FONTS)
        text = _fit_text(draw, identifier, bold, max_text_width)
        draw.text((width / 2, qr_y + dims.qr_size + LABEL_BOTTOM_BASELINE),
                  text, fill=palette.text, font=bold, anchor="ms")

    return to_data_url(card)


def _new_canvas(width: int, height: int, background: str) -> Image.Image:
    if width <= 0 or height <= 0:
        raise ValueError("canvas dimensions must be positive")
    return Image.new("RGB", (width, height), background)


def _load_font(candidates, size: int = LABEL_FONT_SIZE):
    """First TrueType face found on this system, else Pillow's default."""
    for name in candidates:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size)


def _fit_text(draw: ImageDraw.ImageDraw, text: str, font,
              max_width: float) -> str:
    """Shorten *text* with an ellipsis until it fits *max_width*."""
    length = len(text)
    fitted = text
    while length > 1 and draw.textlength(fitted, font=font) > max_width:
        length -= 1
        fitted = truncate(text, length)
    return fitted
