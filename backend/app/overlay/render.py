"""Render the annotation overlay outside the browser.

Two outputs: a standalone SVG layer meant to sit on top of the image (same
percentage geometry as the CSS boxes), and a PNG with the boxes burned into
the image itself, used for exports.
"""

from __future__ import annotations

import io
import logging
from xml.sax.saxutils import escape

from PIL import Image, ImageDraw, ImageFont

from app.models.annotation import OverlayBox
from app.overlay.engine import OverlayState, pixel_box

logger = logging.getLogger(__name__)

_FILL_ALPHA = 51  # 20% tint, like the on-screen boxes
_OUTLINE_WIDTH = 2
_LABEL_PADDING = 3


def render_overlay_svg(boxes: list[OverlayBox], width: float, height: float) -> str:
    """Standalone SVG document of ``boxes`` for an image rendered at ``width`` x ``height``."""
    parts: list[str] = []
    for box in boxes:
        title = escape(box.title)
        parts.append(
            f'<g data-annotation="{escape(box.annotation_id)}" data-type="{box.type.value}">'
            f'<rect x="{box.left}" y="{box.top}" width="{box.width}" height="{box.height}"'
            f' fill="{box.color}" fill-opacity="0.2" stroke="{box.color}" stroke-width="{_OUTLINE_WIDTH}"/>'
            f"<title>{title}</title></g>"
        )
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width:g}" height="{height:g}"'
        f' viewBox="0 0 {width:g} {height:g}">'
        f'\n{chr(10).join(parts)}\n</svg>'
    )


def _hex_to_rgb(color: str) -> tuple[int, int, int]:
    value = color.lstrip("#")
    if len(value) == 3:
        value = "".join(c * 2 for c in value)
    try:
        return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)
    except ValueError:
        logger.debug("Unreadable color %r, drawing in black", color)
        return 0, 0, 0


def render_annotated_image(image_bytes: bytes, state: OverlayState) -> bytes:
    """Burn the visible annotations of ``state`` into the image, return PNG bytes."""
    with Image.open(io.BytesIO(image_bytes)) as source:
        limit = Image.MAX_IMAGE_PIXELS
        if limit and source.width * source.height > limit:
            raise Image.DecompressionBombError(
                f"Image is {source.width}x{source.height}, above the {limit} pixel limit"
            )
        img = source.convert("RGBA")

    width, height = img.size
    tint = Image.new("RGBA", img.size, (0, 0, 0, 0))
    tint_draw = ImageDraw.Draw(tint)
    visible = state.visible_annotations()

    for type_id, annotation in visible:
        box = pixel_box(annotation, width, height)
        rgb = _hex_to_rgb(state.color_for(type_id, annotation))
        tint_draw.rectangle(
            [box.left, box.top, box.left + box.width, box.top + box.height],
            fill=(*rgb, _FILL_ALPHA),
            outline=(*rgb, 255),
            width=_OUTLINE_WIDTH,
        )

    img = Image.alpha_composite(img, tint)
    draw = ImageDraw.Draw(img)
    font = ImageFont.load_default()

    for type_id, annotation in visible:
        if not annotation.title:
            continue
        box = pixel_box(annotation, width, height)
        rgb = _hex_to_rgb(state.color_for(type_id, annotation))
        left, top, right, bottom = draw.textbbox((0, 0), annotation.title, font=font)
        label_h = bottom - top + 2 * _LABEL_PADDING
        label_y = box.top - label_h if box.top >= label_h else box.top
        draw.rectangle(
            [box.left, label_y, box.left + (right - left) + 2 * _LABEL_PADDING, label_y + label_h],
            fill=(*rgb, 255),
        )
        draw.text(
            (box.left + _LABEL_PADDING, label_y + _LABEL_PADDING - top),
            annotation.title,
            fill=(255, 255, 255, 255),
            font=font,
        )

    out = io.BytesIO()
    img.convert("RGB").save(out, format="PNG")
    logger.info("Rendered %d annotations onto %dx%d image", len(visible), width, height)
    return out.getvalue()
