from __future__ import annotations

import math
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from .document import DiagramCell, DiagramDocument, EdgeGeometry, ShapeGeometry, parse_style

RGB = tuple[int, int, int]

_DASH_ON = 4.0
_DASH_OFF = 3.0
# Pillow works in 16-bit signed pixel space; larger offsets overflow its text blitter.
_COORD_LIMIT = 32767.0


def render_preview(
    document: DiagramDocument,
    *,
    bg: RGB = (255, 255, 255),
    fg: RGB = (17, 24, 39),
) -> Image.Image:
    """Rasterize a document tree onto a canvas-sized image.

    Approximates draw.io: solid/dashed edges, filled ellipses and plain text.
    Cells with non-finite coordinates, or coordinates beyond Pillow's pixel
    range, are skipped.
    """

    canvas = document.canvas
    image = Image.new("RGB", (canvas.width, canvas.height), color=bg)
    draw = ImageDraw.Draw(image)
    font = ImageFont.load_default()

    for cell in document.cells:
        geometry = cell.geometry
        if geometry is None or not geometry.fits_within(_COORD_LIMIT):
            continue
        style = parse_style(cell.style)
        if isinstance(geometry, EdgeGeometry):
            _draw_edge(draw, geometry, style, fg)
        elif "ellipse" in style:
            _draw_marker(draw, cell, geometry, style, font, fg)
        elif "text" in style:
            _draw_text_box(draw, cell.value, geometry, style, font, fg)
    return image


def render_preview_png(document: DiagramDocument, *, out_path: str | Path) -> Path:
    path = Path(out_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    render_preview(document).save(path, format="PNG")
    return path


def _draw_edge(draw: ImageDraw.ImageDraw, geometry: EdgeGeometry, style: dict[str, str], fg: RGB) -> None:
    color = _parse_color(style.get("strokeColor")) or fg
    width = max(1, int(float(style.get("strokeWidth", "1"))))
    x0, y0 = geometry.source.x, geometry.source.y
    x1, y1 = geometry.target.x, geometry.target.y
    if style.get("dashed") != "1":
        draw.line([(x0, y0), (x1, y1)], fill=color, width=width)
        return

    length = math.hypot(x1 - x0, y1 - y0)
    if length == 0:
        return
    ux, uy = (x1 - x0) / length, (y1 - y0) / length
    pos = 0.0
    while pos < length:
        end = min(length, pos + _DASH_ON)
        draw.line([(x0 + ux * pos, y0 + uy * pos), (x0 + ux * end, y0 + uy * end)], fill=color, width=width)
        pos = end + _DASH_OFF


def _draw_marker(
    draw: ImageDraw.ImageDraw,
    cell: DiagramCell,
    geometry: ShapeGeometry,
    style: dict[str, str],
    font: ImageFont.ImageFont,
    fg: RGB,
) -> None:
    fill = _parse_color(style.get("fillColor"))
    box = (geometry.x, geometry.y, geometry.x + geometry.width, geometry.y + geometry.height)
    draw.ellipse(box, fill=fill, outline=_parse_color(style.get("strokeColor")))
    if not cell.value:
        return

    # Value label sits above the marker on its own background.
    tw, th = _text_size(draw, cell.value, font)
    tx = geometry.x + (geometry.width - tw) / 2
    ty = geometry.y - th - 2
    label_bg = _parse_color(style.get("labelBackgroundColor"))
    if label_bg is not None:
        draw.rectangle((tx - 1, ty - 1, tx + tw + 1, ty + th + 1), fill=label_bg)
    draw.text((tx, ty), cell.value, fill=fg, font=font)


def _draw_text_box(
    draw: ImageDraw.ImageDraw,
    text: str,
    geometry: ShapeGeometry,
    style: dict[str, str],
    font: ImageFont.ImageFont,
    fg: RGB,
) -> None:
    if not text:
        return
    tw, th = _text_size(draw, text, font)
    align = style.get("align", "center")
    if align == "left":
        tx = geometry.x
    elif align == "right":
        tx = geometry.x + geometry.width - tw
    else:
        tx = geometry.x + (geometry.width - tw) / 2

    valign = style.get("verticalAlign", "middle")
    if valign == "top":
        ty = geometry.y
    elif valign == "bottom":
        ty = geometry.y + geometry.height - th
    else:
        ty = geometry.y + (geometry.height - th) / 2
    draw.text((tx, ty), text, fill=fg, font=font)


def _text_size(draw: ImageDraw.ImageDraw, text: str, font: ImageFont.ImageFont) -> tuple[int, int]:
    x0, y0, x1, y1 = draw.textbbox((0, 0), text, font=font)
    return x1 - x0, y1 - y0


def _parse_color(value: str | None) -> RGB | None:
    if not value or value == "none":
        return None
    raw = value.lstrip("#")
    if len(raw) != 6:
        return None
    try:
        return (int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16))
    except ValueError:
        return None
