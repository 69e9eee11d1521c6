"""Utility helpers shared across renderer components."""

from __future__ import annotations

from reportlab.lib import colors
from reportlab.lib.colors import Color
from reportlab.pdfgen.canvas import Canvas

from ..engine.geometry import Rect
from ..engine.image_placer import Placement, place_in_box
from ..media.asset_resolver import LoadedImage

HEADER_FILL = Color(0.95, 0.95, 0.95)


def draw_box(canvas: Canvas, rect: Rect, line_width: float = 1.0, fill: Color | None = None) -> None:
    canvas.saveState()
    canvas.setStrokeColor(colors.black)
    canvas.setLineWidth(line_width)
    if fill is not None:
        canvas.setFillColor(fill)
    canvas.rect(rect.x, rect.y, rect.width, rect.height, stroke=1, fill=1 if fill is not None else 0)
    canvas.restoreState()


def draw_vertical_rules(canvas: Canvas, xs, top: float, bottom: float, line_width: float = 1.0) -> None:
    canvas.saveState()
    canvas.setStrokeColor(colors.black)
    canvas.setLineWidth(line_width)
    for x in xs:
        canvas.line(x, top, x, bottom)
    canvas.restoreState()


def draw_text(canvas: Canvas, x: float, y: float, text: str, font_name: str, font_size: float) -> None:
    canvas.setFillColor(colors.black)
    canvas.setFont(font_name, font_size)
    canvas.drawString(x, y, text)


def draw_centered_text(
    canvas: Canvas, center_x: float, y: float, text: str, font_name: str, font_size: float
) -> None:
    canvas.setFillColor(colors.black)
    canvas.setFont(font_name, font_size)
    canvas.drawCentredString(center_x, y, text)


def draw_image_in_box(canvas: Canvas, image: LoadedImage, box: Rect) -> Placement:
    """Aspect-fit ``image`` into ``box``, centered, and draw it."""
    placement = place_in_box(image.width, image.height, box)
    canvas.drawImage(
        image.reader,
        placement.x,
        placement.y,
        width=placement.width,
        height=placement.height,
        mask="auto",
    )
    return placement
