"""Rendering of the attendee table: column header row and fixed-height rows."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from reportlab.pdfgen.canvas import Canvas

from ..config import ReportConfig
from ..engine.geometry import Rect
from ..engine.page_engine import PageCursorManager
from ..engine.text_fitter import TextFitter
from ..formatting import clamp_text, format_date_parts, format_tax_id, is_valid_tax_id
from ..media.asset_resolver import LoadedImage
from ..models import AttendeeRecord
from .render_utils import (
    HEADER_FILL,
    draw_box,
    draw_centered_text,
    draw_image_in_box,
    draw_text,
    draw_vertical_rules,
)

logger = logging.getLogger(__name__)

HEADER_BASELINE_OFFSET = 15.0
FIRST_LINE_OFFSET = 16.0
TIME_LINE_OFFSET = 32.0
INDEX_PADDING = 2.0


class TableRenderer:
    """Draws the attendee table, asking the page manager for space before each row."""

    def __init__(self, canvas: Canvas, pages: PageCursorManager, config: ReportConfig, fitter: TextFitter) -> None:
        self.canvas = canvas
        self.pages = pages
        self.config = config
        self.fitter = fitter
        self.left = config.geometry.content_left
        self.width = config.geometry.content_width
        self.columns = config.columns.offsets(self.left)
        self.widths = config.columns.widths()
        self.dividers = config.columns.dividers(self.left)

    def column_titles(self) -> Sequence[Tuple[str, str]]:
        labels = self.config.labels
        return (
            ("index", labels.column_index),
            ("name", labels.column_name),
            ("tax_id", labels.column_tax_id),
            ("role", labels.column_role),
            ("time", labels.column_time),
            ("signature", labels.column_signature),
        )

    def draw_column_header(self) -> None:
        """Shaded title row; drawn on page 1 and repeated on continuation pages."""
        config = self.config
        top = self.pages.y
        height = config.header_row_height
        draw_box(self.canvas, Rect(self.left, top - height, self.width, height), config.line_width, fill=HEADER_FILL)

        baseline = top - HEADER_BASELINE_OFFSET
        for key, title in self.column_titles():
            draw_text(
                self.canvas,
                self.columns[key] + config.cell_padding,
                baseline,
                title,
                config.fonts.bold,
                config.header_font_size,
            )
        draw_vertical_rules(self.canvas, self.dividers, top, top - height, config.line_width)
        self.pages.advance(height)

    def draw_rows(
        self,
        attendees: Sequence[AttendeeRecord],
        signatures: Iterable[Optional[LoadedImage]],
    ) -> List[int]:
        """
        Draw every attendee in order.

        ``signatures`` yields one entry per attendee, in the same order.

        Returns:
            The page number each row was drawn on
        """
        row_pages: List[int] = []
        signature_iter = iter(signatures)
        for index, attendee in enumerate(attendees, start=1):
            signature = next(signature_iter, None)
            row_pages.append(self.draw_row(index, attendee, signature))
        return row_pages

    def draw_row(self, index: int, attendee: AttendeeRecord, signature: Optional[LoadedImage]) -> int:
        """Draw one row below the cursor, breaking the page first if needed."""
        config = self.config
        self.pages.ensure_space(config.row_height)
        page_number = self.pages.cursor.page_number

        top = self.pages.y
        height = config.row_height
        draw_box(self.canvas, Rect(self.left, top - height, self.width, height), config.line_width)
        draw_vertical_rules(self.canvas, self.dividers, top, top - height, config.line_width)

        first_line = top - FIRST_LINE_OFFSET
        self._draw_index(index, first_line)
        self._cell_text("name", first_line, clamp_text(attendee.full_name, config.name_max_chars), config.body_font_size)

        if attendee.tax_id and not is_valid_tax_id(attendee.tax_id):
            logger.warning("Row %d: tax id %r has an invalid check digit", index, attendee.tax_id)
        self._cell_text("tax_id", first_line, format_tax_id(attendee.tax_id), config.body_font_size)

        for line_no, line in enumerate(self.role_lines(attendee.role)):
            self._cell_text("role", first_line - line_no * config.role_line_height, line, config.role_font_size)

        date_text, time_text = format_date_parts(attendee.checked_in_at, config.timezone)
        self._cell_text("time", first_line, clamp_text(date_text, config.date_max_chars), config.time_font_size)
        self._cell_text("time", top - TIME_LINE_OFFSET, clamp_text(time_text, config.time_max_chars), config.time_font_size)

        self._draw_signature(index, top, signature)
        self.pages.advance(height)
        return page_number

    def role_lines(self, role: str) -> List[str]:
        config = self.config
        return self.fitter.fit_lines(
            role,
            config.fonts.regular,
            config.role_font_size,
            self.cell_text_width("role"),
            config.role_max_lines,
        )

    def cell_text_width(self, column: str) -> float:
        return self.widths[column] - 2 * self.config.cell_padding

    def signature_box(self, top: float) -> Rect:
        config = self.config
        cell = Rect(self.columns["signature"], top - config.row_height, self.widths["signature"], config.row_height)
        return cell.inset(config.cell_padding, config.signature_cell_padding)

    def _draw_signature(self, index: int, top: float, signature: Optional[LoadedImage]) -> None:
        box = self.signature_box(top)
        if signature is not None:
            draw_image_in_box(self.canvas, signature, box)
            return
        logger.debug("Row %d: drawing signature placeholder", index)
        config = self.config
        draw_centered_text(
            self.canvas,
            box.x + box.width / 2,
            box.y + box.height / 2 - config.placeholder_font_size * 0.35,
            config.labels.no_signature,
            config.fonts.regular,
            config.placeholder_font_size,
        )

    def index_font_size(self, index: int) -> float:
        """Body size, shrunk for row numbers too wide for the narrow index column."""
        config = self.config
        available = self.widths["index"] - 2 * INDEX_PADDING
        return self.fitter.fit_font_size(str(index), config.fonts.regular, config.body_font_size, available)

    def _draw_index(self, index: int, baseline: float) -> None:
        center_x = self.columns["index"] + self.widths["index"] / 2
        draw_centered_text(
            self.canvas, center_x, baseline, str(index), self.config.fonts.regular, self.index_font_size(index)
        )

    def _cell_text(self, column: str, baseline: float, text: str, font_size: float) -> None:
        font = self.config.fonts.regular
        text = self.fitter.fit_with_ellipsis(text, font, font_size, self.cell_text_width(column))
        draw_text(self.canvas, self.columns[column] + self.config.cell_padding, baseline, text, font, font_size)
