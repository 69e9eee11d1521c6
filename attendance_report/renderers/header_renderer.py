"""Rendering of the page-1 header block and the continuation-page title."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from reportlab.pdfgen.canvas import Canvas

from ..config import ReportConfig
from ..engine.geometry import Rect
from ..engine.page_engine import PageCursorManager
from ..engine.text_fitter import TextFitter
from ..formatting import clamp_text, format_datetime, format_tax_id, or_placeholder
from ..media.asset_resolver import LoadedImage
from ..models import ReportModel
from .render_utils import draw_box, draw_centered_text, draw_image_in_box, draw_text

logger = logging.getLogger(__name__)

TITLE_GAP = 8.0


@dataclass(frozen=True, slots=True)
class InfoEntry:
    label: str
    value: str
    bold: bool = False

    @property
    def text(self) -> str:
        return f"{self.label}: {self.value}"


class HeaderBlockRenderer:
    """Draws logos, title and the company/session info grid at the top of page 1."""

    def __init__(self, canvas: Canvas, pages: PageCursorManager, config: ReportConfig, fitter: TextFitter) -> None:
        self.canvas = canvas
        self.pages = pages
        self.config = config
        self.fitter = fitter

    def draw(
        self,
        model: ReportModel,
        brand_logo: Optional[LoadedImage] = None,
        company_logo: Optional[LoadedImage] = None,
    ) -> Rect:
        """Draw the header block at the cursor and move the cursor below it."""
        config = self.config
        geometry = config.geometry
        top = self.pages.y
        frame = Rect(geometry.content_left, top - config.header_height, geometry.content_width, config.header_height)
        draw_box(self.canvas, frame, config.line_width)

        left_box, right_box = self.logo_boxes(top)
        if brand_logo is not None:
            draw_image_in_box(self.canvas, brand_logo, left_box)
        else:
            logger.debug("No brand logo available; header drawn without it")
        if company_logo is not None:
            draw_image_in_box(self.canvas, company_logo, right_box)
        elif model.company.logo is not None:
            logger.debug("Company logo %s could not be placed", model.company.logo)

        self._draw_title(left_box, right_box, brand_logo is not None, company_logo is not None)
        self._draw_info_grid(model, left_box.bottom)

        self.pages.advance(config.header_height + config.table_gap)
        return frame

    def draw_continuation(self, model: ReportModel) -> None:
        """Title line at the top of every page after the first."""
        config = self.config
        company = clamp_text(model.company.display_name, config.budgets.continuation_company)
        text = config.labels.continuation_title.format(company=company)
        text = self.fitter.fit_with_ellipsis(
            text, config.fonts.bold, config.continuation_font_size, config.geometry.content_width
        )
        baseline = self.pages.y - config.continuation_font_size
        draw_text(self.canvas, config.geometry.content_left, baseline, text, config.fonts.bold, config.continuation_font_size)
        self.pages.advance(config.continuation_title_height)

    def logo_boxes(self, top: float) -> Tuple[Rect, Rect]:
        """Left (brand) and right (tenant) logo boxes for a header starting at ``top``."""
        config = self.config
        geometry = config.geometry
        width, height = config.logo_box.width, config.logo_box.height
        y = top - config.header_padding - height
        left = Rect(geometry.content_left + config.header_padding, y, width, height)
        right = Rect(geometry.content_right - config.header_padding - width, y, width, height)
        return left, right

    def title_text(self, available_width: float) -> str:
        """The title on one line, cut with an ellipsis when the gap is too narrow."""
        config = self.config
        return self.fitter.fit_with_ellipsis(
            config.labels.title, config.fonts.bold, config.title_font_size, available_width
        )

    def title_span(self, left_box: Rect, right_box: Rect, has_left: bool, has_right: bool) -> Tuple[float, float]:
        """Horizontal span available to the title between the occupied logo boxes."""
        geometry = self.config.geometry
        padding = self.config.header_padding
        start = left_box.right + TITLE_GAP if has_left else geometry.content_left + padding
        end = right_box.left - TITLE_GAP if has_right else geometry.content_right - padding
        return start, end

    def _draw_title(self, left_box: Rect, right_box: Rect, has_left: bool, has_right: bool) -> None:
        config = self.config
        start, end = self.title_span(left_box, right_box, has_left, has_right)
        title = self.title_text(end - start)
        size = config.title_font_size
        baseline = left_box.y + left_box.height / 2 - size * 0.35
        draw_centered_text(self.canvas, (start + end) / 2, baseline, title, config.fonts.bold, size)

    def info_entries(self, model: ReportModel) -> Tuple[List[InfoEntry], List[InfoEntry]]:
        """Key/value pairs for the left (company) and right (session) columns."""
        labels = self.config.labels
        budgets = self.config.budgets
        timezone = self.config.timezone
        company = model.company
        session = model.session

        left = [
            InfoEntry(labels.company, clamp_text(company.name, budgets.company), bold=True),
            InfoEntry(
                labels.company_tax_id,
                clamp_text(format_tax_id(company.tax_id), budgets.company_tax_id),
            ),
            InfoEntry(labels.address, clamp_text(or_placeholder(company.address), budgets.address)),
            InfoEntry(labels.topic, clamp_text(session.topic, budgets.topic), bold=True),
            InfoEntry(labels.location, clamp_text(or_placeholder(session.location), budgets.location)),
        ]
        right = [
            InfoEntry(labels.session_code, model.session_code, bold=True),
            InfoEntry(labels.session_date, format_datetime(session.scheduled_at, timezone)),
            InfoEntry(labels.trainer, clamp_text(or_placeholder(session.trainer_name), budgets.trainer)),
            InfoEntry(labels.closed_at, format_datetime(session.closed_at, timezone)),
        ]
        return left, right

    def _draw_info_grid(self, model: ReportModel, logos_bottom: float) -> None:
        config = self.config
        geometry = config.geometry
        left_x = geometry.content_left + config.header_padding
        right_x = geometry.content_left + geometry.content_width * config.info_right_column
        left_width = right_x - left_x - TITLE_GAP
        right_width = geometry.content_right - config.header_padding - right_x

        first_baseline = logos_bottom - config.header_padding - config.info_font_size
        left, right = self.info_entries(model)
        for column_x, width, entries in ((left_x, left_width, left), (right_x, right_width, right)):
            for row, entry in enumerate(entries):
                font = config.fonts.bold if entry.bold else config.fonts.regular
                text = self.fitter.fit_with_ellipsis(entry.text, font, config.info_font_size, width)
                baseline = first_baseline - row * config.info_line_height
                draw_text(self.canvas, column_x, baseline, text, font, config.info_font_size)
