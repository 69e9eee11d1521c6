"""Rendering of the closing trainer-signature block."""

from __future__ import annotations

import logging
from typing import Optional

from reportlab.pdfgen.canvas import Canvas

from ..config import ReportConfig
from ..engine.geometry import Rect
from ..engine.page_engine import PageCursorManager
from ..engine.text_fitter import TextFitter
from ..formatting import clamp_text, or_placeholder
from ..media.asset_resolver import LoadedImage
from ..models import SessionInfo
from .render_utils import draw_box, draw_image_in_box, draw_text

logger = logging.getLogger(__name__)

LABEL_BASELINE_OFFSET = 14.0
PLACEHOLDER_INSET = 10.0


class TrainerSignatureRenderer:
    """Label, signature box and trainer name line closing the record."""

    def __init__(self, canvas: Canvas, pages: PageCursorManager, config: ReportConfig, fitter: TextFitter) -> None:
        self.canvas = canvas
        self.pages = pages
        self.config = config
        self.fitter = fitter

    @property
    def height(self) -> float:
        return self.config.signature_block_height

    def draw(self, session: SessionInfo, signature: Optional[LoadedImage]) -> Rect:
        """
        Draw the block at the cursor.

        The caller has already secured ``height`` points of space.

        Returns:
            The signature box
        """
        config = self.config
        fonts = config.fonts
        left = config.geometry.content_left

        top = self.pages.y
        draw_text(
            self.canvas,
            left,
            top - LABEL_BASELINE_OFFSET,
            config.labels.trainer_signature,
            fonts.bold,
            config.signature_label_font_size,
        )
        self.pages.advance(config.signature_label_height)

        box_width = min(config.signature_box.width, config.geometry.content_width)
        box_height = config.signature_box.height
        box = Rect(left, self.pages.y - box_height, box_width, box_height)
        draw_box(self.canvas, box, config.line_width)

        if signature is not None:
            draw_image_in_box(self.canvas, signature, box)
        else:
            if session.trainer_signature is None:
                logger.info("Session %s has no trainer signature reference", session.code)
            draw_text(
                self.canvas,
                box.x + PLACEHOLDER_INSET,
                box.y + PLACEHOLDER_INSET,
                config.labels.no_trainer_signature,
                fonts.regular,
                config.trainer_font_size,
            )
        self.pages.advance(box_height + config.signature_name_gap)

        trainer = clamp_text(or_placeholder(session.trainer_name), config.budgets.trainer)
        line = self.fitter.fit_with_ellipsis(
            f"{config.labels.trainer}: {trainer}",
            fonts.regular,
            config.trainer_font_size,
            config.geometry.content_width,
        )
        draw_text(self.canvas, left, self.pages.y, line, fonts.regular, config.trainer_font_size)
        self.pages.advance(config.signature_trailing_space)
        return box
