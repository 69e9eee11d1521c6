"""Fitting text into fixed-width table cells: greedy wrap and ellipsis truncation."""

from __future__ import annotations

import logging
from typing import List, Optional

from .text_metrics import TextMetricsEngine

logger = logging.getLogger(__name__)

ELLIPSIS = "…"
EMPTY_PLACEHOLDER = "-"


class TextFitter:
    """Greedy word wrapper and single-line truncator bound to one metrics engine."""

    def __init__(self, metrics: Optional[TextMetricsEngine] = None) -> None:
        self.metrics = metrics or TextMetricsEngine()

    def measure(self, text: str, font_name: str, font_size: float) -> float:
        return self.metrics.measure(text, font_name, font_size)

    def fits(self, text: str, font_name: str, font_size: float, max_width: float) -> bool:
        return self.measure(text, font_name, font_size) <= max_width

    def wrap_lines(self, text: str, font_name: str, font_size: float, max_width: float) -> List[str]:
        """
        Break ``text`` into lines no wider than ``max_width``.

        A single word that is wider than ``max_width`` on its own is emitted
        as its own line unchanged. Blank input yields ``["-"]``.
        """
        words = str(text or "").split()
        if not words:
            return [EMPTY_PLACEHOLDER]

        lines: List[str] = []
        current_line = ""
        for word in words:
            candidate = f"{current_line} {word}" if current_line else word
            if self.fits(candidate, font_name, font_size, max_width):
                current_line = candidate
                continue
            if current_line:
                lines.append(current_line)
            current_line = word
            if not self.fits(word, font_name, font_size, max_width):
                logger.debug("Word wider than %.2fpt kept on its own line: %r", max_width, word)

        if current_line:
            lines.append(current_line)
        return lines

    def fit_with_ellipsis(
        self,
        text: str,
        font_name: str,
        font_size: float,
        max_width: float,
        *,
        force: bool = False,
    ) -> str:
        """
        Truncate ``text`` to one line ending in an ellipsis.

        Text that already fits is returned unchanged unless ``force`` is set,
        in which case the ellipsis is always appended to mark a truncation
        that happened upstream. Never returns an empty string.
        """
        value = str(text or "")
        if not force and value and self.fits(value, font_name, font_size, max_width):
            return value

        while value and not self.fits(value + ELLIPSIS, font_name, font_size, max_width):
            value = value[:-1]
        value = value.rstrip()
        return value + ELLIPSIS if value else ELLIPSIS

    def fit_lines(
        self,
        text: str,
        font_name: str,
        font_size: float,
        max_width: float,
        max_lines: int,
    ) -> List[str]:
        """
        Wrap ``text`` into at most ``max_lines`` lines.

        When wrapping produces more lines, the first ``max_lines - 1`` are kept
        and the last kept line is replaced by its ellipsis-truncated form.
        """
        if max_lines < 1:
            raise ValueError("max_lines must be at least 1")

        lines = self.wrap_lines(text, font_name, font_size, max_width)
        if len(lines) <= max_lines:
            return lines

        kept = lines[:max_lines]
        kept[-1] = self.fit_with_ellipsis(kept[-1], font_name, font_size, max_width, force=True)
        return kept

    def fit_font_size(self, text: str, font_name: str, font_size: float, max_width: float) -> float:
        """Largest size not above ``font_size`` at which ``text`` fits on one line."""
        if max_width <= 0:
            raise ValueError("max_width must be positive")
        width = self.measure(text, font_name, font_size)
        if width <= max_width:
            return font_size
        return font_size * max_width / width
