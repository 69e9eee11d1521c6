"""

TextMetricsEngine - text width measurement for the report fonts.

Uses ReportLab font metrics; the report draws with the standard Type 1
fonts by default, which ReportLab always knows about.

"""

from __future__ import annotations

from functools import lru_cache

from reportlab.pdfbase import pdfmetrics

from ..exceptions import ReportError


@lru_cache(maxsize=4096)
def _string_width(text: str, font_name: str, font_size: float) -> float:
    return pdfmetrics.stringWidth(text, font_name, font_size)


class TextMetricsEngine:
    """

    Engine for calculating text metrics.

    Widths come from ReportLab's font tables, so they match exactly what the
    canvas draws.

    """

    def ensure_font(self, font_name: str) -> None:
        """Raise ReportError if ``font_name`` is neither standard nor registered."""
        if font_name in pdfmetrics.standardFonts:
            return
        if font_name not in pdfmetrics.getRegisteredFontNames():
            raise ReportError("Unknown font", font_name)

    def measure(self, text: str, font_name: str, font_size: float) -> float:
        """

        Measures text width.

        Args:
        text: Text to measure
        font_name: ReportLab font name
        font_size: Font size in points

        Returns:
        Width in points

        """
        if not text:
            return 0.0
        return _string_width(text, font_name, float(font_size))
