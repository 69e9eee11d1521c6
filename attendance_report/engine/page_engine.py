"""Page engine owning the current page and the vertical write cursor.

This engine handles:
- Page allocation on the canvas (the first page is implicit in ReportLab)
- The cursor, in PDF coordinates, moving down the page as blocks are drawn
- Page breaks before blocks that would cross into the reserved footer space,
  followed by the continuation hook that redraws the repeating header
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional

from reportlab.pdfgen.canvas import Canvas

from ..exceptions import LayoutError
from .geometry import PageGeometry

logger = logging.getLogger(__name__)


class PageState(Enum):
    NO_PAGE = "no_page"
    ON_PAGE = "on_page"


@dataclass(frozen=True, slots=True)
class Cursor:
    """Current page number (1-based) and write position (PDF y, top-down)."""

    page_number: int
    y: float


ContinuationHook = Callable[["PageCursorManager"], None]


class PageCursorManager:
    """Hands out vertical space on the canvas and breaks pages when it runs out."""

    def __init__(
        self,
        canvas: Canvas,
        geometry: PageGeometry,
        reserved_footer_space: float = 0.0,
        on_continuation_page: Optional[ContinuationHook] = None,
    ) -> None:
        """Initialize page cursor manager.

        Args:
            canvas: ReportLab canvas receiving the pages
            geometry: Fixed page geometry
            reserved_footer_space: Space above the bottom margin that ensure_space
                keeps free unless told otherwise
            on_continuation_page: Called after every page break triggered by
                ensure_space, before control returns to the caller
        """
        if reserved_footer_space < 0:
            raise ValueError("reserved_footer_space must not be negative")
        self.canvas = canvas
        self.geometry = geometry
        self.reserved_footer_space = reserved_footer_space
        self.on_continuation_page = on_continuation_page
        self._cursor: Optional[Cursor] = None

    @property
    def state(self) -> PageState:
        return PageState.NO_PAGE if self._cursor is None else PageState.ON_PAGE

    @property
    def cursor(self) -> Cursor:
        if self._cursor is None:
            raise LayoutError("No page allocated", "call new_page() first")
        return self._cursor

    @property
    def y(self) -> float:
        return self.cursor.y

    @property
    def page_count(self) -> int:
        return 0 if self._cursor is None else self._cursor.page_number

    def new_page(self) -> Cursor:
        """Allocate a page and reset the cursor to the top margin.

        Returns:
            The cursor for the new page
        """
        if self._cursor is None:
            page_number = 1
        else:
            self.canvas.showPage()
            page_number = self._cursor.page_number + 1
        self._cursor = Cursor(page_number=page_number, y=self.geometry.content_top)
        logger.debug("Started page %d", page_number)
        return self._cursor

    def advance(self, height: float) -> Cursor:
        """Move the cursor down by ``height`` points on the current page."""
        if height < 0:
            raise ValueError("Cannot advance by a negative height")
        self._cursor = replace(self.cursor, y=self.cursor.y - height)
        return self._cursor

    def remaining_space(self, reserve: Optional[float] = None) -> float:
        """Compute remaining vertical space above the bottom margin and reserve.

        Args:
            reserve: Extra space kept free above the margin (defaults to the
                reserved footer space)

        Returns:
            Remaining space in points
        """
        floor = self.geometry.content_bottom + self._reserve(reserve)
        return max(0.0, self.cursor.y - floor)

    def fits(self, height: float, reserve: Optional[float] = None) -> bool:
        """Check whether a block of ``height`` can start at the cursor."""
        return self.cursor.y - height >= self.geometry.content_bottom + self._reserve(reserve)

    def ensure_space(self, height: float, reserve: Optional[float] = None) -> bool:
        """Break to a new page unless ``height`` fits above the footer floor.

        After a break the continuation hook runs, so the cursor returned to
        the caller already sits below the repeated header.

        Returns:
            True if a new page was started
        """
        if self.fits(height, reserve):
            return False

        previous = self.cursor.page_number
        self.new_page()
        logger.debug(
            "Block of %.2fpt did not fit on page %d; continued on page %d",
            height,
            previous,
            self.cursor.page_number,
        )
        if self.on_continuation_page is not None:
            self.on_continuation_page(self)
        return True

    def _reserve(self, reserve: Optional[float]) -> float:
        return self.reserved_footer_space if reserve is None else reserve
