"""Layout engine: geometry, text fitting, image placement and pagination."""

from .geometry import Margins, PageGeometry, Rect, Size, TableColumnSpec
from .image_placer import Placement, place_in_box, scale_to_fit
from .page_engine import Cursor, PageCursorManager, PageState
from .text_fitter import ELLIPSIS, TextFitter
from .text_metrics import TextMetricsEngine

__all__ = [
    "Cursor",
    "ELLIPSIS",
    "Margins",
    "PageCursorManager",
    "PageGeometry",
    "PageState",
    "Placement",
    "Rect",
    "Size",
    "TableColumnSpec",
    "TextFitter",
    "TextMetricsEngine",
    "place_in_box",
    "scale_to_fit",
]
