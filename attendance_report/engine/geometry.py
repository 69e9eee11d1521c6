"""Geometry primitives and fixed page/table constants for the report layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from reportlab.lib.pagesizes import A4


@dataclass(frozen=True, slots=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True, slots=True)
class Rect:
    """Axis-aligned box in PDF coordinates (origin bottom-left)."""

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y

    @property
    def top(self) -> float:
        return self.y + self.height

    def inset(self, dx: float, dy: float) -> "Rect":
        """Shrink the rectangle by ``dx`` horizontally and ``dy`` vertically on each side."""
        return Rect(
            x=self.x + dx,
            y=self.y + dy,
            width=max(0.0, self.width - 2 * dx),
            height=max(0.0, self.height - 2 * dy),
        )

    def contains(self, other: "Rect", tolerance: float = 1e-6) -> bool:
        return (
            other.left >= self.left - tolerance
            and other.right <= self.right + tolerance
            and other.bottom >= self.bottom - tolerance
            and other.top <= self.top + tolerance
        )


@dataclass(frozen=True, slots=True)
class Margins:
    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> "Margins":
        return cls(value, value, value, value)


@dataclass(frozen=True, slots=True)
class PageGeometry:
    """Fixed page size and margin; every column computation derives from it."""

    page_size: Size = Size(float(A4[0]), float(A4[1]))
    margin: float = 36.0

    @property
    def width(self) -> float:
        return self.page_size.width

    @property
    def height(self) -> float:
        return self.page_size.height

    @property
    def margins(self) -> Margins:
        return Margins.uniform(self.margin)

    @property
    def content_width(self) -> float:
        margins = self.margins
        return self.page_size.width - (margins.left + margins.right)

    @property
    def content_left(self) -> float:
        return self.margins.left

    @property
    def content_right(self) -> float:
        return self.page_size.width - self.margins.right

    @property
    def content_top(self) -> float:
        """Top of content area in PDF coordinates."""
        return self.page_size.height - self.margins.top

    @property
    def content_bottom(self) -> float:
        return self.margins.bottom

    @property
    def pagesize(self) -> Tuple[float, float]:
        return (self.page_size.width, self.page_size.height)


SIGNATURE_COLUMN = "signature"


@dataclass(frozen=True, slots=True)
class TableColumnSpec:
    """Attendee table column widths in points."""

    index: float = 20.0
    name: float = 165.0
    tax_id: float = 80.0
    role: float = 85.0
    time: float = 70.0
    content_width: float = PageGeometry().content_width

    def __post_init__(self) -> None:
        if self.signature <= 0:
            raise ValueError(
                f"Fixed columns ({self.fixed_width:.2f}pt) leave no room for the "
                f"signature column in {self.content_width:.2f}pt"
            )

    @classmethod
    def for_geometry(cls, geometry: PageGeometry) -> "TableColumnSpec":
        return cls(content_width=geometry.content_width)

    @property
    def fixed_width(self) -> float:
        return self.index + self.name + self.tax_id + self.role + self.time

    @property
    def signature(self) -> float:
        return self.content_width - self.fixed_width

    def widths(self) -> Dict[str, float]:
        return {
            "index": self.index,
            "name": self.name,
            "tax_id": self.tax_id,
            "role": self.role,
            "time": self.time,
            SIGNATURE_COLUMN: self.signature,
        }

    def offsets(self, left: float) -> Dict[str, float]:
        """Left x coordinate of every column, starting at ``left``."""
        positions: Dict[str, float] = {}
        x = left
        for name, width in self.widths().items():
            positions[name] = x
            x += width
        return positions

    def dividers(self, left: float) -> Tuple[float, ...]:
        """Inner vertical rule positions (all column edges except the outer two)."""
        return tuple(list(self.offsets(left).values())[1:])
