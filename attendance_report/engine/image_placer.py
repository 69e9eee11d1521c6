"""Aspect-fit placement of images into bounding boxes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .geometry import Rect


@dataclass(frozen=True, slots=True)
class Placement:
    """Where and how large an image is drawn inside its box."""

    x: float
    y: float
    width: float
    height: float
    scale: float

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)


def scale_to_fit(
    intrinsic_width: float,
    intrinsic_height: float,
    box_width: float,
    box_height: float,
) -> Tuple[float, float]:
    """
    Uniformly scale an image so it fits inside a box.

    The scale factor is ``min(box_w / w, box_h / h)``, so the bound axis
    matches its box dimension exactly and the aspect ratio is unchanged.

    Raises:
        ValueError: if any dimension is not strictly positive
    """
    _check_positive(intrinsic_width, intrinsic_height, box_width, box_height)
    width, height, _ = _fit(intrinsic_width, intrinsic_height, box_width, box_height)
    return width, height


def place_in_box(intrinsic_width: float, intrinsic_height: float, box: Rect) -> Placement:
    """Aspect-fit an image into ``box`` and center it on both axes."""
    _check_positive(intrinsic_width, intrinsic_height, box.width, box.height)
    width, height, scale = _fit(intrinsic_width, intrinsic_height, box.width, box.height)
    return Placement(
        x=box.x + (box.width - width) / 2,
        y=box.y + (box.height - height) / 2,
        width=width,
        height=height,
        scale=scale,
    )


def _fit(iw: float, ih: float, bw: float, bh: float) -> Tuple[float, float, float]:
    # Bound axis takes the box dimension verbatim.
    width_scale = bw / iw
    height_scale = bh / ih
    if width_scale <= height_scale:
        return bw, min(bh, ih * width_scale), width_scale
    return min(bw, iw * height_scale), bh, height_scale


def _check_positive(*values: float) -> None:
    for value in values:
        if not value > 0:
            raise ValueError(f"Image and box dimensions must be positive, got {values!r}")
