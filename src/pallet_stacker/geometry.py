from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .models import BoxPlacement, Layer, Pallet

logger = logging.getLogger(__name__)

EPS = 1e-6


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned rectangle, x along the pallet width, y along its length."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def length(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> tuple[float, float]:
        return (self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2

    def contains(self, box: BoxPlacement, eps: float = EPS) -> bool:
        return (
            box.x >= self.min_x - eps
            and box.y >= self.min_y - eps
            and box.right <= self.max_x + eps
            and box.top <= self.max_y + eps
        )


def bounds_of(boxes: Iterable[BoxPlacement]) -> Optional[Bounds]:
    boxes = list(boxes)
    if not boxes:
        return None
    return Bounds(
        min_x=min(box.x for box in boxes),
        max_x=max(box.right for box in boxes),
        min_y=min(box.y for box in boxes),
        max_y=max(box.top for box in boxes),
    )


def usable_rect(pallet: Pallet, allow_overhang: bool) -> Bounds:
    """Allowed footprint rooted at the pallet's near corner."""
    return Bounds(
        0.0,
        pallet.usable_width(allow_overhang),
        0.0,
        pallet.usable_length(allow_overhang),
    )


def rects_overlap(
    ax: float, ay: float, aw: float, al: float,
    bx: float, by: float, bw: float, bl: float,
) -> bool:
    """Strict interior overlap; rectangles sharing an edge do not overlap."""
    return ax < bx + bw and ax + aw > bx and ay < by + bl and ay + al > by


def boxes_overlap(a: BoxPlacement, b: BoxPlacement, eps: float = 0.0) -> bool:
    return rects_overlap(
        a.x + eps, a.y + eps, a.box_width - 2 * eps, a.box_length - 2 * eps,
        b.x, b.y, b.box_width, b.box_length,
    )


def remove_overlaps(boxes: Sequence[BoxPlacement], eps: float = EPS) -> List[BoxPlacement]:
    """Keep placements in order, skipping any that collide with a kept one."""
    kept: List[BoxPlacement] = []
    for box in boxes:
        if any(boxes_overlap(box, other, eps=eps) for other in kept):
            continue
        kept.append(box)
    if len(kept) != len(boxes):
        logger.debug("Dropped %d overlapping placements", len(boxes) - len(kept))
    return kept


def translate(boxes: Sequence[BoxPlacement], dx: float, dy: float) -> List[BoxPlacement]:
    if dx == 0 and dy == 0:
        return list(boxes)
    return [box.moved(dx, dy) for box in boxes]


def _axis_shift(lo: float, hi: float, rect_lo: float, rect_hi: float) -> float:
    span = hi - lo
    rect_span = rect_hi - rect_lo
    if span > rect_span:
        logger.debug(
            "Footprint span %.3f exceeds target %.3f, centering instead", span, rect_span
        )
        return (rect_span - span) / 2 - lo + rect_lo
    if lo < rect_lo:
        return rect_lo - lo
    if hi > rect_hi:
        return rect_hi - hi
    return 0.0


def shift_within_rect(boxes: Sequence[BoxPlacement], rect: Bounds) -> List[BoxPlacement]:
    """Translate the whole set so it sits inside ``rect``; never resizes."""
    current = bounds_of(boxes)
    if current is None:
        return list(boxes)
    dx = _axis_shift(current.min_x, current.max_x, rect.min_x, rect.max_x)
    dy = _axis_shift(current.min_y, current.max_y, rect.min_y, rect.max_y)
    return translate(boxes, dx, dy)


def clamp_within_rect(boxes: Sequence[BoxPlacement], rect: Bounds) -> List[BoxPlacement]:
    """Shift into ``rect`` and drop whatever is still outside it."""
    shifted = shift_within_rect(boxes, rect)
    kept = [box for box in shifted if rect.contains(box)]
    if len(kept) != len(shifted):
        logger.debug("Dropped %d placements outside bounds", len(shifted) - len(kept))
    return kept


def clamp_within_pallet(
    boxes: Sequence[BoxPlacement], pallet: Pallet, allow_overhang: bool
) -> List[BoxPlacement]:
    return clamp_within_rect(boxes, usable_rect(pallet, allow_overhang))


def _center_offset(
    lo: float, span: float, base: float, overhang: float, usable: float,
    allow_overhang: bool,
) -> float:
    offset = (base - span) / 2 - lo
    if allow_overhang and span > base and span > base + overhang * 2:
        logger.debug(
            "Layer span %.3f exceeds base plus overhang, centering on %.3f",
            span,
            usable,
        )
        offset = (usable - span) / 2 - lo
    return offset


def center_layer(layer: Layer, pallet: Pallet, allow_overhang: bool) -> Layer:
    """Center the layer on the base pallet so overhang is split evenly."""
    current = bounds_of(layer.boxes)
    if current is None:
        return layer
    overhang = pallet.max_overhang or 0.0
    dx = _center_offset(
        current.min_x, current.width, pallet.width, overhang,
        pallet.usable_width(allow_overhang), allow_overhang,
    )
    dy = _center_offset(
        current.min_y, current.length, pallet.length, overhang,
        pallet.usable_length(allow_overhang), allow_overhang,
    )
    return layer.with_boxes(translate(layer.boxes, dx, dy))
