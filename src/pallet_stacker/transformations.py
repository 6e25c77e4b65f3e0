from __future__ import annotations

from dataclasses import replace
from typing import Callable, Dict, List

from .geometry import bounds_of
from .models import BoxPlacement, Layer

# Orientation tag after a quarter turn of the footprint.
QUARTER_TURN = {
    "l×w": "w×l",
    "w×l": "l×w",
    "l×h": "h×l",
    "h×l": "l×h",
    "w×h": "h×w",
    "h×w": "w×h",
}

GROUP_DECIMALS = 3


def group_by_row(boxes: List[BoxPlacement]) -> Dict[float, List[BoxPlacement]]:
    rows: Dict[float, List[BoxPlacement]] = {}
    for box in boxes:
        rows.setdefault(round(box.y, GROUP_DECIMALS), []).append(box)
    return dict(sorted(rows.items()))


def group_by_column(boxes: List[BoxPlacement]) -> Dict[float, List[BoxPlacement]]:
    cols: Dict[float, List[BoxPlacement]] = {}
    for box in boxes:
        cols.setdefault(round(box.x, GROUP_DECIMALS), []).append(box)
    return dict(sorted(cols.items()))


def _half_width(layer: Layer) -> float:
    return layer.boxes[0].box_width / 2 if layer.boxes else 0.0


def block(template: Layer, layer_number: int) -> Layer:
    return template


def split_block(template: Layer, layer_number: int) -> Layer:
    """Even layers move half a box width along x."""
    if layer_number % 2 != 0:
        return template
    offset = _half_width(template)
    return template.with_boxes([box.moved(dx=offset) for box in template.boxes])


def brick(template: Layer, layer_number: int) -> Layer:
    """Every second row moves half a box width along x, on every layer."""
    if not template.boxes:
        return template
    offset = _half_width(template)
    boxes: List[BoxPlacement] = []
    for index, row in enumerate(group_by_row(template.boxes).values()):
        dx = offset if index % 2 == 1 else 0.0
        boxes.extend(box.moved(dx=dx) for box in row)
    return template.with_boxes(boxes)


def _quarter_turn(box: BoxPlacement, cx: float, cy: float) -> BoxPlacement:
    rel_x = box.x - cx
    rel_y = box.y - cy
    return replace(
        box,
        x=cx - rel_y,
        y=cy + rel_x,
        box_length=box.box_width,
        box_width=box.box_length,
        orientation=QUARTER_TURN.get(box.orientation, box.orientation),
    )


def pinwheel(template: Layer, layer_number: int) -> Layer:
    """Quarter-turn the template ``(n - 1) % 4`` times about its center.

    Each layer is derived from the template, never from the layer below.
    """
    turns = (layer_number - 1) % 4
    bounds = bounds_of(template.boxes)
    if turns == 0 or bounds is None:
        return template
    cx, cy = bounds.center
    boxes = list(template.boxes)
    for _ in range(turns):
        boxes = [_quarter_turn(box, cx, cy) for box in boxes]
    return replace(template, boxes=boxes, rotation=turns * 90)


def row(template: Layer, layer_number: int) -> Layer:
    """Even layers mirror the row order along y."""
    if layer_number % 2 != 0:
        return template
    rows = group_by_row(template.boxes)
    if not rows:
        return template
    keys = list(rows)
    min_y, max_y = keys[0], keys[-1]
    boxes: List[BoxPlacement] = []
    for y, members in rows.items():
        new_y = max_y - (y - min_y)
        boxes.extend(replace(box, y=new_y) for box in members)
    return template.with_boxes(boxes)


def split_row(template: Layer, layer_number: int) -> Layer:
    """Row mirroring plus, on even layers, column mirroring along x."""
    layer = row(template, layer_number)
    if layer_number % 2 != 0:
        return layer
    cols = group_by_column(layer.boxes)
    if not cols:
        return layer
    keys = list(cols)
    min_x, max_x = keys[0], keys[-1]
    boxes: List[BoxPlacement] = []
    for x, members in cols.items():
        new_x = max_x - (x - min_x)
        boxes.extend(replace(box, x=new_x) for box in members)
    return layer.with_boxes(boxes)


PATTERN_TRANSFORMS: Dict[str, Callable[[Layer, int], Layer]] = {
    "block": block,
    "split-block": split_block,
    "brick": brick,
    "pinwheel": pinwheel,
    "row": row,
    "split-row": split_row,
}


def apply_stack_pattern(template: Layer, layer_number: int, pattern: str) -> Layer:
    """Return how layer ``layer_number`` (1-based) looks under ``pattern``."""
    try:
        transform = PATTERN_TRANSFORMS[pattern]
    except KeyError:
        raise ValueError(f"unknown stack pattern: {pattern!r}") from None
    return transform(template, layer_number)
