from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional

from .geometry import (
    Bounds,
    bounds_of,
    center_layer,
    clamp_within_pallet,
    clamp_within_rect,
    remove_overlaps,
)
from .models import Arrangement, Layer, Pallet
from .transformations import apply_stack_pattern

logger = logging.getLogger(__name__)


def layer_height(template: Layer, default: float) -> float:
    """Vertical pitch of a layer: its tallest placement, else ``default``."""
    heights = [box.box_height for box in template.boxes if box.box_height > 0]
    return max(heights) if heights else default


def stack_layers(
    template: Layer,
    box_height: float,
    max_height: float,
    pallet: Pallet,
    allow_overhang: bool = True,
    pattern: str = "block",
) -> Arrangement:
    """Repeat ``template`` upward under ``pattern`` until ``max_height``.

    Every layer is shifted back onto the usable footprint; layers above the
    first are additionally kept inside the first layer's actual footprint.
    Placements that still stick out are dropped.  A layer left with no
    boxes is still recorded, so layer numbers stay contiguous and only
    the height budget ends the stack.
    """
    if box_height <= 0:
        return Arrangement.from_layers([], stack_pattern=pattern)
    centered = center_layer(template, pallet, allow_overhang)

    current_height = 0.0
    layer_number = 1
    layers: List[Layer] = []
    first_bounds: Optional[Bounds] = None

    while current_height + box_height <= max_height:
        transformed = apply_stack_pattern(centered, layer_number, pattern)
        boxes = remove_overlaps(transformed.boxes)
        boxes = clamp_within_pallet(boxes, pallet, allow_overhang)
        boxes = [
            replace(
                box,
                z=current_height,
                box_height=box.box_height or box_height,
                box_weight=0.0,
            )
            for box in boxes
        ]

        if layer_number == 1:
            first_bounds = bounds_of(boxes)
        elif first_bounds is not None:
            boxes = clamp_within_rect(boxes, first_bounds)

        layer = replace(transformed.with_boxes(boxes), layer_number=layer_number)
        layers.append(layer)
        current_height += box_height
        layer_number += 1

    arrangement = Arrangement.from_layers(layers, stack_pattern=pattern)
    logger.debug(
        "Stacked %d layers (%d boxes) with %s pattern",
        arrangement.total_layers,
        arrangement.total_boxes,
        pattern,
    )
    return arrangement
