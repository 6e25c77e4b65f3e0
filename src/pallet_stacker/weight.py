from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import List

from .metrics import weight_utilization
from .models import Arrangement, Layer, Pallet

logger = logging.getLogger(__name__)


def _weighted(layer: Layer, box_weight: float) -> Layer:
    return layer.with_boxes([replace(box, box_weight=box_weight) for box in layer.boxes])


def apply_weight_constraints(
    arrangement: Arrangement, box_weight: float, pallet: Pallet
) -> Arrangement:
    """Stamp box weights and cut the stack down to ``pallet.max_weight``.

    Whole layers are kept while they fit.  Only when not even the first
    layer fits is a partial layer (a prefix of its placements) kept.
    """
    max_weight = pallet.max_weight or math.inf
    tare = pallet.pallet_weight or 0.0
    layers = [_weighted(layer, box_weight) for layer in arrangement.layers]
    total_weight = arrangement.total_boxes * box_weight + tare

    if total_weight <= max_weight:
        return replace(
            arrangement,
            layers=layers,
            total_weight=total_weight,
            weight_utilization=weight_utilization(total_weight, pallet.max_weight),
            weight_limited=False,
        )

    max_boxes = math.floor((max_weight - tare) / box_weight)
    kept: List[Layer] = []
    count = 0
    for layer in layers:
        if count + len(layer) <= max_boxes:
            kept.append(layer)
            count += len(layer)
            continue
        remaining = max_boxes - count
        if remaining > 0 and not kept:
            kept.append(layer.with_boxes(layer.boxes[:remaining]))
            count += remaining
        break

    final_weight = count * box_weight + tare
    logger.debug(
        "Weight limit %.2f reached: kept %d of %d boxes",
        max_weight,
        count,
        arrangement.total_boxes,
    )
    truncated = Arrangement.from_layers(
        kept,
        total_weight=final_weight,
        weight_utilization=weight_utilization(final_weight, pallet.max_weight),
        weight_limited=True,
        stack_pattern=arrangement.stack_pattern,
        allow_height_rotation=arrangement.allow_height_rotation,
    )
    return truncated
