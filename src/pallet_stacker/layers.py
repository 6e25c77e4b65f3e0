from __future__ import annotations

import logging
from typing import List, Tuple

from . import algorithms
from .geometry import center_layer
from .models import (
    FLAT_ORIENTATIONS,
    Box,
    BoxPlacement,
    Layer,
    Pallet,
    has_mixed_orientations,
)

logger = logging.getLogger(__name__)

# Orientation order when height rotation is allowed.
ROTATION_ORDER = ("l×w", "l×h", "w×l", "w×h", "h×l", "h×w")


def orientation_candidates(box: Box, allow_height_rotation: bool) -> List[Tuple[float, float, str]]:
    """``(footprint length, footprint width, tag)`` for each allowed orientation."""
    tags = ROTATION_ORDER if allow_height_rotation else FLAT_ORIENTATIONS
    candidates = []
    for tag in tags:
        length, width, _ = box.oriented(tag)
        candidates.append((length, width, tag))
    return candidates


def build_uniform_layer(
    box_length: float,
    box_width: float,
    pallet: Pallet,
    allow_overhang: bool = True,
    orientation: str = "l×w",
    box_height: float = 0.0,
) -> Layer:
    """Grid-pack one orientation over the usable footprint."""
    _, positions = algorithms.pack_rectangles_2d(
        pallet.usable_width(allow_overhang),
        pallet.usable_length(allow_overhang),
        box_width,
        box_length,
    )
    boxes = [
        BoxPlacement(
            x=x,
            y=y,
            z=0.0,
            orientation=orientation,
            box_length=length,
            box_width=width,
            box_height=box_height,
        )
        for x, y, width, length in positions
    ]
    return Layer(boxes=boxes)


def _priority(candidates, primary_index):
    primary = candidates[primary_index]
    return [primary] + [c for i, c in enumerate(candidates) if i != primary_index]


def build_mixed_layer(
    box: Box,
    pallet: Pallet,
    allow_height_rotation: bool = False,
    allow_overhang: bool = True,
    *,
    max_attempts: int = algorithms.DEFAULT_MAX_ATTEMPTS,
) -> Layer:
    """Pack a layer where every box may pick its own orientation.

    Each candidate orientation gets one bottom-left-fill run in which it is
    tried first, followed by the others in their fixed order.  The run that
    places the most boxes is centered and returned.  When nothing can be
    placed the better uniform layer is returned instead.
    """
    candidates = orientation_candidates(box, allow_height_rotation)
    max_l = pallet.usable_length(allow_overhang)
    max_w = pallet.usable_width(allow_overhang)

    best: list = []
    for index in range(len(candidates)):
        placed = algorithms.pack_bottom_left_fill(
            max_l, max_w, _priority(candidates, index), max_attempts=max_attempts
        )
        if len(placed) > len(best):
            best = placed

    if not best:
        logger.debug("Bottom-left fill placed nothing, falling back to uniform grid")
        lw = build_uniform_layer(
            box.length, box.width, pallet, allow_overhang, "l×w", box.height
        )
        wl = build_uniform_layer(
            box.width, box.length, pallet, allow_overhang, "w×l", box.height
        )
        return lw if len(lw) >= len(wl) else wl

    boxes = [
        BoxPlacement(
            x=x,
            y=y,
            z=0.0,
            orientation=tag,
            box_length=length,
            box_width=width,
            box_height=box.oriented(tag)[2],
        )
        for x, y, width, length, tag in best
    ]
    layer = Layer(boxes=boxes, has_mixed_orientations=has_mixed_orientations(boxes))
    return center_layer(layer, pallet, allow_overhang)


def select_best_layer(*layers: Layer) -> Layer:
    """Most boxes wins; ties keep the earliest candidate."""
    best = layers[0]
    for layer in layers[1:]:
        if len(layer) > len(best):
            best = layer
    return best


def build_candidate_layers(
    box: Box,
    pallet: Pallet,
    allow_height_rotation: bool,
    allow_overhang: bool,
    *,
    max_attempts: int = algorithms.DEFAULT_MAX_ATTEMPTS,
) -> List[Layer]:
    """Uniform layer per allowed orientation followed by the mixed layer."""
    tags = ROTATION_ORDER if allow_height_rotation else FLAT_ORIENTATIONS
    layers = []
    for tag in tags:
        length, width, height = box.oriented(tag)
        layers.append(
            build_uniform_layer(length, width, pallet, allow_overhang, tag, height)
        )
    layers.append(
        build_mixed_layer(
            box,
            pallet,
            allow_height_rotation,
            allow_overhang,
            max_attempts=max_attempts,
        )
    )
    return layers

