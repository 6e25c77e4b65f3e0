from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict

from .layers import build_candidate_layers, select_best_layer
from .models import Arrangement, Box, Pallet
from .selector import PatternSelector, load_settings
from .stacking import layer_height, stack_layers
from .weight import apply_weight_constraints

logger = logging.getLogger(__name__)


def palletize(
    box: Box, pallet: Pallet, *, settings: Dict[str, Any] | None = None
) -> Arrangement:
    """Compute the full pallet arrangement for one box type.

    The densest layer template is picked first, then stacked with the
    requested pattern (or the best scoring one for ``"auto"``), and finally
    cut down to the pallet's weight limit.  Inputs are expected to be
    validated; see :func:`pallet_stacker.validation.validate_inputs`.
    """
    if settings is None:
        settings = load_settings()
    allow_rotation = box.allow_height_rotation
    allow_overhang = box.allow_overhang
    pattern = box.stack_pattern or "auto"

    candidates = build_candidate_layers(
        box,
        pallet,
        allow_rotation,
        allow_overhang,
        max_attempts=settings["max_attempts"],
    )
    template = select_best_layer(*candidates)
    pitch = layer_height(template, box.height)
    logger.debug(
        "Layer template: %d boxes, mixed=%s, pitch %.3f",
        len(template),
        template.has_mixed_orientations,
        pitch,
    )

    if pattern == "auto":
        selector = PatternSelector(
            box,
            pallet,
            template,
            allow_overhang=allow_overhang,
            layer_height=pitch,
            settings=settings,
        )
        score, arrangement = selector.best()
        logger.debug("Auto pattern picked %s (score %.4f)", score.name, score.score)
    else:
        arrangement = stack_layers(
            template, pitch, pallet.max_height, pallet, allow_overhang, pattern
        )

    arrangement = replace(arrangement, allow_height_rotation=allow_rotation)
    return apply_weight_constraints(arrangement, box.weight, pallet)
