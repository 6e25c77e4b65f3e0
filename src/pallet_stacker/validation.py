from __future__ import annotations

import math

from .models import STACK_PATTERNS, Box, Pallet

ERROR_NOT_FINITE = "Box and pallet values must be finite numbers."
ERROR_BOX_DIMENSIONS = "Box length, width, height and weight must be greater than 0."
ERROR_PALLET_DIMENSIONS = "Pallet length, width and max height must be greater than 0."
ERROR_NEGATIVE_LIMITS = "Pallet overhang, weight and max weight cannot be negative."
ERROR_MAX_DIMENSIONS = "Pallet max length/width cannot be smaller than the base."


def _numbers(box: Box, pallet: Pallet) -> list[float]:
    values = [
        box.length,
        box.width,
        box.height,
        box.weight,
        pallet.length,
        pallet.width,
        pallet.max_height,
        pallet.height,
        pallet.pallet_weight,
        pallet.max_overhang,
    ]
    for optional in (pallet.max_weight, pallet.max_length, pallet.max_width):
        if optional is not None:
            values.append(optional)
    return values


def validate_inputs(box: Box, pallet: Pallet) -> list[str]:
    if not all(math.isfinite(value) for value in _numbers(box, pallet)):
        return [ERROR_NOT_FINITE]

    errors: list[str] = []
    if min(box.length, box.width, box.height, box.weight) <= 0:
        errors.append(ERROR_BOX_DIMENSIONS)
    if min(pallet.length, pallet.width, pallet.max_height) <= 0:
        errors.append(ERROR_PALLET_DIMENSIONS)
    if (
        (pallet.max_overhang or 0) < 0
        or (pallet.pallet_weight or 0) < 0
        or (pallet.max_weight is not None and pallet.max_weight < 0)
    ):
        errors.append(ERROR_NEGATIVE_LIMITS)
    if (pallet.max_length and pallet.max_length < pallet.length) or (
        pallet.max_width and pallet.max_width < pallet.width
    ):
        errors.append(ERROR_MAX_DIMENSIONS)
    if box.stack_pattern not in STACK_PATTERNS:
        errors.append(
            f"Unknown stack pattern {box.stack_pattern!r}; "
            f"expected one of: {', '.join(STACK_PATTERNS)}."
        )
    return errors
