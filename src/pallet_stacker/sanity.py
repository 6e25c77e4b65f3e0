from __future__ import annotations

from dataclasses import dataclass

from .geometry import boxes_overlap, bounds_of, usable_rect
from .models import Arrangement, Layer, Pallet


@dataclass(frozen=True)
class SanityPolicy:
    eps: float = 1e-6


DEFAULT_SANITY_POLICY = SanityPolicy()


def layer_has_overlap(layer: Layer, eps: float = 1e-6) -> bool:
    boxes = layer.boxes
    for i, a in enumerate(boxes):
        for b in boxes[i + 1 :]:
            if boxes_overlap(a, b, eps=eps):
                return True
    return False


def sanity_flags(
    arrangement: Arrangement,
    pallet: Pallet,
    allow_overhang: bool = True,
    policy: SanityPolicy | None = None,
) -> set[str]:
    if policy is None:
        policy = DEFAULT_SANITY_POLICY
    eps = policy.eps
    flags: set[str] = set()
    rect = usable_rect(pallet, allow_overhang)
    base = bounds_of(arrangement.layers[0].boxes) if arrangement.layers else None

    for layer in arrangement.layers:
        if layer_has_overlap(layer, eps=eps):
            flags.add("overlap")
        for box in layer.boxes:
            if not rect.contains(box, eps=eps):
                flags.add("out_of_bounds")
            if layer.layer_number > 1 and base is not None and not base.contains(box, eps=eps):
                flags.add("overhangs_base_layer")
            if box.z + box.box_height > pallet.max_height + eps:
                flags.add("height_exceeded")

    if pallet.max_weight and arrangement.total_weight > pallet.max_weight + eps:
        flags.add("weight_exceeded")
    return flags


def is_sane(
    arrangement: Arrangement,
    pallet: Pallet,
    allow_overhang: bool = True,
    policy: SanityPolicy | None = None,
) -> bool:
    return not sanity_flags(arrangement, pallet, allow_overhang, policy)
