from __future__ import annotations

from typing import Optional


def cube_utilization(
    total_boxes: int,
    box_volume: float,
    usable_length: float,
    usable_width: float,
    max_height: float,
) -> float:
    """Share of the usable pallet volume taken by the boxes (0..1)."""
    volume = usable_length * usable_width * max_height
    if volume <= 0:
        return 0.0
    return total_boxes * box_volume / volume


def weight_utilization(total_weight: float, max_weight: Optional[float]) -> float:
    """Percentage of ``max_weight``; 0 when the pallet has no weight limit."""
    if not max_weight:
        return 0.0
    return total_weight / max_weight * 100
