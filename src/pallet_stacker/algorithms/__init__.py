from .bottom_left import (
    DEFAULT_MAX_ATTEMPTS,
    can_place,
    find_position,
    pack_bottom_left_fill,
)
from .rect_packing import pack_rectangles_2d

__all__ = [
    "pack_rectangles_2d",
    "pack_bottom_left_fill",
    "find_position",
    "can_place",
    "DEFAULT_MAX_ATTEMPTS",
]
