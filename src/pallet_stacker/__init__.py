"""Single-SKU pallet stacking: layer templates, stack patterns and limits."""

from .engine import palletize
from .layers import build_mixed_layer, build_uniform_layer, select_best_layer
from .models import Arrangement, Box, BoxPlacement, Layer, Pallet
from .selector import PatternScore, PatternSelector, load_settings
from .stacking import stack_layers
from .transformations import apply_stack_pattern
from .validation import validate_inputs
from .weight import apply_weight_constraints

__all__ = [
    "Box",
    "Pallet",
    "BoxPlacement",
    "Layer",
    "Arrangement",
    "palletize",
    "build_uniform_layer",
    "build_mixed_layer",
    "select_best_layer",
    "apply_stack_pattern",
    "stack_layers",
    "PatternSelector",
    "PatternScore",
    "load_settings",
    "apply_weight_constraints",
    "validate_inputs",
]
