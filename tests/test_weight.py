import pytest

from pallet_stacker.layers import build_uniform_layer
from pallet_stacker.models import Arrangement, BoxPlacement, Layer, Pallet
from pallet_stacker.stacking import stack_layers
from pallet_stacker.weight import apply_weight_constraints


def _stack(pallet):
    template = build_uniform_layer(12, 10, pallet, False, box_height=8)
    return stack_layers(template, 8, pallet.max_height, pallet, False, "block")


def test_within_limit_stamps_weights():
    pallet = Pallet(length=48, width=40, max_height=48, max_weight=10000)
    result = apply_weight_constraints(_stack(pallet), 50, pallet)

    assert result.total_boxes == 96
    assert result.total_weight == pytest.approx(4800)
    assert result.weight_utilization == pytest.approx(48.0)
    assert not result.weight_limited
    assert all(box.box_weight == 50 for layer in result.layers for box in layer.boxes)


def test_unbounded_pallet_reports_zero_utilization():
    pallet = Pallet(length=48, width=40, max_height=48)
    result = apply_weight_constraints(_stack(pallet), 50, pallet)

    assert result.total_weight == pytest.approx(4800)
    assert result.weight_utilization == 0
    assert not result.weight_limited


def test_keeps_whole_layers_only():
    pallet = Pallet(length=48, width=40, max_height=48, max_weight=2000)
    result = apply_weight_constraints(_stack(pallet), 50, pallet)

    assert result.weight_limited
    assert result.total_layers == 2
    assert result.total_boxes == 32
    assert result.boxes_per_layer == [16, 16]
    assert result.total_weight == pytest.approx(1600)
    assert result.weight_utilization == pytest.approx(80.0)


def test_pallet_tare_counts_towards_limit():
    pallet = Pallet(
        length=48, width=40, max_height=48, max_weight=2000, pallet_weight=100
    )
    result = apply_weight_constraints(_stack(pallet), 50, pallet)

    assert result.total_boxes == 32
    assert result.total_weight == pytest.approx(1700)


def test_partial_first_layer():
    pallet = Pallet(length=48, width=40, max_height=8, max_weight=500)
    result = apply_weight_constraints(_stack(pallet), 50, pallet)

    assert result.weight_limited
    assert result.total_layers == 1
    assert result.total_boxes == 10
    assert result.total_weight == pytest.approx(500)
    assert result.weight_utilization == pytest.approx(100.0)


def test_tare_above_limit_keeps_nothing():
    pallet = Pallet(
        length=48, width=40, max_height=8, max_weight=500, pallet_weight=600
    )
    result = apply_weight_constraints(_stack(pallet), 50, pallet)

    assert result.weight_limited
    assert result.total_boxes == 0
    assert result.layers == []


def test_pattern_and_rotation_flag_survive_truncation():
    pallet = Pallet(length=48, width=40, max_height=48, max_weight=2000)
    arrangement = _stack(pallet)
    arrangement.allow_height_rotation = True
    result = apply_weight_constraints(arrangement, 50, pallet)

    assert result.stack_pattern == "block"
    assert result.allow_height_rotation


def test_empty_arrangement():
    pallet = Pallet(length=48, width=40, max_height=48, max_weight=100)
    empty = Arrangement.from_layers([])
    result = apply_weight_constraints(empty, 50, pallet)
    assert result.total_boxes == 0
    assert not result.weight_limited


def test_partial_layer_recomputes_mixed_flag():
    pallet = Pallet(length=5, width=5, max_height=1, max_weight=2)
    mixed = Layer(
        boxes=[
            BoxPlacement(0, 0, 0, "l×w", 2, 3),
            BoxPlacement(0, 2, 0, "l×w", 2, 3),
            BoxPlacement(3, 0, 0, "w×l", 3, 2),
        ],
        has_mixed_orientations=True,
    )
    result = apply_weight_constraints(Arrangement.from_layers([mixed]), 1, pallet)

    assert result.boxes_per_layer == [2]
    assert not result.layers[0].has_mixed_orientations
