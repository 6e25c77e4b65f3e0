import pytest

from pallet_stacker.geometry import (
    Bounds,
    bounds_of,
    center_layer,
    clamp_within_pallet,
    clamp_within_rect,
    rects_overlap,
    remove_overlaps,
)
from pallet_stacker.models import BoxPlacement, Layer, Pallet


def _box(x, y, w, length):
    return BoxPlacement(x=x, y=y, z=0.0, orientation="l×w", box_length=length, box_width=w)


def test_bounds_of_empty_is_none():
    assert bounds_of([]) is None


def test_bounds_of_spans_all_boxes():
    bounds = bounds_of([_box(0, 0, 10, 20), _box(10, 5, 10, 20)])
    assert bounds == Bounds(0, 20, 0, 25)
    assert bounds.center == (10, 12.5)


def test_touching_rectangles_do_not_overlap():
    assert not rects_overlap(0, 0, 10, 10, 10, 0, 10, 10)
    assert rects_overlap(0, 0, 10, 10, 9.5, 0, 10, 10)


def test_clamp_shifts_negative_set_back_inside():
    boxes = [_box(-2, 3, 11, 13), _box(9, 3, 11, 13)]
    clamped = clamp_within_rect(boxes, Bounds(0, 44, 0, 52))
    assert [(b.x, b.y) for b in clamped] == [(0, 3), (11, 3)]


def test_clamp_shifts_far_edge_back_inside():
    boxes = [_box(30, 0, 10, 10), _box(40, 0, 10, 10)]
    clamped = clamp_within_rect(boxes, Bounds(0, 44, 0, 10))
    assert [b.x for b in clamped] == [24, 34]


def test_clamp_centers_oversized_set_and_drops_overflow():
    boxes = [_box(0, 0, 10, 10), _box(10, 0, 10, 10), _box(20, 0, 10, 10)]
    clamped = clamp_within_rect(boxes, Bounds(0, 25, 0, 10))
    assert len(clamped) == 1
    assert clamped[0].x == pytest.approx(7.5)


def test_clamp_within_pallet_respects_overhang_flag():
    pallet = Pallet(length=40, width=40, max_height=10, max_overhang=5)
    boxes = [_box(0, 0, 45, 10)]
    assert clamp_within_pallet(boxes, pallet, allow_overhang=False) == []
    assert len(clamp_within_pallet(boxes, pallet, allow_overhang=True)) == 1


def test_remove_overlaps_keeps_first_seen():
    boxes = [_box(0, 0, 10, 10), _box(5, 0, 10, 10), _box(10, 0, 10, 10)]
    kept = remove_overlaps(boxes)
    assert [b.x for b in kept] == [0, 10]


def test_center_layer_on_base_pallet():
    pallet = Pallet(length=40, width=40, max_height=10)
    layer = center_layer(Layer(boxes=[_box(0, 0, 10, 10)]), pallet, True)
    assert (layer.boxes[0].x, layer.boxes[0].y) == (15, 15)


def test_center_layer_splits_overhang_evenly():
    pallet = Pallet(length=48, width=40, max_height=10, max_overhang=2)
    layer = Layer(boxes=[_box(0, 0, 22, 52), _box(22, 0, 22, 52)])
    centered = center_layer(layer, pallet, True)
    assert centered.boxes[0].x == pytest.approx(-2)
    assert centered.boxes[0].y == pytest.approx(-2)


def test_center_layer_falls_back_to_usable_footprint():
    pallet = Pallet(length=40, width=40, max_height=10, max_width=50)
    layer = Layer(boxes=[_box(0, 0, 48, 10)])
    centered = center_layer(layer, pallet, True)
    assert centered.boxes[0].x == pytest.approx(1)
