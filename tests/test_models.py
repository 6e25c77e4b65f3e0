import pytest

from pallet_stacker.models import Arrangement, Box, BoxPlacement, Layer, Pallet


def test_box_from_request_payload():
    box = Box.from_dict(
        {
            "length": "12,5",
            "width": 10,
            "height": 8,
            "weight": "4.2",
            "allowHeightRotation": "true",
            "allowOverhang": False,
            "stackPattern": "Pinwheel",
        }
    )
    assert box.length == pytest.approx(12.5)
    assert box.weight == pytest.approx(4.2)
    assert box.allow_height_rotation
    assert not box.allow_overhang
    assert box.stack_pattern == "pinwheel"


def test_box_from_record_defaults():
    box = Box.from_dict({"length": 1, "width": 2, "height": 3, "weight": 4})
    assert not box.allow_height_rotation
    assert box.allow_overhang
    assert box.stack_pattern == "auto"

    snake = Box.from_dict(
        {"length": 1, "width": 2, "height": 3, "weight": 4, "allow_height_rotation": 1}
    )
    assert snake.allow_height_rotation


def test_box_missing_field():
    with pytest.raises(ValueError):
        Box.from_dict({"length": 1, "width": 2, "height": 3})


def test_box_bad_flag():
    with pytest.raises(ValueError):
        Box.from_dict(
            {"length": 1, "width": 2, "height": 3, "weight": 4, "allowOverhang": "maybe"}
        )


def test_oriented_dimensions():
    box = Box(length=5, width=3, height=2, weight=1)
    assert box.oriented("l×w") == (5, 3, 2)
    assert box.oriented("w×l") == (3, 5, 2)
    assert box.oriented("h×w") == (2, 3, 5)
    assert box.oriented("l×h") == (5, 2, 3)


def test_pallet_from_dict_accepts_both_spellings():
    camel = Pallet.from_dict(
        {"length": 48, "width": 40, "maxHeight": 60, "maxWeight": 1000, "maxOverhang": 2}
    )
    snake = Pallet.from_dict(
        {"length": 48, "width": 40, "max_height": 60, "max_weight": 1000, "max_overhang": 2}
    )
    assert camel == snake
    assert camel.pallet_weight == 0.0
    assert camel.max_length is None


def test_pallet_requires_max_height():
    with pytest.raises(ValueError):
        Pallet.from_dict({"length": 48, "width": 40})


def test_usable_dimensions():
    pallet = Pallet(length=48, width=40, max_height=60, max_overhang=2)
    assert pallet.usable_length(True) == 52
    assert pallet.usable_width(True) == 44
    assert pallet.usable_length(False) == 48

    explicit = Pallet(length=48, width=40, max_height=60, max_overhang=2, max_width=41)
    assert explicit.usable_width(True) == 41


def test_with_max_dimensions():
    pallet = Pallet(length=48, width=40, max_height=60, max_overhang=1.5).with_max_dimensions()
    assert pallet.max_length == 51
    assert pallet.max_width == 43


def test_arrangement_to_dict_keys():
    placement = BoxPlacement(1, 2, 0, "l×w", 12, 10, box_height=8, box_weight=3)
    arrangement = Arrangement.from_layers(
        [Layer(boxes=[placement], layer_number=1)], stack_pattern="brick"
    )
    data = arrangement.to_dict()

    assert data["totalBoxes"] == 1
    assert data["totalLayers"] == 1
    assert data["boxesPerLayer"] == [1]
    assert data["stackPattern"] == "brick"
    assert data["weightLimited"] is False
    layer = data["layers"][0]
    assert layer["layerNumber"] == 1
    assert layer["hasMixedOrientations"] is False
    assert layer["boxes"][0] == {
        "x": 1,
        "y": 2,
        "z": 0,
        "orientation": "l×w",
        "boxLength": 12,
        "boxWidth": 10,
        "boxHeight": 8,
        "boxWeight": 3,
    }


def test_from_dict_rejects_non_mapping():
    with pytest.raises(ValueError):
        Box.from_dict([1, 2, 3])
    with pytest.raises(ValueError):
        Pallet.from_dict("48x40")


def test_with_boxes_recomputes_mixed_flag():
    a = BoxPlacement(0, 0, 0, "l×w", 2, 3)
    b = BoxPlacement(3, 0, 0, "w×l", 3, 2)
    layer = Layer(boxes=[a, b], has_mixed_orientations=True)

    assert layer.with_boxes([a]).has_mixed_orientations is False
    assert layer.with_boxes([a, b]).has_mixed_orientations is True
    assert layer.with_boxes([]).has_mixed_orientations is False
