from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .units import KG, MM, parse_bool, parse_float

# Footprint orientation tags: "<footprint length axis>×<footprint width axis>".
FLAT_ORIENTATIONS = ("l×w", "w×l")

STACK_PATTERNS = (
    "auto",
    "block",
    "split-block",
    "brick",
    "pinwheel",
    "row",
    "split-row",
)


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _require_mapping(data: Any, kind: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{kind} must be an object, got {type(data).__name__}")
    return data


def _required_float(data: Mapping[str, Any], key: str) -> float:
    value = data.get(key)
    if value is None:
        raise ValueError(f"missing required field: {key}")
    return parse_float(value)


def _optional_float(value: Any) -> Optional[float]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_float(value)


@dataclass(frozen=True)
class Box:
    """Carton to be palletized."""

    length: MM
    width: MM
    height: MM
    weight: KG
    allow_height_rotation: bool = False
    allow_overhang: bool = True
    stack_pattern: str = "auto"

    @property
    def volume(self) -> float:
        return self.length * self.width * self.height

    def oriented(self, orientation: str) -> Tuple[float, float, float]:
        """Return ``(footprint length, footprint width, vertical extent)``."""
        axes = {"l": self.length, "w": self.width, "h": self.height}
        first, second = orientation.split("×")
        (vertical,) = set(axes) - {first, second}
        return axes[first], axes[second], axes[vertical]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Box":
        """Decode a request payload or an item record.

        Both the camelCase request keys (``allowOverhang``) and the
        snake_case record keys (``allow_overhang``) are accepted.
        """
        data = _require_mapping(data, "box")
        allow_rotation = _pick(
            data, "allowHeightRotation", "allow_height_rotation", default=False
        )
        allow_overhang = _pick(data, "allowOverhang", "allow_overhang", default=True)
        pattern = _pick(data, "stackPattern", "stack_pattern", default="auto")
        return cls(
            length=_required_float(data, "length"),
            width=_required_float(data, "width"),
            height=_required_float(data, "height"),
            weight=_required_float(data, "weight"),
            allow_height_rotation=parse_bool(allow_rotation),
            allow_overhang=parse_bool(allow_overhang),
            stack_pattern=str(pattern).strip().lower() or "auto",
        )


@dataclass(frozen=True)
class Pallet:
    """Pallet base plus stacking limits."""

    length: MM
    width: MM
    max_height: MM
    name: str = ""
    height: MM = 0.0
    max_weight: Optional[KG] = None
    pallet_weight: KG = 0.0
    max_overhang: MM = 0.0
    max_length: Optional[MM] = None
    max_width: Optional[MM] = None

    def usable_length(self, allow_overhang: bool) -> float:
        if not allow_overhang:
            return self.length
        if self.max_length:
            return self.max_length
        return self.length + (self.max_overhang or 0.0) * 2

    def usable_width(self, allow_overhang: bool) -> float:
        if not allow_overhang:
            return self.width
        if self.max_width:
            return self.max_width
        return self.width + (self.max_overhang or 0.0) * 2

    def with_max_dimensions(self) -> "Pallet":
        """Derive ``max_length``/``max_width`` from the overhang allowance."""
        overhang = self.max_overhang or 0.0
        return replace(
            self,
            max_length=self.length + 2 * overhang,
            max_width=self.width + 2 * overhang,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Pallet":
        data = _require_mapping(data, "pallet")
        max_height = _pick(data, "max_height", "maxHeight")
        if max_height is None:
            raise ValueError("missing required field: max_height")
        return cls(
            length=_required_float(data, "length"),
            width=_required_float(data, "width"),
            max_height=parse_float(max_height),
            name=str(data.get("name") or ""),
            height=_optional_float(data.get("height")) or 0.0,
            max_weight=_optional_float(_pick(data, "max_weight", "maxWeight")),
            pallet_weight=_optional_float(_pick(data, "pallet_weight", "palletWeight"))
            or 0.0,
            max_overhang=_optional_float(_pick(data, "max_overhang", "maxOverhang"))
            or 0.0,
            max_length=_optional_float(_pick(data, "max_length", "maxLength")),
            max_width=_optional_float(_pick(data, "max_width", "maxWidth")),
        )


@dataclass(frozen=True)
class BoxPlacement:
    """One placed box; ``x`` runs along the pallet width, ``y`` along its length."""

    x: MM
    y: MM
    z: MM
    orientation: str
    box_length: MM
    box_width: MM
    box_height: MM = 0.0
    box_weight: KG = 0.0

    @property
    def right(self) -> float:
        return self.x + self.box_width

    @property
    def top(self) -> float:
        return self.y + self.box_length

    def moved(self, dx: float = 0.0, dy: float = 0.0) -> "BoxPlacement":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "z": self.z,
            "orientation": self.orientation,
            "boxLength": self.box_length,
            "boxWidth": self.box_width,
            "boxHeight": self.box_height,
            "boxWeight": self.box_weight,
        }


def has_mixed_orientations(boxes: List[BoxPlacement]) -> bool:
    return any(box.orientation != boxes[0].orientation for box in boxes[1:])


@dataclass
class Layer:
    boxes: List[BoxPlacement] = field(default_factory=list)
    layer_number: int = 1
    rotation: int = 0
    has_mixed_orientations: bool = False

    def __len__(self) -> int:
        return len(self.boxes)

    def with_boxes(self, boxes: List[BoxPlacement]) -> "Layer":
        """Copy with new placements; the mixed flag follows the kept boxes."""
        boxes = list(boxes)
        return replace(
            self, boxes=boxes, has_mixed_orientations=has_mixed_orientations(boxes)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "layerNumber": self.layer_number,
            "rotation": self.rotation,
            "hasMixedOrientations": self.has_mixed_orientations,
            "boxes": [box.to_dict() for box in self.boxes],
        }


@dataclass
class Arrangement:
    layers: List[Layer]
    total_boxes: int
    total_layers: int
    boxes_per_layer: List[int]
    total_weight: KG = 0.0
    weight_utilization: float = 0.0
    weight_limited: bool = False
    stack_pattern: str = "block"
    allow_height_rotation: bool = False

    @classmethod
    def from_layers(cls, layers: List[Layer], **kwargs: Any) -> "Arrangement":
        return cls(
            layers=list(layers),
            total_boxes=sum(len(layer) for layer in layers),
            total_layers=len(layers),
            boxes_per_layer=[len(layer) for layer in layers],
            **kwargs,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalBoxes": self.total_boxes,
            "totalLayers": self.total_layers,
            "boxesPerLayer": list(self.boxes_per_layer),
            "allowHeightRotation": self.allow_height_rotation,
            "totalWeight": self.total_weight,
            "weightUtilization": self.weight_utilization,
            "weightLimited": self.weight_limited,
            "stackPattern": self.stack_pattern,
            "layers": [layer.to_dict() for layer in self.layers],
        }
