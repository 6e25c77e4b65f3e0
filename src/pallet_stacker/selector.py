from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, Tuple

import yaml

from .metrics import cube_utilization
from .models import Arrangement, Box, Layer, Pallet, STACK_PATTERNS
from .stacking import stack_layers

logger = logging.getLogger(__name__)

SETTINGS_ENV = "PALLET_STACKER_SETTINGS"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "stability_bonus": {"block": 0.0, "brick": 0.5, "pinwheel": 1.0, "row": 0.3},
    "stability_weight": 0.1,
    "cube_weight": 0.05,
    "auto_patterns": ["block", "brick", "pinwheel", "row"],
    "max_attempts": 1000,
}


def settings_path() -> str:
    env_path = os.getenv(SETTINGS_ENV)
    if env_path:
        return os.path.expanduser(env_path)
    return os.path.join(os.path.dirname(__file__), "settings.yaml")


def _merge_settings(loaded: Dict[str, Any]) -> Dict[str, Any]:
    settings = dict(DEFAULT_SETTINGS)
    settings["stability_bonus"] = dict(DEFAULT_SETTINGS["stability_bonus"])
    settings["auto_patterns"] = list(DEFAULT_SETTINGS["auto_patterns"])

    bonus = loaded.get("stability_bonus")
    if isinstance(bonus, dict):
        for name, value in bonus.items():
            try:
                settings["stability_bonus"][str(name)] = float(value)
            except (TypeError, ValueError):
                continue
    for key in ("stability_weight", "cube_weight"):
        if key in loaded:
            try:
                settings[key] = float(loaded[key])
            except (TypeError, ValueError):
                continue
    if "max_attempts" in loaded:
        try:
            settings["max_attempts"] = max(1, int(loaded["max_attempts"]))
        except (TypeError, ValueError):
            pass
    patterns = loaded.get("auto_patterns")
    if isinstance(patterns, list):
        valid = [p for p in patterns if p in STACK_PATTERNS and p != "auto"]
        if valid:
            settings["auto_patterns"] = valid
    return settings


@lru_cache(maxsize=None)
def load_settings() -> Dict[str, Any]:
    """Load pattern-scoring settings from ``settings.yaml`` when available."""
    path = settings_path()
    loaded: Dict[str, Any] = {}
    if os.path.exists(path):
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError):
            logger.exception("Failed to read settings from %s", path)
            data = {}
        if isinstance(data, dict):
            loaded = data
    return _merge_settings(loaded)


@dataclass
class PatternScore:
    """Outcome of stacking the layer template with one pattern."""

    name: str
    total_boxes: int
    stability_bonus: float
    cube_utilization: float
    score: float


class PatternSelector:
    """Stack → score → rank the automatic pattern candidates."""

    def __init__(
        self,
        box: Box,
        pallet: Pallet,
        template: Layer,
        *,
        allow_overhang: bool = True,
        layer_height: float | None = None,
        settings: Dict[str, Any] | None = None,
    ) -> None:
        self.box = box
        self.pallet = pallet
        self.template = template
        self.allow_overhang = allow_overhang
        self.layer_height = layer_height if layer_height is not None else box.height
        self.settings = settings if settings is not None else load_settings()

    def stack(self, pattern: str) -> Arrangement:
        return stack_layers(
            self.template,
            self.layer_height,
            self.pallet.max_height,
            self.pallet,
            self.allow_overhang,
            pattern,
        )

    def score(self, pattern: str, arrangement: Arrangement) -> PatternScore:
        """Box count first; stability and cube use only break near-ties."""
        bonus = float(self.settings["stability_bonus"].get(pattern, 0.0))
        cube = cube_utilization(
            arrangement.total_boxes,
            self.box.volume,
            self.pallet.usable_length(self.allow_overhang),
            self.pallet.usable_width(self.allow_overhang),
            self.pallet.max_height,
        )
        total = (
            arrangement.total_boxes
            + bonus * self.settings["stability_weight"]
            + cube * self.settings["cube_weight"]
        )
        return PatternScore(pattern, arrangement.total_boxes, bonus, cube, total)

    def rank(self) -> List[Tuple[PatternScore, Arrangement]]:
        results = []
        for pattern in self.settings["auto_patterns"]:
            arrangement = self.stack(pattern)
            score = self.score(pattern, arrangement)
            logger.debug(
                "Pattern %s: %d boxes, score %.4f", pattern, score.total_boxes, score.score
            )
            results.append((score, arrangement))
        return results

    def best(self) -> Tuple[PatternScore, Arrangement]:
        """Highest score; ties keep the earlier candidate.

        Raises ``ValueError`` when ``auto_patterns`` is empty.
        """
        best: Tuple[PatternScore, Arrangement] | None = None
        for score, arrangement in self.rank():
            if best is None or score.score > best[0].score:
                best = (score, arrangement)
        if best is None:
            raise ValueError("no auto patterns configured")
        return best
