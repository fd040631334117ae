"""Configuration models for map rendering."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


DEFAULT_WIDTH = 1024
DEFAULT_HEIGHT = 1024
DEFAULT_SCALE = 1.0
DEFAULT_SEED = 0

MODE_RENDERED = 0
MODE_BIOME = 1
MODES = (MODE_RENDERED, MODE_BIOME)


@dataclass(frozen=True)
class FieldConfig:
    """Controls height/river evaluation and pixel classification thresholds."""

    depth: int = 18
    span: float = 3000.0
    land_threshold: float = 0.58
    river_blend: float = 0.2
    river_threshold: float = 0.85
    max_value: float = 0.99
    shore_low: float = 0.6
    shore_high: float = 0.64


@dataclass(frozen=True)
class RenderConfig:
    """Primary rendering configuration for one image."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    scale: float = DEFAULT_SCALE
    seed: int = DEFAULT_SEED
    mode: int = MODE_RENDERED
    field: FieldConfig = field(default_factory=FieldConfig)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
