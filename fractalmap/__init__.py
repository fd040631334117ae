"""Hashed fractal terrain map rendering package."""

from .config import DEFAULT_HEIGHT, DEFAULT_SCALE, DEFAULT_WIDTH, MODE_BIOME, MODE_RENDERED, FieldConfig, RenderConfig
from .noise import height, height_field, river, river_field
from .render import RenderCancelled, RenderResult, render_image

__all__ = [
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
    "DEFAULT_SCALE",
    "MODE_RENDERED",
    "MODE_BIOME",
    "FieldConfig",
    "RenderConfig",
    "RenderCancelled",
    "RenderResult",
    "height",
    "height_field",
    "river",
    "river_field",
    "render_image",
]
