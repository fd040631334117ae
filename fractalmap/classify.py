"""Pixel classification and color encoding."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from fractalmap.config import MODE_BIOME, MODE_RENDERED, FieldConfig
from fractalmap.noise import height_field, river_field

BIOME_LAND_BIT = 7
BIOME_RIVER_BIT = 6
BIOME_SHORE_BIT = 5

DITHER_DARK = 0.9
DITHER_LIGHT = 1.0


@dataclass(frozen=True)
class PixelField:
    """Per-pixel terrain value and river flag, shaped like the pixel grid."""

    value: np.ndarray
    is_river: np.ndarray


def world_coordinates(
    rows: np.ndarray,
    cols: np.ndarray,
    scale: float,
    *,
    span: float = 3000.0,
) -> tuple[np.ndarray, np.ndarray]:
    """Map pixel rows/columns to world `(x, y)` grids of shape (rows, cols)."""

    rows_f = np.asarray(rows, dtype=np.float64)
    cols_f = np.asarray(cols, dtype=np.float64)
    x = rows_f / span * scale
    y = cols_f / span * scale
    return np.broadcast_arrays(x[:, None], y[None, :])


def classify_pixels(x: np.ndarray, y: np.ndarray, seed: int, config: FieldConfig | None = None) -> PixelField:
    """Evaluate the terrain value and river flag for each world coordinate."""

    cfg = config or FieldConfig()
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    shape = x.shape

    value = height_field(x.ravel(), y.ravel(), cfg.depth, seed)
    is_river = np.zeros(value.shape, dtype=bool)

    land = value > cfg.land_threshold
    if np.any(land):
        strength = river_field(x.ravel()[land], y.ravel()[land], cfg.depth, seed)
        value[land] = value[land] - cfg.river_blend + cfg.river_blend * strength
        is_river[land] = strength < cfg.river_threshold

    # Upper clamp only.
    value = np.minimum(value, cfg.max_value)
    return PixelField(value.reshape(shape), is_river.reshape(shape))


def _to_u8(values: np.ndarray) -> np.ndarray:
    return np.clip(np.trunc(values), 0.0, 255.0).astype(np.uint8)


def _empty_rgba(shape: tuple[int, ...]) -> np.ndarray:
    rgba = np.zeros(shape + (4,), dtype=np.uint8)
    rgba[..., 3] = 255
    return rgba


def biome_rgba(field: PixelField, config: FieldConfig | None = None) -> np.ndarray:
    """Encode value in red and classification flags in the high green bits."""

    cfg = config or FieldConfig()
    val = field.value
    river = field.is_river
    above = val > cfg.shore_low

    rgba = _empty_rgba(val.shape)
    rgba[..., 0] = _to_u8(val * 255.0)

    flags = (
        ((~river & above).astype(np.uint8) << BIOME_LAND_BIT)
        | ((river & above).astype(np.uint8) << BIOME_RIVER_BIT)
        | ((~river & above & (val < cfg.shore_high)).astype(np.uint8) << BIOME_SHORE_BIT)
    )
    rgba[..., 1] = flags
    return rgba


def dither_factor(value: np.ndarray) -> np.ndarray:
    """Per-pixel shading factor: full on odd 1/256 steps, darker on even ones."""

    steps = np.trunc(np.asarray(value, dtype=np.float64) * 256.0).astype(np.int64)
    return np.where(steps % 2 != 0, DITHER_LIGHT, DITHER_DARK)


def rendered_rgba(field: PixelField, config: FieldConfig | None = None) -> np.ndarray:
    """Shade land, water and shore into a visual RGBA image."""

    cfg = config or FieldConfig()
    val = field.value
    land = (val > cfg.shore_low) & ~field.is_river
    shore = land & (val < cfg.shore_high)

    red = np.where(shore, 255.0, val)
    green = np.where(land, 255.0, 0.0) * 0.7 + val * 255.0 * 0.3
    blue = np.where(land, 0.0, 255.0) * 0.3 + val * 255.0 * 0.7

    dec = dither_factor(val)
    rgba = _empty_rgba(val.shape)
    for channel, raw in enumerate((red, green, blue)):
        rgba[..., channel] = _to_u8(_to_u8(raw).astype(np.float64) * dec)
    return rgba


def colorize(field: PixelField, mode: int, config: FieldConfig | None = None) -> np.ndarray:
    """Encode a pixel field as RGBA using the rendered or biome mode."""

    if mode == MODE_BIOME:
        return biome_rgba(field, config)
    if mode == MODE_RENDERED:
        return rendered_rgba(field, config)
    raise ValueError(f"unknown mode: {mode}")
