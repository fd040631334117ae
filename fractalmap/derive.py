"""Derived preview rasters from rendered pixel fields."""

from __future__ import annotations

import numpy as np


def value_preview_u16(value: np.ndarray) -> np.ndarray:
    """Map terrain values in [0, 1] to 16-bit grayscale."""

    if value.ndim != 2:
        raise ValueError("value must be a 2D array")
    norm = np.clip(value.astype(np.float64), 0.0, 1.0)
    return np.round(norm * 65535.0).astype(np.uint16)


def river_mask_u8(is_river: np.ndarray) -> np.ndarray:
    """Encode boolean river flags to an 8-bit mask image."""

    return np.where(is_river, 255, 0).astype(np.uint8)
