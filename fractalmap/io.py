"""Output serialization for rendered maps."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import numpy as np
from PIL import Image


def resolve_output_path(path: str | Path, *, overwrite: bool) -> Path:
    """Create parent directories and return the target file path."""

    target = Path(path)
    if target.exists() and not overwrite:
        raise FileExistsError(f"Output file already exists: {target}. Use --overwrite to replace it.")
    target.parent.mkdir(parents=True, exist_ok=True)
    return target


def write_png_rgba(path: str | Path, rgba: np.ndarray) -> None:
    """Encode a (height, width, 4) uint8 raster as an RGBA PNG."""

    if rgba.ndim != 3 or rgba.shape[2] != 4:
        raise ValueError("rgba must have shape (height, width, 4)")
    image = Image.fromarray(np.ascontiguousarray(rgba, dtype=np.uint8))
    image.save(Path(path))


def write_value_npy(path: str | Path, value: np.ndarray) -> None:
    np.save(Path(path), value.astype(np.float64), allow_pickle=False)


def write_png_u16(path: str | Path, raster_u16: np.ndarray) -> None:
    image = Image.fromarray(raster_u16.astype(np.uint16))
    image.save(Path(path))


def write_png_u8(path: str | Path, raster_u8: np.ndarray) -> None:
    image = Image.fromarray(raster_u8.astype(np.uint8))
    image.save(Path(path))


def write_json(path: str | Path, payload: dict[str, Any]) -> None:
    text = json.dumps(payload, indent=2, sort_keys=True)
    Path(path).write_text(text + "\n", encoding="utf-8")
