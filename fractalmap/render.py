"""Band-parallel rendering of a full RGBA map image."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
import math
import threading
from typing import Callable

import numpy as np

from fractalmap.classify import PixelField, classify_pixels, colorize, world_coordinates
from fractalmap.config import MODES, RenderConfig

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1
DEFAULT_BAND_ROWS = 32

ProgressCallback = Callable[[int, int], None]


class RenderCancelled(RuntimeError):
    """Raised when a render is cancelled between bands."""


@dataclass(frozen=True)
class RenderResult:
    """RGBA image plus the per-pixel fields it was colored from."""

    rgba: np.ndarray
    value: np.ndarray
    is_river: np.ndarray
    config: RenderConfig

    @property
    def buffer(self) -> np.ndarray:
        """Flat row-major RGBA bytes of length width * height * 4."""

        return self.rgba.reshape(-1)

    @property
    def field(self) -> PixelField:
        return PixelField(self.value, self.is_river)


def validate_config(config: RenderConfig) -> None:
    if config.width <= 0 or config.height <= 0:
        raise ValueError("width and height must be positive")
    if not math.isfinite(config.scale) or config.scale <= 0:
        raise ValueError("scale must be a positive finite number")
    if config.mode not in MODES:
        raise ValueError(f"mode must be one of {MODES}")
    if not INT32_MIN <= config.seed <= INT32_MAX:
        raise ValueError("seed must fit in a signed 32-bit integer")
    if config.field.depth < 0:
        raise ValueError("depth must be >= 0")


def render_rows(config: RenderConfig, row_start: int, row_stop: int) -> tuple[np.ndarray, PixelField]:
    """Render rows [row_start, row_stop) into an RGBA array and pixel field."""

    rows = np.arange(row_start, row_stop)
    cols = np.arange(config.width)
    x, y = world_coordinates(rows, cols, config.scale, span=config.field.span)
    field = classify_pixels(x, y, config.seed, config.field)
    return colorize(field, config.mode, config.field), field


def band_ranges(total_rows: int, band_rows: int) -> list[tuple[int, int]]:
    """Split `total_rows` into consecutive disjoint [start, stop) ranges."""

    if band_rows < 1:
        raise ValueError("band_rows must be >= 1")
    return [(start, min(start + band_rows, total_rows)) for start in range(0, total_rows, band_rows)]


def render_image(
    config: RenderConfig,
    *,
    workers: int = 1,
    band_rows: int | None = None,
    progress: ProgressCallback | None = None,
    cancel: threading.Event | None = None,
) -> RenderResult:
    """Render a full map; output is identical for any worker or band count."""

    validate_config(config)
    if workers < 1:
        raise ValueError("workers must be >= 1")

    width, height = config.width, config.height
    if band_rows is None:
        band_rows = max(1, min(DEFAULT_BAND_ROWS, math.ceil(height / workers)))
    bands = band_ranges(height, band_rows)

    rgba = np.zeros((height, width, 4), dtype=np.uint8)
    value = np.zeros((height, width), dtype=np.float64)
    is_river = np.zeros((height, width), dtype=bool)

    lock = threading.Lock()
    done = [0]

    def run_band(start: int, stop: int) -> None:
        if cancel is not None and cancel.is_set():
            raise RenderCancelled(f"render cancelled before rows {start}-{stop}")
        band_rgba, band_field = render_rows(config, start, stop)
        rgba[start:stop] = band_rgba
        value[start:stop] = band_field.value
        is_river[start:stop] = band_field.is_river
        if progress is not None:
            with lock:
                done[0] += stop - start
                progress(done[0], height)

    if workers == 1:
        for start, stop in bands:
            run_band(start, stop)
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(run_band, start, stop) for start, stop in bands]
            for future in futures:
                future.result()

    return RenderResult(rgba=rgba, value=value, is_river=is_river, config=config)
