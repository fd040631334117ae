"""Summary metrics for a rendered map."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import numpy as np
from scipy.ndimage import label

from fractalmap.classify import PixelField
from fractalmap.config import FieldConfig

_EIGHT_CONNECTED = np.ones((3, 3), dtype=bool)


@dataclass(frozen=True)
class MapMetrics:
    """Coverage and connectivity summary of one rendered map."""

    land_fraction: float
    river_fraction: float
    shore_fraction: float
    num_landmasses: int
    largest_land_ratio: float
    mean_value: float
    max_value: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def map_metrics(field: PixelField, config: FieldConfig | None = None) -> MapMetrics:
    """Compute land, river and shore coverage plus landmass connectivity."""

    cfg = config or FieldConfig()
    value = field.value
    if value.ndim != 2:
        raise ValueError("field must be 2D")

    total = value.size
    above = value > cfg.shore_low
    land = above & ~field.is_river
    shore = land & (value < cfg.shore_high)
    river = above & field.is_river

    labels, count = label(above, structure=_EIGHT_CONNECTED)
    if count:
        sizes = np.bincount(labels.ravel())[1:]
        largest_ratio = float(sizes.max() / above.sum())
    else:
        largest_ratio = 0.0

    return MapMetrics(
        land_fraction=float(above.sum() / total),
        river_fraction=float(river.sum() / total),
        shore_fraction=float(shore.sum() / total),
        num_landmasses=int(count),
        largest_land_ratio=largest_ratio,
        mean_value=float(value.mean()),
        max_value=float(value.max()),
    )
