from __future__ import annotations

import numpy as np

from fractalmap.classify import PixelField
from fractalmap.config import RenderConfig
from fractalmap.metrics import map_metrics
from fractalmap.render import render_image


def test_metrics_on_synthetic_field() -> None:
    value = np.array(
        [
            [0.7, 0.7, 0.2, 0.2],
            [0.7, 0.62, 0.2, 0.2],
            [0.2, 0.2, 0.2, 0.2],
            [0.2, 0.2, 0.2, 0.8],
        ],
        dtype=np.float64,
    )
    is_river = np.zeros_like(value, dtype=bool)
    is_river[0, 1] = True

    metrics = map_metrics(PixelField(value, is_river))

    assert metrics.num_landmasses == 2
    assert metrics.land_fraction == 5 / 16
    assert metrics.river_fraction == 1 / 16
    assert metrics.shore_fraction == 1 / 16
    assert metrics.largest_land_ratio == 4 / 5
    assert metrics.max_value == 0.8


def test_metrics_all_water() -> None:
    value = np.full((3, 3), 0.3)
    metrics = map_metrics(PixelField(value, np.zeros_like(value, dtype=bool)))

    assert metrics.num_landmasses == 0
    assert metrics.largest_land_ratio == 0.0
    assert metrics.land_fraction == 0.0


def test_metrics_on_render_are_bounded() -> None:
    result = render_image(RenderConfig(width=32, height=32, scale=40.0, seed=10))
    metrics = map_metrics(result.field)

    assert 0.0 <= metrics.land_fraction <= 1.0
    assert 0.0 <= metrics.river_fraction <= metrics.land_fraction
    assert metrics.max_value <= 0.99
    assert set(metrics.to_dict()) >= {"land_fraction", "num_landmasses"}
