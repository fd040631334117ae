"""Recursive hashed height field and the river field derived from it."""

from __future__ import annotations

import numpy as np

from fractalmap.hashing import as_uint64, mix_hash, to_c_int

CELL_MODULUS = 6700417
BASE_HEIGHT = 0.5
LOCAL_WEIGHT = 0.9
ZOOM = 1.5
ROTATION = 0.2

RIVER_STEP = 0.01
RIVER_OFFSET = 0.5
RIVER_ZOOM = 1.5
RIVER_SEED_OFFSET = 69


def _as_points(x, y) -> tuple[np.ndarray, np.ndarray]:
    xs, ys = np.broadcast_arrays(
        np.atleast_1d(np.asarray(x, dtype=np.float64)),
        np.atleast_1d(np.asarray(y, dtype=np.float64)),
    )
    return xs, ys


def cell_value(xi: np.ndarray, yi: np.ndarray, seed: int) -> np.ndarray:
    """Pseudo-random value in [0, 1) for the integer grid cells `(xi, yi)`."""

    xi = np.asarray(xi, dtype=np.int64)
    yi = np.asarray(yi, dtype=np.int64)
    hx = as_uint64(to_c_int(to_c_int(xi * 7919 + yi * 7907) + seed))
    hy = as_uint64(to_c_int(to_c_int(yi * 6277 - xi * 6053) + seed))
    h = mix_hash(hx, hy)
    return (h % np.uint64(CELL_MODULUS)).astype(np.float64) / float(CELL_MODULUS)


def height_field(x, y, depth: int, seed: int) -> np.ndarray:
    """Evaluate the multi-octave height field at every `(x, y)` point.

    Each octave blends a per-cell hash value, weighted by a tent that peaks
    at the cell center, with the next octave sampled at a zoomed and rotated
    coordinate using `seed + 1`. Depth 0 is the flat base height 0.5.
    The octaves are folded deepest-first so the result matches the nested
    evaluation bit for bit.
    """

    if depth < 0:
        raise ValueError("depth must be >= 0")

    xs, ys = _as_points(x, y)
    if depth == 0:
        return np.full(xs.shape, BASE_HEIGHT, dtype=np.float64)

    levels: list[tuple[np.ndarray, np.ndarray]] = []
    level_seed = int(seed)
    for _ in range(depth):
        xf = np.floor(xs)
        yf = np.floor(ys)
        out = cell_value(xf.astype(np.int64), yf.astype(np.int64), level_seed)

        dist = (0.5 - np.abs(xs - xf - 0.5)) * (0.5 - np.abs(ys - yf - 0.5)) * 4.0
        dist = dist * LOCAL_WEIGHT
        levels.append((out, dist))

        xs, ys = xs * ZOOM + ys * ROTATION, ys * ZOOM - xs * ROTATION
        level_seed = int(to_c_int(level_seed + 1))

    acc = np.full(xs.shape, BASE_HEIGHT, dtype=np.float64)
    for out, dist in reversed(levels):
        acc = out * dist + acc * (1.0 - dist)
    return acc


def height(x: float, y: float, depth: int, seed: int) -> float:
    """Scalar height at one world coordinate."""

    return float(height_field(x, y, depth, seed)[0])


def river_field(x, y, depth: int, seed: int) -> np.ndarray:
    """River strength in [0, 1]; 1 means no river, lower means stronger river.

    Rivers appear where a coarser height sample sits near the 0.5 band while
    the local gradient is shallow.
    """

    xs, ys = _as_points(x, y)

    p_0_0 = height_field(xs, ys, depth, seed)
    p_0_1 = height_field(xs + RIVER_STEP, ys + RIVER_STEP, depth, seed)
    p_1_0 = height_field(xs, ys + RIVER_OFFSET, depth, seed)
    # Same offset as p_0_1; the stencil is not a true 2x2 neighbourhood.
    p_1_1 = height_field(xs + RIVER_STEP, ys + RIVER_STEP, depth, seed)
    coarse = height_field(
        xs / RIVER_ZOOM,
        ys / RIVER_ZOOM,
        depth // 2,
        int(to_c_int(int(seed) + RIVER_SEED_OFFSET)),
    )

    grad_x = (p_0_0 + p_0_1) - (p_1_0 + p_1_1)
    grad_y = (p_0_0 + p_1_0) - (p_0_1 + p_1_1)
    grad_d = np.sqrt(grad_x * grad_x + grad_y * grad_y) * 0.5 - 0.1

    smt = np.abs(coarse - 0.5) * 3.0

    carved = smt < grad_d
    safe_grad = np.where(carved, grad_d, 1.0)
    return np.where(carved, smt / safe_grad, 1.0)


def river(x: float, y: float, depth: int, seed: int) -> float:
    """Scalar river strength at one world coordinate."""

    return float(river_field(x, y, depth, seed)[0])
