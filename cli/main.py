"""CLI entry point for map rendering."""

from __future__ import annotations

import argparse
from datetime import datetime, timezone
from pathlib import Path
import platform
import time

import numpy as np
from fractalmap.config import (
    DEFAULT_HEIGHT,
    DEFAULT_SCALE,
    DEFAULT_SEED,
    DEFAULT_WIDTH,
    MODE_RENDERED,
    MODES,
    RenderConfig,
)
from fractalmap.derive import river_mask_u8, value_preview_u16
from fractalmap.io import (
    resolve_output_path,
    write_json,
    write_png_rgba,
    write_png_u16,
    write_png_u8,
    write_value_npy,
)
from fractalmap.metrics import map_metrics
from fractalmap.render import render_image, validate_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Deterministic hashed fractal terrain map renderer")
    parser.add_argument("--w", type=int, default=DEFAULT_WIDTH, help="Output width in pixels")
    parser.add_argument("--h", type=int, default=DEFAULT_HEIGHT, help="Output height in pixels")
    parser.add_argument("--scale", type=float, default=DEFAULT_SCALE, help="World units per 3000 pixels")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="Integer seed")
    parser.add_argument(
        "--mode",
        type=int,
        choices=MODES,
        default=MODE_RENDERED,
        help="Output mode: 0=rendered colors, 1=biome flags",
    )
    parser.add_argument("--out", default="map.png", help="Output PNG path")
    parser.add_argument("--workers", type=int, default=1, help="Number of parallel render workers")
    parser.add_argument("--band-rows", type=int, default=None, help="Rows per render band")
    parser.add_argument("--overwrite", action="store_true", help="Overwrite an existing output file")
    parser.add_argument(
        "--json",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Write metadata JSON next to the image",
    )
    parser.add_argument(
        "--save-value",
        action="store_true",
        help="Also write the raw value field (.npy), a 16-bit preview and the river mask",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.workers < 1:
        parser.error("--workers must be >= 1")
    if args.band_rows is not None and args.band_rows < 1:
        parser.error("--band-rows must be >= 1")

    config = RenderConfig(width=args.w, height=args.h, scale=args.scale, seed=args.seed, mode=args.mode)
    try:
        validate_config(config)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        out_path = resolve_output_path(args.out, overwrite=args.overwrite)
    except FileExistsError as exc:
        parser.error(str(exc))

    def report(rows_done: int, total_rows: int) -> None:
        print(f"rendered {rows_done} / {total_rows}")

    generation_start = time.perf_counter()
    try:
        result = render_image(
            config,
            workers=args.workers,
            band_rows=args.band_rows,
            progress=None if args.quiet else report,
        )
    except ValueError as exc:
        parser.error(str(exc))
    generation_seconds = time.perf_counter() - generation_start

    write_png_rgba(out_path, result.rgba)
    metrics = map_metrics(result.field, config.field)

    written = [out_path]
    if args.save_value:
        stem = out_path.with_suffix("")
        value_npy = Path(f"{stem}_value.npy")
        value_png = Path(f"{stem}_value16.png")
        rivers_png = Path(f"{stem}_rivers.png")
        write_value_npy(value_npy, result.value)
        write_png_u16(value_png, value_preview_u16(result.value))
        write_png_u8(rivers_png, river_mask_u8(result.is_river))
        written.extend([value_npy, value_png, rivers_png])

    if args.json:
        meta_path = out_path.with_suffix(".json")
        meta = {
            "config": config.to_dict(),
            "metrics": metrics.to_dict(),
            "generated_at_utc": datetime.now(timezone.utc).isoformat(),
            "generation_seconds": generation_seconds,
            "workers": args.workers,
            "python_version": platform.python_version(),
            "numpy_version": np.__version__,
        }
        write_json(meta_path, meta)
        written.append(meta_path)

    print(f"Image created: {out_path}")
    print(
        "Land fraction "
        f"{metrics.land_fraction:.3f}; "
        f"river fraction {metrics.river_fraction:.3f}; "
        f"landmasses {metrics.num_landmasses}"
    )
    print(f"Generation time: {generation_seconds:.3f} s ({args.w}x{args.h}, {args.workers} workers)")
    print(f"Output files: {len(written)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
