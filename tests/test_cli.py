from __future__ import annotations

import json

from PIL import Image
import numpy as np
import pytest

from cli.main import main
from fractalmap.config import RenderConfig
from fractalmap.render import render_image


def _args(out_path, *extra: str) -> list[str]:
    return ["--w", "12", "--h", "10", "--scale", "20", "--seed", "10", "--out", str(out_path), "--quiet", *extra]


def test_cli_writes_rgba_png_and_meta(tmp_path) -> None:
    out_path = tmp_path / "maps" / "world.png"
    assert main(_args(out_path)) == 0

    with Image.open(out_path) as image:
        assert image.mode == "RGBA"
        assert image.size == (12, 10)
        pixels = np.asarray(image)
    assert np.all(pixels[..., 3] == 255)

    meta = json.loads((tmp_path / "maps" / "world.json").read_text(encoding="utf-8"))
    assert meta["config"]["seed"] == 10
    assert meta["config"]["field"]["depth"] == 18
    assert meta["generation_seconds"] >= 0.0
    assert "land_fraction" in meta["metrics"]


def test_cli_output_matches_library(tmp_path) -> None:
    out_path = tmp_path / "world.png"
    assert main(_args(out_path, "--mode", "1", "--workers", "3", "--no-json")) == 0

    expected = render_image(RenderConfig(width=12, height=10, scale=20.0, seed=10, mode=1))
    with Image.open(out_path) as image:
        assert np.array_equal(np.asarray(image), expected.rgba)
    assert not (tmp_path / "world.json").exists()


def test_cli_save_value_outputs(tmp_path) -> None:
    out_path = tmp_path / "world.png"
    assert main(_args(out_path, "--save-value")) == 0

    value = np.load(tmp_path / "world_value.npy")
    assert value.shape == (10, 12)
    assert (tmp_path / "world_value16.png").exists()
    assert (tmp_path / "world_rivers.png").exists()


def test_cli_refuses_to_overwrite(tmp_path) -> None:
    out_path = tmp_path / "world.png"
    assert main(_args(out_path)) == 0

    with pytest.raises(SystemExit):
        main(_args(out_path))
    assert main(_args(out_path, "--overwrite")) == 0


def test_cli_progress_output(tmp_path, capsys) -> None:
    out_path = tmp_path / "world.png"
    assert main(["--w", "4", "--h", "3", "--out", str(out_path), "--band-rows", "1", "--no-json"]) == 0

    captured = capsys.readouterr().out
    assert "rendered 1 / 3" in captured
    assert "rendered 3 / 3" in captured
    assert "Image created" in captured


def test_cli_rejects_bad_dimensions(tmp_path) -> None:
    with pytest.raises(SystemExit):
        main(["--w", "0", "--out", str(tmp_path / "x.png")])


def test_cli_invalid_config_leaves_no_directories(tmp_path) -> None:
    out_path = tmp_path / "new" / "dir" / "x.png"
    with pytest.raises(SystemExit):
        main(["--w", "0", "--out", str(out_path)])

    assert not (tmp_path / "new").exists()
