import os
import shutil

import pytest

from tile_renderer import BatchTileRenderer, Config
from tile_renderer.exceptions import InvalidParameterError


@pytest.fixture
def tile_inputs(feature_document, tmp_path):
    inputs_dir = tmp_path / "inputs"
    inputs_dir.mkdir()
    paths = []
    for name in ("b_tile", "a_tile"):
        target = inputs_dir / f"{name}.yaml"
        shutil.copy(feature_document, target)
        paths.append(target)
    broken = inputs_dir / "broken.yaml"
    broken.write_text("features:\n  - geometry: Hexagon\n")
    paths.append(broken)
    return paths


def small_config():
    return Config(canvas_width=96, canvas_height=64)


@pytest.mark.parametrize("parallel", [False, True])
def test_render_tiles(tile_inputs, tmp_path, parallel):
    out = tmp_path / "out"
    batch = BatchTileRenderer(tile_inputs, config=small_config(), output_dir=out)

    result = batch.render_tiles(parallel=parallel, max_workers=2, show_progress=False)

    assert result["successful_tiles"] == [str(out / "a_tile.png"), str(out / "b_tile.png")]
    assert result["failed_tiles"] == [str(tile_inputs[2])]
    assert result["total_time"] >= 0
    assert (out / "a_tile.png").exists()


def test_output_dir_defaults_to_config(tmp_path):
    config = Config(output_dir=tmp_path / "from_config")
    batch = BatchTileRenderer([tmp_path / "x.yaml"], config=config)

    assert batch.output_path_for(tmp_path / "x.yaml") == tmp_path / "from_config" / "x.png"


def test_invalid_backend(tile_inputs, tmp_path):
    batch = BatchTileRenderer(tile_inputs, output_dir=tmp_path)
    with pytest.raises(InvalidParameterError):
        batch.render_tiles(parallel=True, parallel_backend="cluster")


def test_cleanup_keeps_latest(tmp_path):
    for index, name in enumerate(["old.png", "mid.png", "new.png"]):
        path = tmp_path / name
        path.write_bytes(b"png")
        os.utime(path, (1000 + index, 1000 + index))
    (tmp_path / "notes.txt").write_text("kept")
    batch = BatchTileRenderer([], output_dir=tmp_path)

    deleted = batch.cleanup_tiles(keep_latest=1)

    assert deleted == 2
    assert sorted(p.name for p in tmp_path.iterdir()) == ["new.png", "notes.txt"]


def test_cleanup_missing_directory(tmp_path):
    assert BatchTileRenderer([], output_dir=tmp_path / "missing").cleanup_tiles() == 0


@pytest.mark.parametrize("names", [("one.yaml", "one.yml"), ("a/x.yaml", "b/x.json")])
def test_inputs_sharing_a_tile_name_are_rejected(feature_document, tmp_path, names):
    paths = []
    for name in names:
        target = tmp_path / "inputs" / name
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy(feature_document, target)
        paths.append(target)
    out = tmp_path / "out"
    batch = BatchTileRenderer(paths, config=small_config(), output_dir=out)

    with pytest.raises(InvalidParameterError, match="share an output tile name"):
        batch.render_tiles(show_progress=False)

    assert not out.exists()
