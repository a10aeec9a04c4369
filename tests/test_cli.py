import logging
import shutil

import pytest

from tile_renderer.cli import main


@pytest.fixture(autouse=True)
def detach_cli_log_handlers():
    yield
    # main() binds a handler to the captured stdout of the test
    logging.getLogger("tile_renderer").handlers.clear()


def test_codes_lists_table(capsys):
    assert main(["codes"]) == 0

    out = capsys.readouterr().out
    assert "  200  PCITY" in out
    assert "  100  BADMINISTRATIVE" in out


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out


def test_render(feature_document, tmp_path, capsys):
    output = tmp_path / "tile.png"

    code = main([
        "render", "--input", str(feature_document), "--output", str(output),
        "--width", "120", "--height", "90", "--background-color", "#f2efe9", "-q",
    ])

    assert code == 0
    assert output.exists()
    assert "Tile saved to" in capsys.readouterr().out


def test_render_silent_prints_only_path(feature_document, tmp_path, capsys):
    output = tmp_path / "tile.png"

    assert main(["render", "--input", str(feature_document), "--output", str(output), "--silent"]) == 0
    assert capsys.readouterr().out.strip() == str(output)


def test_render_missing_input(tmp_path, capsys):
    code = main(["render", "--input", str(tmp_path / "missing.yaml"), "--output", str(tmp_path / "t.png"), "-q"])

    assert code == 1
    assert "Error" in capsys.readouterr().err


def test_render_with_config_file(feature_document, tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("canvas_width: 64\ncanvas_height: 48\n")

    code = main([
        "render", "--input", str(feature_document), "--output", str(tmp_path / "t.png"),
        "--config", str(config_path), "-q",
    ])

    assert code == 0


def test_batch(feature_document, tmp_path):
    inputs = tmp_path / "inputs"
    inputs.mkdir()
    shutil.copy(feature_document, inputs / "one.yaml")
    shutil.copy(feature_document, inputs / "two.yml")
    (inputs / "readme.md").write_text("ignored")
    out = tmp_path / "out"

    code = main([
        "batch", "--input-dir", str(inputs), "--output-dir", str(out),
        "--width", "64", "--height", "64", "-q",
    ])

    assert code == 0
    assert sorted(p.name for p in out.iterdir()) == ["one.png", "two.png"]


def test_batch_empty_directory(tmp_path):
    assert main(["batch", "--input-dir", str(tmp_path), "-q"]) == 1


def test_batch_with_clashing_tile_names(feature_document, tmp_path, capsys):
    inputs = tmp_path / "inputs"
    inputs.mkdir()
    shutil.copy(feature_document, inputs / "one.yaml")
    shutil.copy(feature_document, inputs / "one.yml")

    code = main(["batch", "--input-dir", str(inputs), "--output-dir", str(tmp_path / "out"), "-q"])

    assert code == 1
    assert "share an output tile name" in capsys.readouterr().err


@pytest.mark.parametrize("content", ["canvas_width: [1\n", "- just\n- a list\n"])
def test_render_with_malformed_config_exits_1(feature_document, tmp_path, capsys, content):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(content)

    with pytest.raises(SystemExit) as excinfo:
        main([
            "render", "--input", str(feature_document), "--output", str(tmp_path / "t.png"),
            "--config", str(config_path), "-q",
        ])

    assert excinfo.value.code == 1
    assert "Error loading config" in capsys.readouterr().err
    assert not (tmp_path / "t.png").exists()


@pytest.mark.parametrize("flag", ["--width", "--height", "--dpi"])
def test_render_rejects_zero_override(feature_document, tmp_path, capsys, flag):
    output = tmp_path / "tile.png"

    code = main(["render", "--input", str(feature_document), "--output", str(output), flag, "0", "-q"])

    assert code == 1
    assert "Invalid configuration" in capsys.readouterr().err
    assert not output.exists()
