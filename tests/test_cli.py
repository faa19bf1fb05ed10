from __future__ import annotations

import pytest
import yaml

from threshold_charts.cli import build_parser, config_from_args, main


def test_render_arguments_parse() -> None:
    args = build_parser().parse_args([
        "render", "--kind", "radar", "--output", "radar.png", "--seed", "3", "--width", "640", "-v",
    ])

    assert args.command == "render"
    assert args.kind == "radar"
    assert args.seed == 3
    assert args.width == 640
    assert args.verbose is True
    assert args.decorations is None


def test_render_rejects_unknown_kind() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["render", "--kind", "pie", "--output", "x.png"])


def test_render_rejects_non_positive_size() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["render", "--output", "x.png", "--width", "0"])


def test_size_overrides_become_figure_inches() -> None:
    args = build_parser().parse_args(["render", "--output", "x.png", "--dpi", "50", "--width", "300"])

    config = config_from_args(args)

    assert config.default_dpi == 50
    assert config.width_px == 300


def test_main_without_command_prints_help() -> None:
    assert main([]) == 1


def test_render_command_writes_chart(tmp_path, capsys) -> None:
    output = tmp_path / "column.png"

    code = main(["render", "--kind", "column", "--output", str(output), "--seed", "1",
                 "--width", "320", "--height", "240"])

    assert code == 0
    assert output.exists()
    assert "Chart saved to" in capsys.readouterr().out


def test_render_command_reads_decorations_file(tmp_path) -> None:
    decorations = tmp_path / "thresholds.yaml"
    decorations.write_text(yaml.safe_dump({"lines": [{"value": 40, "label": {"text": "Mid"}}]}))
    output = tmp_path / "line.png"

    code = main(["render", "--kind", "line", "--decorations", str(decorations), "--output", str(output),
                 "--width", "320", "--height", "240"])

    assert code == 0
    assert output.exists()


def test_invalid_decorations_exit_with_error(tmp_path, capsys) -> None:
    decorations = tmp_path / "thresholds.yaml"
    decorations.write_text("lines:\n  - position: sideways\n    value: 1\n")

    code = main(["render", "--decorations", str(decorations), "--output", str(tmp_path / "x.png")])

    assert code == 1
    assert "Error:" in capsys.readouterr().err


def test_demo_command_renders_radar_and_column(tmp_path, capsys) -> None:
    code = main(["demo", "--output-dir", str(tmp_path), "--seed", "2", "--write-decorations",
                 "--width", "320", "--height", "240", "--silent"])

    assert code == 0
    assert (tmp_path / "radar.png").exists()
    assert (tmp_path / "column.png").exists()
    assert (tmp_path / "radar-decorations.yaml").exists()
    printed = capsys.readouterr().out.split()
    assert len(printed) == 4
