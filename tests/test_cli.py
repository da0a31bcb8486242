import json
import os

import pytest

from jsdepgraph.cli import build_parser, main


def test_no_files_exits_non_zero(tmp_path, capsys):
    code = main(["-g", str(tmp_path / "*.ts"), "-l", "ts"])
    assert code == 1
    assert "No files found matching pattern" in capsys.readouterr().err


def test_invalid_language_rejected(capsys):
    with pytest.raises(SystemExit) as info:
        main(["-g", "*.ts", "-l", "py"])
    assert info.value.code == 2


def test_defaults():
    args = build_parser().parse_args(["-g", "src/**/*.ts", "-l", "ts"])
    assert args.format == "json"
    assert args.output is None
    assert args.open_viewer is False
    assert args.top_n == 5


def test_writes_requested_format(project, tmp_path):
    root = project({"a.ts": "import './b';\n", "b.ts": "export function b() {}\n"})
    output = tmp_path / "graph.d3.json"
    code = main(["-g", os.path.join(root, "*.ts"), "-l", "ts", "-f", "d3", "-o", str(output)])
    assert code == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert set(data) == {"nodes", "links"}
    assert len(data["links"]) == 1


def test_prints_json_to_stdout(project, capsys):
    root = project({"a.ts": "export const a = 1;\n"})
    assert main(["-g", os.path.join(root, "*.ts"), "-l", "ts"]) == 0
    out = capsys.readouterr().out
    assert json.loads(out)["nodes"][0]["exports"] == {"a": "variable"}


def test_write_failure_exits_non_zero(project, tmp_path, capsys):
    root = project({"a.ts": "export const a = 1;\n"})
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    code = main(["-g", os.path.join(root, "*.ts"), "-l", "ts", "-o", str(blocker / "graph.json")])
    assert code == 1
    assert capsys.readouterr().err.startswith("Error:")


def test_plot_preview(project, tmp_path):
    pytest.importorskip("matplotlib")
    import matplotlib

    matplotlib.use("Agg")
    root = project({"a.ts": "import './b';\n", "b.ts": "export function b() {}\n"})
    image = tmp_path / "graph.png"
    code = main([
        "-g", os.path.join(root, "*.ts"), "-l", "ts",
        "-o", str(tmp_path / "graph.json"), "--plot", str(image),
    ])
    assert code == 0
    assert image.exists()
