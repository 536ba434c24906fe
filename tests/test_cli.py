from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from TK4TreeSim import __version__
from TK4TreeSim.cli import app
from TK4TreeSim.treepath import write_sequences


def _run_args(tmp_path: Path, tree_files) -> list:
    set_1, set_2 = tmp_path / "set_1.csv", tmp_path / "set_2.csv"
    write_sequences([("a1", "b"), ("b",)], set_1)
    write_sequences([("a1", "b"), ("a",), ("root", "a")], set_2)
    return [
        "run",
        "--euler-levels", str(tree_files["levels"]),
        "--euler-positions", str(tree_files["positions"]),
        "--lca", str(tree_files["lca"]),
        "--set-1", str(set_1),
        "--set-2", str(set_2),
        "--results", str(tmp_path / "results"),
        "--jobs", "2",
    ]


def test_run_writes_scores(tmp_path: Path, tree_files) -> None:
    runner = CliRunner()
    result = runner.invoke(app, _run_args(tmp_path, tree_files) + ["--alg", "2", "--scores"])

    assert result.exit_code == 0, result.output
    assert "Parameters" in result.stdout
    assert "Gap Penalty:       1.33" in result.stdout
    lines = (tmp_path / "results" / "similarity-scores.dat").read_text().splitlines()
    assert len(lines) == 6


def test_run_heatmap(tmp_path: Path, tree_files) -> None:
    heatmap = tmp_path / "plots" / "scores.png"
    result = CliRunner().invoke(app, _run_args(tmp_path, tree_files) + ["--heatmap", str(heatmap)])

    assert result.exit_code == 0, result.output
    assert heatmap.exists()


def test_run_missing_file(tmp_path: Path, tree_files) -> None:
    args = _run_args(tmp_path, tree_files)
    args[args.index("--lca") + 1] = str(tmp_path / "missing.csv")
    result = CliRunner().invoke(app, args)

    assert result.exit_code == 1
    assert not (tmp_path / "results" / "similarity-scores.dat").exists()


def test_align() -> None:
    result = CliRunner().invoke(app, ["align", "x,y,z", "x,z", "--mode", "global"])

    assert result.exit_code == 0, result.output
    assert "Alignment Score: 1.0" in result.stdout
    assert "B: x\t-\tz" in result.stdout


def test_align_unknown_mode() -> None:
    result = CliRunner().invoke(app, ["align", "x", "x", "--mode", "banded"])
    assert result.exit_code == 1


def test_version() -> None:
    result = CliRunner().invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout
