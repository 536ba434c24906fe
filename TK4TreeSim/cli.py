"""Command line interface for TK4TreeSim."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from . import __version__
from .batch import plot_scores, run_from_config
from .config import RunConfig
from .seq_alignment import pairwise

app = typer.Typer(add_completion=False, help="Tree-path similarity scoring of symbol sequences")


def _fail(exc: Exception) -> None:
    typer.secho(f"[ERROR] {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


@app.command()
def run(
    euler_levels: Path = typer.Option(..., "--euler-levels", help="Vertex levels in the Euler circuit"),
    euler_positions: Path = typer.Option(..., "--euler-positions", help="Vertex positions in the Euler circuit"),
    lca: Path = typer.Option(..., "--lca", help="LCAs computed offline"),
    set_1: Path = typer.Option(..., "--set-1", help="Source sequence set"),
    set_2: Path = typer.Option(..., "--set-2", help="Target sequence set"),
    results: Path = typer.Option(Path("./results"), "--results", help="Results directory"),
    alg: int = typer.Option(1, "--alg", min=1, max=2, help="Algorithm: 1 - local alignment, 2 - global alignment"),
    scores: bool = typer.Option(False, "--scores/--no-scores", help="Compute just alignment scores, no backtracking"),
    gap_penalty: float = typer.Option(1.33, "--gap-penalty", min=0.0, help="Gap penalty for the alignments"),
    jobs: int = typer.Option(0, "--jobs", min=0, help="Worker threads (0 = all CPUs)"),
    heatmap: Optional[Path] = typer.Option(None, "--heatmap", help="Optional PNG heatmap of the scores"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print progress"),
) -> None:
    """Score every sequence of set 1 against every sequence of set 2."""

    config = RunConfig(
        results_dir=str(results),
        euler_levels=str(euler_levels),
        euler_positions=str(euler_positions),
        lca=str(lca),
        set_1=str(set_1),
        set_2=str(set_2),
        alg=alg,
        scores=scores,
        gap_penalty=gap_penalty,
        n_jobs=jobs,
        verbose=verbose,
    )
    typer.echo(f"tk4treesim {__version__}")
    typer.echo(str(config))

    try:
        result = run_from_config(config)
    except (FileNotFoundError, ValueError) as exc:
        _fail(exc)

    typer.echo(f"{len(result.lines)} scores written to {config.output_path}")

    if heatmap is not None:
        fig = plot_scores(result.scores, title=f"{config.mode} alignment similarity")
        heatmap.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(heatmap)
        typer.echo(f"Heatmap written to {heatmap}")


@app.command()
def align(
    seq_a: str = typer.Argument(..., help="Comma-separated symbols"),
    seq_b: str = typer.Argument(..., help="Comma-separated symbols"),
    mode: str = typer.Option("local", "--mode", help="local or global"),
    gap_penalty: float = typer.Option(1.0, "--gap-penalty", min=0.0, help="Gap penalty"),
) -> None:
    """Align two sequences with match/mismatch scoring and print the alignment."""

    try:
        result = pairwise(seq_a, seq_b, mode=mode, gap_penalty=gap_penalty)
    except ValueError as exc:
        _fail(exc)
    typer.echo(str(result))
    result.view()


@app.command()
def version() -> None:
    """Show the version."""

    typer.echo(f"tk4treesim {__version__}")


def main() -> None:
    """Execute the root CLI."""

    app()


__all__ = ["app", "main"]
