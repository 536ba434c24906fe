"""Pytest configuration for TK4TreeSim tests."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict

import matplotlib
import pytest

matplotlib.use("Agg")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# root
# ├── a
# │   └── a1
# └── b
# Euler tour: root a a1 a root b root
LEVELS = [0, 1, 2, 1, 0, 1, 0]
POSITIONS = {"root": 0, "a": 1, "a1": 2, "b": 5}
LCAS = {
    ("a", "a1"): "a",
    ("a", "b"): "root",
    ("a1", "b"): "root",
    ("root", "a"): "root",
    ("root", "a1"): "root",
    ("root", "b"): "root",
}


def write_tree_tables(directory: Path) -> Dict[str, Path]:
    directory.mkdir(parents=True, exist_ok=True)
    levels = directory / "euler_levels.csv"
    positions = directory / "euler_positions.csv"
    lca = directory / "lca.csv"
    levels.write_text("\n".join(f" {level} " for level in LEVELS) + "\n\n")
    positions.write_text("".join(f"{s},{p}\n" for s, p in POSITIONS.items()))
    lca.write_text("".join(f"{l},{r},{c}\n" for (l, r), c in LCAS.items()) + "\n")
    return {"levels": levels, "positions": positions, "lca": lca}


@pytest.fixture
def tree_files(tmp_path: Path) -> Dict[str, Path]:
    return write_tree_tables(tmp_path / "tables")


@pytest.fixture
def tree_scheme():
    from TK4TreeSim.treepath import TreePathScheme

    return TreePathScheme(1.33, LEVELS, POSITIONS, LCAS)


__all__ = ["LEVELS", "POSITIONS", "LCAS", "write_tree_tables"]
