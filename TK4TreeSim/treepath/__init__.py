"""
Tree-path scoring and its Euler-tour input tables
"""

from .scheme import INCOMPARABLE, NO_ANCESTOR, TreePathScheme
from .tables_io import (
    TreeTables,
    load_tables,
    read_lca,
    read_levels,
    read_positions,
    read_sequences,
    write_sequences
)

__all__ = [
    "INCOMPARABLE",
    "NO_ANCESTOR",
    "TreePathScheme",
    "TreeTables",
    "load_tables",
    "read_lca",
    "read_levels",
    "read_positions",
    "read_sequences",
    "write_sequences"
]
