"""
Readers and writers for the Euler-tour tables and the sequence sets

File formats (blank lines are skipped everywhere, commas may repeat):
- levels:    one non-negative integer per line
- positions: ``symbol,index`` per line, no duplicate symbols
- LCA:       ``left,right,lca`` per line, keyed by the canonical pair
- sequences: one comma-separated symbol sequence per line
"""
from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Sequence, Tuple, Union

from ..seq_alignment.pairwise import Track, as_symbols
from .scheme import TreePathScheme

PathLike = Union[str, Path]


def _read_lines(filename: PathLike) -> Iterator[Tuple[int, str]]:
    """Yield (line number, stripped line) for every non-blank line"""
    path = Path(filename)
    if not path.is_file():
        raise FileNotFoundError(f"Could not open file: {filename}")
    with open(path, 'r') as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if line:
                yield lineno, line


def _parse_int(token: str, filename: PathLike, lineno: int) -> int:
    try:
        value = int(token)
    except ValueError:
        raise ValueError(f"{filename}:{lineno}: expected an integer, got {token!r}") from None
    if value < 0:
        raise ValueError(f"{filename}:{lineno}: expected a non-negative integer, got {value}")
    return value


def read_levels(filename: PathLike) -> List[int]:
    """
    Read the vertex levels of the Euler tour

    Example:
        >>> levels = read_levels('euler_levels.csv')
    """
    return [_parse_int(line, filename, lineno) for lineno, line in _read_lines(filename)]


def read_positions(filename: PathLike) -> Dict[str, int]:
    """Read the ``symbol,index`` table of Euler-tour positions"""
    positions: Dict[str, int] = {}
    for lineno, line in _read_lines(filename):
        tokens = as_symbols(line)
        if len(tokens) != 2:
            raise ValueError(
                f"{filename}:{lineno}: each line of the Euler positions can only "
                f"contain two tokens <key>,<value>, got {len(tokens)}"
            )
        symbol, index = tokens
        if symbol in positions:
            raise ValueError(f"{filename}:{lineno}: the Euler positions cannot contain duplicates: {symbol}")
        positions[symbol] = _parse_int(index, filename, lineno)
    return positions


def read_lca(filename: PathLike) -> Dict[Tuple[str, str], str]:
    """Read the ``left,right,lca`` table"""
    lcas: Dict[Tuple[str, str], str] = {}
    for lineno, line in _read_lines(filename):
        tokens = as_symbols(line)
        if len(tokens) != 3:
            raise ValueError(f"{filename}:{lineno}: the LCA requires three tokens, got {len(tokens)}")
        left, right, lca = tokens
        lcas[(left, right)] = lca
    return lcas


def read_sequences(filename: PathLike) -> List[Track]:
    """
    Read a sequence set, one comma-separated sequence per line

    Example:
        >>> seqs = read_sequences('set_1.csv')
        >>> seqs[0]
        ('news', 'sports', 'news')
    """
    return [as_symbols(line) for _, line in _read_lines(filename)]


def write_sequences(sequences: Sequence[Sequence[str]], filename: PathLike) -> None:
    """Write a sequence set in the format read by :func:`read_sequences`"""
    with open(filename, 'w') as f:
        for seq in sequences:
            f.write(",".join(seq) + "\n")


@dataclass
class TreeTables:
    """Euler-tour tables backing a TreePathScheme"""
    levels: List[int]
    positions: Dict[str, int]
    lcas: Dict[Tuple[str, str], str] = field(default_factory=dict)

    def validate(self) -> None:
        """
        Reject positions that point outside the levels table and LCA
        values without a position; warn about LCA keys that mention
        symbols without a position
        """
        n_levels = len(self.levels)
        for symbol, index in self.positions.items():
            if index >= n_levels:
                raise ValueError(
                    f"Euler position {index} of {symbol!r} is outside the levels table ({n_levels} entries)"
                )
        missing = sorted({lca for lca in self.lcas.values() if lca not in self.positions})
        if missing:
            raise ValueError(
                f"{len(missing)} LCA value(s) have no Euler position, e.g. {missing[0]!r}"
            )
        unknown = sorted({s for key in self.lcas for s in key if s not in self.positions})
        if unknown:
            warnings.warn(
                f"{len(unknown)} LCA symbol(s) have no Euler position, e.g. {unknown[0]!r}",
                stacklevel=2
            )

    def scheme(self, gap_penalty: float) -> TreePathScheme:
        return TreePathScheme(gap_penalty, self.levels, self.positions, self.lcas)


def load_tables(levels_file: PathLike, positions_file: PathLike, lca_file: PathLike) -> TreeTables:
    """Read and validate all three Euler-tour tables"""
    tables = TreeTables(
        levels=read_levels(levels_file),
        positions=read_positions(positions_file),
        lcas=read_lca(lca_file),
    )
    tables.validate()
    return tables
