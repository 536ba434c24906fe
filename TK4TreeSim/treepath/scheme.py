"""
Tree-path similarity between symbols of a rooted category tree

Symbols are vertices of a tree that was walked as an Euler tour offline.
Each symbol has a position in the tour, each tour position has a depth
(level), and the lowest common ancestor of symbol pairs is precomputed
and keyed by the canonical pair (lower tour position first).
"""
from __future__ import annotations

from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from ..seq_alignment.scoring import ScoringScheme

# score of a pair without a common-ancestor entry
INCOMPARABLE = -1.0
# consensus symbol of a pair without a common-ancestor entry
NO_ANCESTOR = ""


class TreePathScheme(ScoringScheme):
    """
    Scores two symbols by how deep their lowest common ancestor sits
    relative to the path that joins them::

        d(a, b) = (1 + level(lca)) / (1 + level(lca) + depth_a + depth_b)

    where ``depth_x = level(x) - level(lca)``. Identical symbols score 1,
    pairs with no LCA entry score -1.

    Example:
        >>> scheme = TreePathScheme(1.0, [0, 1, 1], {"root": 0, "x": 1, "y": 2},
        ...                         {("x", "y"): "root"})
        >>> round(scheme.distance("x", "y"), 4)
        0.3333
    """

    def __init__(self, gap_penalty: float, levels: Sequence[int],
                 positions: Mapping[str, int], lcas: Mapping[Tuple[str, str], str]):
        super().__init__(gap_penalty)
        self.levels = tuple(int(level) for level in levels)
        self.positions: Dict[str, int] = dict(positions)
        self.lcas: Dict[Tuple[str, str], str] = dict(lcas)

    def __repr__(self) -> str:
        return (f"TreePathScheme(gap_penalty={self.gap_penalty}, "
                f"symbols={len(self.positions)}, lcas={len(self.lcas)})")

    def canonical_pair(self, a: str, b: str) -> Tuple[str, str]:
        """Order a pair the way the LCA table is keyed: lower tour position first"""
        pos_a, pos_b = self.positions[a], self.positions[b]
        left = a if pos_a < pos_b else b
        right = b if pos_b >= pos_a else a
        return left, right

    def level(self, symbol: str) -> int:
        return self.levels[self.positions[symbol]]

    def lca(self, a: str, b: str) -> Optional[str]:
        """Lowest common ancestor of two symbols, or None when the table has no entry"""
        if a == b:
            return a
        return self.lcas.get(self.canonical_pair(a, b))

    def distance(self, a: str, b: str) -> float:
        if a == b:
            return 1.0
        left, right = self.canonical_pair(a, b)
        lca = self.lcas.get((left, right))
        if lca is None:
            return INCOMPARABLE

        level_lca = self.level(lca)
        depth_left = self.level(left) - level_lca
        depth_right = self.level(right) - level_lca
        return (1.0 + level_lca) / (1.0 + level_lca + depth_left + depth_right)

    def consensus_symbol(self, a: str, b: str) -> str:
        if a == b:
            return a
        return self.lcas.get(self.canonical_pair(a, b), NO_ANCESTOR)

    def check_ancestors(self) -> None:
        """Raise ValueError for the first LCA value that has no tour position"""
        for (left, right), lca in self.lcas.items():
            if lca not in self.positions:
                raise ValueError(
                    f"LCA {lca!r} of ({left!r}, {right!r}) has no entry in the Euler positions"
                )

    def check_symbols(self, sequences: Iterable[Sequence[str]]) -> None:
        """
        Raise ValueError for the first symbol that has no tour position.
        LCA values are checked first since any pair may lead to them.
        """
        self.check_ancestors()
        for n, seq in enumerate(sequences):
            for symbol in seq:
                if symbol not in self.positions:
                    raise ValueError(
                        f"Symbol {symbol!r} of sequence {n} has no entry in the Euler positions"
                    )
