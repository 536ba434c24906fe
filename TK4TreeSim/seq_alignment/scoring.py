"""
Scoring schemes for symbol-sequence alignment

A scheme scores a pair of symbols (higher is more similar), carries one
flat gap penalty, and names the symbol written into the alignment when
two symbols are aligned against each other.
"""

from abc import ABC, abstractmethod
from typing import Dict, Tuple

GAP = "-"


class ScoringScheme(ABC):
    """Read-only pairwise scoring used by the alignment algorithms"""

    def __init__(self, gap_penalty: float):
        gap_penalty = float(gap_penalty)
        if gap_penalty < 0:
            raise ValueError(f"Gap penalty must be non-negative, got {gap_penalty}")
        self._gap_penalty = gap_penalty

    @property
    def gap_penalty(self) -> float:
        """Cost subtracted for every symbol aligned against a gap"""
        return self._gap_penalty

    @abstractmethod
    def distance(self, a: str, b: str) -> float:
        """Similarity of two symbols; may be negative for incomparable pairs"""

    @abstractmethod
    def consensus_symbol(self, a: str, b: str) -> str:
        """Symbol emitted when ``a`` and ``b`` are aligned"""


class IdentityScheme(ScoringScheme):
    """
    Match/mismatch scoring

    Parameters:
    -----------
    gap_penalty : float
        Linear gap penalty (default 1)
    match : float
        Score of two identical symbols (default 1)
    mismatch : float
        Score of two different symbols (default 0)
    """

    def __init__(self, gap_penalty: float = 1.0, match: float = 1.0, mismatch: float = 0.0):
        super().__init__(gap_penalty)
        self.match = float(match)
        self.mismatch = float(mismatch)

    def __repr__(self) -> str:
        return (f"IdentityScheme(gap_penalty={self.gap_penalty}, "
                f"match={self.match}, mismatch={self.mismatch})")

    def distance(self, a: str, b: str) -> float:
        return self.match if a == b else self.mismatch

    def consensus_symbol(self, a: str, b: str) -> str:
        return a if a == b else f"{a}/{b}"


class SubstitutionScheme(ScoringScheme):
    """
    Substitution-table scoring, e.g. a BLOSUM-like dictionary keyed by
    symbol pairs

    Pairs missing from the table score ``default``. With ``symmetric``
    the reversed pair is looked up before falling back.
    """

    def __init__(self, table: Dict[Tuple[str, str], float], gap_penalty: float,
                 default: float = -1.0, symmetric: bool = True):
        super().__init__(gap_penalty)
        self.table = {pair: float(score) for pair, score in table.items()}
        self.default = float(default)
        self.symmetric = symmetric

    def distance(self, a: str, b: str) -> float:
        score = self.table.get((a, b))
        if score is None and self.symmetric:
            score = self.table.get((b, a))
        return self.default if score is None else score

    def consensus_symbol(self, a: str, b: str) -> str:
        return a if a == b else f"{a}/{b}"
