"""
Pairwise Symbol-Sequence Alignment Module
Global (Needleman-Wunsch) and local (Smith-Waterman) alignment with a
linear gap penalty over caller-owned scratch matrices
"""

import math
import re
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal, Optional, Sequence, Tuple, Union

import numpy as np

from .memory import ScratchMemory
from .scoring import GAP, IdentityScheme, ScoringScheme

Symbols = Sequence[str]
Track = Tuple[str, ...]

_SEPARATOR = re.compile(r",+")

# numeric codes used by the original command line
ALGORITHM_CODES = {1: "local", 2: "global"}


def as_symbols(seq: Union[str, Symbols]) -> Track:
    """
    Turn a comma-separated line (or any iterable of tokens) into an
    immutable tuple of interned symbols. Runs of commas count as one.

    Example:
        >>> as_symbols("a,b,,c")
        ('a', 'b', 'c')
    """
    if isinstance(seq, str):
        line = seq.strip()
        if not line:
            return ()
        tokens = _SEPARATOR.split(line)
    else:
        tokens = seq
    return tuple(sys.intern(str(t)) for t in tokens)


@dataclass
class AlignmentResult:
    """Score of one alignment plus the two aligned tracks (empty in score-only mode)"""
    score: float
    alignment: Tuple[Track, Track] = ((), ())
    mode: str = ""

    @property
    def aligned_a(self) -> Track:
        return self.alignment[0]

    @property
    def aligned_b(self) -> Track:
        return self.alignment[1]

    @property
    def length(self) -> int:
        return len(self.alignment[0])

    def gaps(self) -> int:
        """Number of gap placeholders over both tracks"""
        return self.aligned_a.count(GAP) + self.aligned_b.count(GAP)

    def __str__(self) -> str:
        return (
            f"Alignment Score: {self.score}\n"
            f"Type: {self.mode}\n"
            f"Length: {self.length}\n"
            f"Gaps: {self.gaps()}\n"
        )

    def view(self, width: int = 10) -> None:
        """Print both tracks, ``width`` symbols per block, tab separated"""
        lines = ["", f"Score: {self.score}", ""]
        for start in range(0, self.length, width):
            lines.append("A: " + "\t".join(self.aligned_a[start:start + width]))
            lines.append("B: " + "\t".join(self.aligned_b[start:start + width]))
            lines.append("")
        for line in lines:
            print(line)


class AlignmentAlgorithm(ABC):
    """
    Dynamic-programming similarity between two symbol sequences

    The scoring scheme and the scratch memory are passed into every call;
    the algorithm object itself holds no per-call state, so one instance
    can be shared by any number of worker threads as long as each worker
    brings its own ScratchMemory.
    """

    mode = ""

    def __init__(self, score_only: bool = False, verbose: bool = False):
        self.score_only = score_only
        self.verbose = verbose

    def __repr__(self) -> str:
        return f"{type(self).__name__}(score_only={self.score_only})"

    @abstractmethod
    def align(self, seq_a: Symbols, seq_b: Symbols, scheme: ScoringScheme,
              memory: ScratchMemory) -> AlignmentResult:
        """Align ``seq_a`` against ``seq_b``, overwriting ``memory``"""

    @abstractmethod
    def _keep_tracing(self, i: int, j: int, next_i: int, next_j: int) -> bool:
        """Whether the traceback continues from (i, j) to (next_i, next_j)"""

    def _traceback(self, seq_a: Symbols, seq_b: Symbols, scheme: ScoringScheme,
                   memory: ScratchMemory, i: int, j: int) -> Tuple[Track, Track]:
        """Follow the recorded predecessors from (i, j) and emit both tracks"""
        trace_row, trace_col = memory.trace_row, memory.trace_col
        consensus = scheme.consensus_symbol
        track_a, track_b = [], []

        next_i, next_j = int(trace_row[i, j]), int(trace_col[i, j])
        while self._keep_tracing(i, j, next_i, next_j):
            # on the border only one sequence has a symbol left
            if i == 0:
                symbol = seq_b[j - 1]
            elif j == 0:
                symbol = seq_a[i - 1]
            else:
                symbol = consensus(seq_a[i - 1], seq_b[j - 1])
            track_a.append(GAP if next_i == i else symbol)
            track_b.append(GAP if next_j == j else symbol)
            i, j = next_i, next_j
            next_i, next_j = int(trace_row[i, j]), int(trace_col[i, j])

        return tuple(reversed(track_a)), tuple(reversed(track_b))

    def _dump(self, memory: ScratchMemory, rows: int, cols: int) -> None:
        H, _, _ = memory.active(rows, cols)
        print(f"\n{type(self).__name__}: H ({rows} x {cols})")
        print(np.array2string(H, precision=4, separator=","))


class GlobalAlignment(AlignmentAlgorithm):
    """
    Needleman-Wunsch global alignment

    Ties between the diagonal, up and left moves are broken in that
    order; the recorded predecessor decides the reconstructed alignment.
    Every traceback step writes the consensus of the current cell into
    each track whose index moves, and a gap into the other one.

    Example:
        >>> mem = ScratchMemory()
        >>> res = GlobalAlignment().align(list("xyz"), list("xyz"), IdentityScheme(), mem)
        >>> res.score
        3.0
    """

    mode = "global"

    def align(self, seq_a: Symbols, seq_b: Symbols, scheme: ScoringScheme,
              memory: ScratchMemory) -> AlignmentResult:
        n_a, n_b = len(seq_a), len(seq_b)
        delta = scheme.gap_penalty
        distance = scheme.distance

        memory.reset(n_a + 1, n_b + 1)
        H, trace_row, trace_col = memory.H, memory.trace_row, memory.trace_col

        # prefix against an all-gap counterpart
        for i in range(1, n_a + 1):
            H[i, 0] = -i * delta
            trace_row[i, 0] = i - 1
        for j in range(1, n_b + 1):
            H[0, j] = -j * delta
            trace_col[0, j] = j - 1

        for i in range(1, n_a + 1):
            a = seq_a[i - 1]
            h_prev, h_row = H[i - 1], H[i]
            t_row, t_col = trace_row[i], trace_col[i]
            for j in range(1, n_b + 1):
                diag = h_prev[j - 1] + distance(a, seq_b[j - 1])
                up = h_prev[j] - delta
                left = h_row[j - 1] - delta
                # first maximum wins: diagonal, up, left
                if diag >= up and diag >= left:
                    h_row[j] = diag
                    t_row[j], t_col[j] = i - 1, j - 1
                elif up >= left:
                    h_row[j] = up
                    t_row[j], t_col[j] = i - 1, j
                else:
                    h_row[j] = left
                    t_row[j], t_col[j] = i, j - 1

        if self.verbose:
            self._dump(memory, n_a + 1, n_b + 1)

        score = float(H[n_a, n_b])
        assert math.isfinite(score), f"non-finite global score {score}"

        if self.score_only or n_a == 0 or n_b == 0:
            return AlignmentResult(score=score, mode=self.mode)
        alignment = self._traceback(seq_a, seq_b, scheme, memory, n_a, n_b)
        return AlignmentResult(score=score, alignment=alignment, mode=self.mode)

    def _keep_tracing(self, i: int, j: int, next_i: int, next_j: int) -> bool:
        return i != 0 or j != 0


class LocalAlignment(AlignmentAlgorithm):
    """
    Smith-Waterman local alignment

    A fourth candidate 0.0 lets a new local alignment start at any cell;
    such an origin cell points to itself. The score is the first maximum
    in row-major order, and the traceback starts there.
    """

    mode = "local"

    def align(self, seq_a: Symbols, seq_b: Symbols, scheme: ScoringScheme,
              memory: ScratchMemory) -> AlignmentResult:
        n_a, n_b = len(seq_a), len(seq_b)
        delta = scheme.gap_penalty
        distance = scheme.distance

        memory.reset(n_a + 1, n_b + 1)
        H, trace_row, trace_col = memory.H, memory.trace_row, memory.trace_col

        h_max = 0.0
        i_max = j_max = 0
        for i in range(1, n_a + 1):
            a = seq_a[i - 1]
            h_prev, h_row = H[i - 1], H[i]
            t_row, t_col = trace_row[i], trace_col[i]
            for j in range(1, n_b + 1):
                diag = h_prev[j - 1] + distance(a, seq_b[j - 1])
                up = h_prev[j] - delta
                left = h_row[j - 1] - delta
                # first maximum wins: diagonal, up, left, floor
                if diag >= up and diag >= left and diag >= 0.0:
                    h = diag
                    t_row[j], t_col[j] = i - 1, j - 1
                elif up >= left and up >= 0.0:
                    h = up
                    t_row[j], t_col[j] = i - 1, j
                elif left >= 0.0:
                    h = left
                    t_row[j], t_col[j] = i, j - 1
                else:
                    h = 0.0
                    t_row[j], t_col[j] = i, j
                h_row[j] = h
                if h > h_max:
                    h_max, i_max, j_max = h, i, j

        if self.verbose:
            self._dump(memory, n_a + 1, n_b + 1)

        score = float(h_max)
        assert math.isfinite(score), f"non-finite local score {score}"

        if self.score_only:
            return AlignmentResult(score=score, mode=self.mode)
        alignment = self._traceback(seq_a, seq_b, scheme, memory, i_max, j_max)
        return AlignmentResult(score=score, alignment=alignment, mode=self.mode)

    def _keep_tracing(self, i: int, j: int, next_i: int, next_j: int) -> bool:
        return ((i != next_i or j != next_j)
                and next_i >= 0 and next_j >= 0
                and i > 0 and j > 0)


def get_aligner(mode: Union[str, int] = "local", score_only: bool = False,
                verbose: bool = False) -> AlignmentAlgorithm:
    """
    Build an aligner by name ("local" / "global") or by the numeric code
    of the original command line (1 = local, 2 = global)
    """
    if isinstance(mode, int) and not isinstance(mode, bool):
        if mode not in ALGORITHM_CODES:
            raise ValueError(f"Unknown algorithm code: {mode} (expected 1 or 2)")
        mode = ALGORITHM_CODES[mode]
    mode = str(mode).lower()
    if mode == "local":
        return LocalAlignment(score_only=score_only, verbose=verbose)
    if mode == "global":
        return GlobalAlignment(score_only=score_only, verbose=verbose)
    raise ValueError(f"Unknown alignment mode: {mode!r} (expected 'local' or 'global')")


def pairwise(
    seq_a: Union[str, Symbols],
    seq_b: Union[str, Symbols],
    scheme: Optional[ScoringScheme] = None,
    mode: Literal["global", "local"] = "local",
    score_only: bool = False,
    gap_penalty: Optional[float] = None,
    verbose: bool = False
) -> AlignmentResult:
    """
    One-off pairwise alignment

    Parameters:
    -----------
    seq_a, seq_b : str or sequence of str
        Symbol sequences; strings are read as comma-separated symbols
    scheme : ScoringScheme, optional
        Scoring scheme (default: IdentityScheme)
    mode : str
        "local" or "global" (default "local")
    score_only : bool
        Skip the traceback
    gap_penalty : float, optional
        Gap penalty for the default IdentityScheme (default 1)
    verbose : bool
        Print the filled score matrix

    Returns:
    --------
    AlignmentResult

    Examples:
    ---------
    >>> pairwise("x,y,z", "x,y,z", mode="global").score
    3.0
    """
    if scheme is None:
        scheme = IdentityScheme(gap_penalty=1.0 if gap_penalty is None else gap_penalty)
    aligner = get_aligner(mode, score_only=score_only, verbose=verbose)
    return aligner.align(as_symbols(seq_a), as_symbols(seq_b), scheme, ScratchMemory())
