"""
Batch similarity scoring of one sequence set against another.

- Outer loop over set A, one sequence at a time
- Inner loop over set B, split into contiguous shares over a thread pool
- Every pool thread owns one private ScratchMemory for the whole run
- Each share is scored into a private buffer, then appended to the
  row output in a single locked step
- Async helper for calling from an event loop
"""
from __future__ import annotations

import asyncio
import os
import threading
import warnings
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, List, Optional, Sequence, Tuple, Union

import numpy as np

from ..config import RunConfig
from ..seq_alignment import AlignmentAlgorithm, ScoringScheme, ScratchMemory, get_aligner
from ..treepath import load_tables, read_sequences

SCORE_FORMAT = "{:.6g}"

Symbols = Sequence[str]


def normalize_score(raw: float, len_a: int, len_b: int) -> float:
    """
    Square the raw alignment score and divide by the squared length of
    the shorter sequence

    Example:
        >>> normalize_score(4.0, 2, 3)
        4.0
    """
    shortest = min(len_a, len_b)
    if shortest == 0:
        raise ValueError("Cannot normalise a score against an empty sequence")
    return (raw * raw) / float(shortest * shortest)


def _shares(n: int, n_jobs: int) -> List[range]:
    """Split range(n) into at most n_jobs contiguous, near-equal pieces"""
    size, extra = divmod(n, n_jobs)
    shares, start = [], 0
    for k in range(n_jobs):
        stop = start + size + (1 if k < extra else 0)
        if stop > start:
            shares.append(range(start, stop))
        start = stop
    return shares


@dataclass
class BatchResult:
    """
    Scores of every (i, j) pair

    ``scores`` and ``raw`` are indexed by pair; ``lines`` holds the
    normalized scores in the order they were emitted (row by row, and
    within a row in the order the worker shares were appended).
    """
    scores: np.ndarray
    raw: np.ndarray
    lines: List[float] = field(default_factory=list)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.scores.shape

    def write(self, filename: Union[str, Path], float_format: str = SCORE_FORMAT) -> Path:
        """Write one normalized score per line"""
        path = Path(filename)
        with open(path, 'w') as f:
            for score in self.lines:
                f.write(float_format.format(score) + "\n")
        return path


class BatchRunner:
    """
    Parallel all-against-all alignment scoring

    Parameters:
    -----------
    aligner : AlignmentAlgorithm
        Global or local aligner, shared read-only by all workers
    scheme : ScoringScheme
        Scoring scheme, shared read-only by all workers
    n_jobs : int, optional
        Worker threads. None/0 = all CPUs
    verbose : bool
        Print a progress bar over set A
    """

    def __init__(self, aligner: AlignmentAlgorithm, scheme: ScoringScheme,
                 n_jobs: Optional[int] = None, verbose: bool = False):
        if n_jobs is None or n_jobs <= 0:
            n_jobs = os.cpu_count() or 1
        self.aligner = aligner
        self.scheme = scheme
        self.n_jobs = n_jobs
        self.verbose = verbose
        self._local = threading.local()
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"BatchRunner({self.aligner!r}, {self.scheme!r}, n_jobs={self.n_jobs})"

    def _memory(self) -> ScratchMemory:
        """ScratchMemory private to the calling thread"""
        memory = getattr(self._local, "memory", None)
        if memory is None:
            memory = self._local.memory = ScratchMemory()
        return memory

    def _score_share(self, seq_a: Symbols, set_b: Sequence[Symbols], share: range,
                     sink: List[Tuple[int, float, float]]) -> None:
        memory = self._memory()
        buffer = []
        for j in share:
            seq_b = set_b[j]
            result = self.aligner.align(seq_a, seq_b, self.scheme, memory)
            buffer.append((j, result.score, normalize_score(result.score, len(seq_a), len(seq_b))))
        with self._lock:
            sink.extend(buffer)

    def validate(self, set_a: Sequence[Symbols], set_b: Sequence[Symbols]) -> None:
        """Reject inputs that would fail half way through the batch"""
        for name, seqs in (("set A", set_a), ("set B", set_b)):
            if len(seqs) == 0:
                warnings.warn(f"{name} is empty, nothing to align", stacklevel=3)
            for n, seq in enumerate(seqs):
                if len(seq) == 0:
                    raise ValueError(f"Sequence {n} of {name} is empty")
        check_symbols = getattr(self.scheme, "check_symbols", None)
        if check_symbols is not None:
            check_symbols(set_a)
            check_symbols(set_b)

    def run(self, set_a: Sequence[Symbols], set_b: Sequence[Symbols],
            out: Optional[IO[str]] = None, float_format: str = SCORE_FORMAT,
            check: bool = True) -> BatchResult:
        """
        Score every sequence of ``set_a`` against every sequence of ``set_b``

        Parameters:
        -----------
        set_a, set_b : sequence of symbol sequences
        out : text stream, optional
            Receives one normalized score per line as each row completes
        float_format : str
            Format of the scores written to ``out``
        check : bool
            Run :meth:`validate` first (skip only if the caller already did)

        Returns:
        --------
        BatchResult
        """
        if check:
            self.validate(set_a, set_b)

        n_a, n_b = len(set_a), len(set_b)
        raw = np.zeros((n_a, n_b), dtype=np.float64)
        scores = np.zeros((n_a, n_b), dtype=np.float64)
        lines: List[float] = []
        shares = _shares(n_b, self.n_jobs)

        if self.verbose:
            print(f"\nScoring {n_a} x {n_b} pairs with {type(self.aligner).__name__} "
                  f"on {self.n_jobs} thread(s)")
            print("Computing ", end="")

        with ThreadPoolExecutor(max_workers=self.n_jobs) as executor:
            for i, seq_a in enumerate(set_a):
                sink: List[Tuple[int, float, float]] = []
                futures = [executor.submit(self._score_share, seq_a, set_b, share, sink)
                           for share in shares]
                for future in futures:
                    future.result()

                for j, raw_score, score in sink:
                    raw[i, j] = raw_score
                    scores[i, j] = score
                    lines.append(score)
                    if out is not None:
                        out.write(float_format.format(score) + "\n")

                if self.verbose and i % max(1, n_a // 10) == 0:
                    print("█", end="", flush=True)

        if self.verbose:
            print(" 100.0%")
            print(f"✓ {n_a * n_b} scores computed")

        return BatchResult(scores=scores, raw=raw, lines=lines)


def run_batch(set_a: Sequence[Symbols],
              set_b: Sequence[Symbols],
              scheme: ScoringScheme,
              mode: Union[str, int] = "local",
              score_only: bool = True,
              n_jobs: Optional[int] = None,
              out: Optional[IO[str]] = None,
              verbose: bool = False) -> BatchResult:
    """
    Score two sequence sets against each other

    Example:
        >>> from TK4TreeSim.seq_alignment import IdentityScheme
        >>> res = run_batch([("a", "b")], [("a", "b"), ("b",)], IdentityScheme(), mode="global")
        >>> res.scores.tolist()
        [[1.0, 0.0]]
    """
    aligner = get_aligner(mode, score_only=score_only)
    return BatchRunner(aligner, scheme, n_jobs=n_jobs, verbose=verbose).run(set_a, set_b, out=out)


async def run_batch_async(set_a: Sequence[Symbols],
                          set_b: Sequence[Symbols],
                          scheme: ScoringScheme,
                          mode: Union[str, int] = "local",
                          score_only: bool = True,
                          n_jobs: Optional[int] = None) -> BatchResult:
    """
    Async version: runs :func:`run_batch` in the default executor.
    (Does not speed up the computation; keeps the event loop free.)
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(
        None,
        lambda: run_batch(set_a, set_b, scheme, mode=mode,
                          score_only=score_only, n_jobs=n_jobs)
    )


def run_from_config(config: RunConfig) -> BatchResult:
    """
    Full run: load tables and sequence sets, check everything, then
    write ``<results_dir>/similarity-scores.dat``
    """
    config.validate()
    tables = load_tables(config.euler_levels, config.euler_positions, config.lca)
    set_1 = read_sequences(config.set_1)
    set_2 = read_sequences(config.set_2)

    scheme = tables.scheme(config.gap_penalty)
    aligner = get_aligner(config.mode, score_only=config.scores, verbose=False)
    runner = BatchRunner(aligner, scheme, n_jobs=config.n_jobs, verbose=config.verbose)
    # checked before the output file is created
    runner.validate(set_1, set_2)

    out_path = config.output_path
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, 'w') as f:
        result = runner.run(set_1, set_2, out=f, check=False)

    if config.verbose:
        print(f"✓ Scores written to {out_path}")
    return result
