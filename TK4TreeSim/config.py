"""
Run configuration for batch similarity scoring
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Dict, Optional, Union

from .seq_alignment.pairwise import ALGORITHM_CODES


@dataclass
class RunConfig:
    """
    Parameters of one batch run, with the defaults of the original
    command line (local alignment, gap penalty 1.33, ``./results``)
    """
    results_dir: str = "./results"
    euler_levels: str = ""
    euler_positions: str = ""
    lca: str = ""
    set_1: str = ""
    set_2: str = ""
    alg: Union[int, str] = 1
    scores: bool = False
    gap_penalty: float = 1.33
    n_jobs: Optional[int] = None
    verbose: bool = False

    RESULTS_FILE: ClassVar[str] = "similarity-scores.dat"

    @property
    def mode(self) -> str:
        """Alignment mode name ("local" or "global")"""
        if isinstance(self.alg, str) and not self.alg.isdigit():
            mode = self.alg.lower()
            if mode not in ALGORITHM_CODES.values():
                raise ValueError(f"Unknown algorithm: {self.alg!r}")
            return mode
        code = int(self.alg)
        if code not in ALGORITHM_CODES:
            raise ValueError(f"Algorithm must be 1 (local) or 2 (global), got {code}")
        return ALGORITHM_CODES[code]

    @property
    def output_path(self) -> Path:
        return Path(self.results_dir) / self.RESULTS_FILE

    def input_files(self) -> Dict[str, str]:
        return {
            "Euler levels": self.euler_levels,
            "Euler positions": self.euler_positions,
            "LCAs": self.lca,
            "Set 1": self.set_1,
            "Set 2": self.set_2,
        }

    def validate(self) -> None:
        """Check every input file exists and the numeric parameters make sense"""
        for label, filename in self.input_files().items():
            if not filename or not Path(filename).is_file():
                raise FileNotFoundError(f"The {label} file {filename!r} does not exist!")
        if self.gap_penalty < 0:
            raise ValueError(f"Gap penalty must be non-negative, got {self.gap_penalty}")
        if self.n_jobs is not None and self.n_jobs < 0:
            raise ValueError(f"n_jobs must be non-negative, got {self.n_jobs}")
        _ = self.mode  # raises on an unknown algorithm

    def __str__(self) -> str:
        return (
            "Parameters\n\n"
            f"Results directory: {self.results_dir}\n"
            f"Euler Levels:      {self.euler_levels}\n"
            f"Euler Positions:   {self.euler_positions}\n"
            f"LCAs:              {self.lca}\n"
            f"Set 1:             {self.set_1}\n"
            f"Set 2:             {self.set_2}\n"
            f"Algorithm:         {self.alg}\n"
            f"Just scores:       {int(self.scores)}\n"
            f"Gap Penalty:       {self.gap_penalty}\n"
        )
