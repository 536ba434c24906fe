"""
Batch Scoring Module
Parallel all-against-all similarity scoring of two sequence sets
"""

from .runner import (
    BatchResult,
    BatchRunner,
    normalize_score,
    run_batch,
    run_batch_async,
    run_from_config
)
from .plot import plot_scores

__all__ = [
    "BatchResult",
    "BatchRunner",
    "normalize_score",
    "run_batch",
    "run_batch_async",
    "run_from_config",
    "plot_scores"
]
