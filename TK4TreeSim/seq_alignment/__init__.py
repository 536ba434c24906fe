"""
Sequence Alignment Module
Provides the dynamic-programming engine for pairwise symbol-sequence alignment
"""

from .memory import ScratchMemory
from .scoring import (
    GAP,
    ScoringScheme,
    IdentityScheme,
    SubstitutionScheme
)
from .pairwise import (
    AlignmentAlgorithm,
    AlignmentResult,
    GlobalAlignment,
    LocalAlignment,
    as_symbols,
    get_aligner,
    pairwise
)

__all__ = [
    "GAP",
    "ScratchMemory",
    "ScoringScheme",
    "IdentityScheme",
    "SubstitutionScheme",
    "AlignmentAlgorithm",
    "AlignmentResult",
    "GlobalAlignment",
    "LocalAlignment",
    "as_symbols",
    "get_aligner",
    "pairwise"
]
