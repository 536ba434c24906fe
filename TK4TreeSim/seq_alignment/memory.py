"""
Reusable dynamic-programming scratch matrices

One ScratchMemory is owned by exactly one worker at a time. It is passed
into every alignment call so that a long stream of pairwise alignments
does not allocate a fresh matrix per pair.
"""

from typing import Tuple

import numpy as np


class ScratchMemory:
    """
    Score matrix ``H`` plus the two traceback matrices (predecessor row
    and predecessor column) shared by the alignment algorithms.

    The backing arrays only ever grow. When a request does not fit, the
    undersized axis is reallocated to twice the requested size and the
    old contents are copied over.

    Example:
        >>> mem = ScratchMemory()
        >>> mem.reset(4, 6)
        >>> float(mem.H[3, 5])
        0.0
    """

    SCORE_DTYPE = np.float64
    INDEX_DTYPE = np.int32

    __slots__ = ("_H", "_trace_row", "_trace_col")

    def __init__(self, rows: int = 0, cols: int = 0):
        shape = (max(rows, 0), max(cols, 0))
        self._H = np.zeros(shape, dtype=self.SCORE_DTYPE)
        self._trace_row = np.zeros(shape, dtype=self.INDEX_DTYPE)
        self._trace_col = np.zeros(shape, dtype=self.INDEX_DTYPE)

    def __repr__(self) -> str:
        rows, cols = self.capacity
        return f"ScratchMemory(capacity={rows}x{cols})"

    @property
    def capacity(self) -> Tuple[int, int]:
        """Allocated (rows, cols) of every grid"""
        return self._H.shape

    @property
    def H(self) -> np.ndarray:
        return self._H

    @property
    def trace_row(self) -> np.ndarray:
        return self._trace_row

    @property
    def trace_col(self) -> np.ndarray:
        return self._trace_col

    @staticmethod
    def _grow(grid: np.ndarray, rows: int, cols: int) -> np.ndarray:
        new = np.zeros((rows, cols), dtype=grid.dtype)
        old_rows, old_cols = grid.shape
        new[:old_rows, :old_cols] = grid
        return new

    def ensure_capacity(self, rows: int, cols: int) -> bool:
        """
        Make every grid hold at least ``rows`` x ``cols`` cells

        Returns:
        --------
        bool
            True if the grids were reallocated
        """
        cap_rows, cap_cols = self.capacity
        new_rows = rows * 2 if rows > cap_rows else cap_rows
        new_cols = cols * 2 if cols > cap_cols else cap_cols
        if (new_rows, new_cols) == (cap_rows, cap_cols):
            return False

        self._H = self._grow(self._H, new_rows, new_cols)
        self._trace_row = self._grow(self._trace_row, new_rows, new_cols)
        self._trace_col = self._grow(self._trace_col, new_rows, new_cols)
        return True

    def reset(self, rows: int, cols: int) -> None:
        """Grow if needed, then zero the first ``rows`` x ``cols`` cells of each grid"""
        self.ensure_capacity(rows, cols)
        self._H[:rows, :cols] = 0.0
        self._trace_row[:rows, :cols] = 0
        self._trace_col[:rows, :cols] = 0

    def active(self, rows: int, cols: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Views of the active region, mainly for inspection and debugging"""
        return (
            self._H[:rows, :cols],
            self._trace_row[:rows, :cols],
            self._trace_col[:rows, :cols],
        )
