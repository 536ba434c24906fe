"""
Heatmap of a batch of normalized similarity scores
"""
from typing import Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np


def plot_scores(
    scores: np.ndarray,
    figsize: Tuple[int, int] = (8, 6),
    cmap: str = "viridis",
    title: Optional[str] = None,
    labels_a: Optional[Sequence[str]] = None,
    labels_b: Optional[Sequence[str]] = None,
    font_size: int = 10,
) -> plt.Figure:
    """
    Draw the (set A x set B) score matrix as a heatmap.
    - Rows are sequences of set A, columns sequences of set B.
    - Tick labels only when given and the matrix is small enough to read.
    """
    scores = np.asarray(scores, dtype=float)
    if scores.ndim != 2:
        raise ValueError(f"Expected a 2-D score matrix, got shape {scores.shape}")

    fig, ax = plt.subplots(figsize=figsize)
    image = ax.imshow(scores, cmap=cmap, aspect="auto", interpolation="nearest")
    cbar = fig.colorbar(image, ax=ax)
    cbar.set_label("normalized score", fontsize=font_size)

    n_a, n_b = scores.shape
    if labels_a is not None and n_a <= 50:
        ax.set_yticks(range(n_a))
        ax.set_yticklabels(labels_a, fontsize=font_size)
    if labels_b is not None and n_b <= 50:
        ax.set_xticks(range(n_b))
        ax.set_xticklabels(labels_b, fontsize=font_size, rotation=90)

    ax.set_xlabel("set B", fontsize=font_size)
    ax.set_ylabel("set A", fontsize=font_size)
    if title:
        ax.set_title(title, fontsize=font_size + 2, fontweight="bold")

    plt.tight_layout()
    return fig
