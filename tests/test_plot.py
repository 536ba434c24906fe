import numpy as np
import pytest

from TK4TreeSim.batch import plot_scores


def test_plot_scores(tmp_path):
    scores = np.array([[1.0, 0.25], [0.5, 0.0]])
    fig = plot_scores(scores, title="demo", labels_a=["s1", "s2"], labels_b=["t1", "t2"])
    ax = fig.axes[0]
    assert ax.get_title() == "demo"
    assert [t.get_text() for t in ax.get_yticklabels()] == ["s1", "s2"]
    out = tmp_path / "heatmap.png"
    fig.savefig(out)
    assert out.stat().st_size > 0


def test_plot_scores_rejects_vectors():
    with pytest.raises(ValueError, match="2-D"):
        plot_scores(np.zeros(3))
