import pytest

from conftest import LCAS, LEVELS, POSITIONS
from TK4TreeSim.seq_alignment import GlobalAlignment, LocalAlignment, ScratchMemory
from TK4TreeSim.treepath import (
    INCOMPARABLE,
    NO_ANCESTOR,
    TreePathScheme,
    load_tables,
    read_lca,
    read_levels,
    read_positions,
    read_sequences,
    write_sequences,
)


class TestTreePathScheme:
    def test_sibling_leaves(self):
        scheme = TreePathScheme(1.0, [0, 1, 1], {"root": 0, "x": 1, "y": 2}, {("x", "y"): "root"})
        assert scheme.distance("x", "y") == pytest.approx(1.0 / 3.0)
        assert scheme.distance("y", "x") == pytest.approx(1.0 / 3.0)

    def test_identical(self, tree_scheme):
        assert tree_scheme.distance("a1", "a1") == 1.0
        assert tree_scheme.consensus_symbol("a1", "a1") == "a1"

    def test_depths(self, tree_scheme):
        # lca(a1, b) = root at level 0, a1 two below, b one below
        assert tree_scheme.distance("a1", "b") == pytest.approx(0.25)
        # lca(a, a1) = a at level 1
        assert tree_scheme.distance("a1", "a") == pytest.approx(2.0 / 3.0)

    def test_canonical_pair(self, tree_scheme):
        assert tree_scheme.canonical_pair("b", "a1") == ("a1", "b")
        assert tree_scheme.canonical_pair("a1", "b") == ("a1", "b")

    def test_missing_lca(self):
        scheme = TreePathScheme(1.0, [0, 1, 1], {"root": 0, "x": 1, "y": 2}, {})
        assert scheme.distance("x", "y") == INCOMPARABLE
        assert scheme.consensus_symbol("x", "y") == NO_ANCESTOR
        assert scheme.lca("x", "y") is None

    def test_lca_table_keyed_canonically(self):
        # an entry stored as (y, x) is never found: y sits later in the tour
        scheme = TreePathScheme(1.0, [0, 1, 1], {"root": 0, "x": 1, "y": 2}, {("y", "x"): "root"})
        assert scheme.distance("x", "y") == INCOMPARABLE

    def test_consensus_is_lca(self, tree_scheme):
        assert tree_scheme.consensus_symbol("b", "a1") == "root"
        assert tree_scheme.lca("a", "a1") == "a"

    def test_unknown_symbol(self, tree_scheme):
        with pytest.raises(KeyError):
            tree_scheme.distance("a", "zzz")
        with pytest.raises(ValueError, match="no entry"):
            tree_scheme.check_symbols([("a", "b"), ("a", "zzz")])

    def test_unresolved_ancestor(self):
        scheme = TreePathScheme(1.0, [0, 1, 1], {"x": 1, "y": 2}, {("x", "y"): "root"})
        with pytest.raises(ValueError, match="LCA 'root' of \('x', 'y'\)"):
            scheme.check_symbols([("x",), ("y",)])

    def test_alignment_emits_ancestors(self, tree_scheme):
        res = GlobalAlignment().align(("a1", "b"), ("a", "b"), tree_scheme, ScratchMemory())
        assert res.score == pytest.approx(2.0 / 3.0 + 1.0)
        assert res.alignment == (("a", "b"), ("a", "b"))

    def test_incomparable_is_a_plain_low_score(self):
        scheme = TreePathScheme(1.0, [0, 1, 1], {"root": 0, "x": 1, "y": 2}, {})
        res = LocalAlignment().align(("x", "y"), ("y", "x"), scheme, ScratchMemory())
        assert res.score == 1.0


class TestTablesIO:
    def test_read_tables(self, tree_files):
        assert read_levels(tree_files["levels"]) == LEVELS
        assert read_positions(tree_files["positions"]) == POSITIONS
        assert read_lca(tree_files["lca"]) == LCAS

    def test_load_tables(self, tree_files):
        tables = load_tables(tree_files["levels"], tree_files["positions"], tree_files["lca"])
        scheme = tables.scheme(2.0)
        assert scheme.gap_penalty == 2.0
        assert scheme.distance("a1", "b") == pytest.approx(0.25)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Could not open file"):
            read_levels(tmp_path / "nope.csv")

    @pytest.mark.parametrize("content,message", [("1\nx\n", "integer"), ("1\n-2\n", "non-negative")])
    def test_bad_levels(self, tmp_path, content, message):
        path = tmp_path / "levels.csv"
        path.write_text(content)
        with pytest.raises(ValueError, match=message):
            read_levels(path)

    def test_duplicate_positions(self, tmp_path):
        path = tmp_path / "positions.csv"
        path.write_text("a,1\nb,2\na,3\n")
        with pytest.raises(ValueError, match="duplicates: a"):
            read_positions(path)

    def test_position_token_count(self, tmp_path):
        path = tmp_path / "positions.csv"
        path.write_text("a,1,2\n")
        with pytest.raises(ValueError, match="two tokens"):
            read_positions(path)

    def test_lca_token_count(self, tmp_path):
        path = tmp_path / "lca.csv"
        path.write_text("a,b\n")
        with pytest.raises(ValueError, match="three tokens"):
            read_lca(path)

    def test_position_out_of_range(self, tree_files):
        tree_files["positions"].write_text("root,0\na,99\n")
        with pytest.raises(ValueError, match="outside the levels table"):
            load_tables(tree_files["levels"], tree_files["positions"], tree_files["lca"])

    def test_unknown_lca_symbol_warns(self, tree_files):
        with open(tree_files["lca"], "a") as f:
            f.write("a,ghost,root\n")
        with pytest.warns(UserWarning, match="no Euler position"):
            load_tables(tree_files["levels"], tree_files["positions"], tree_files["lca"])

    def test_unknown_lca_value_rejected(self, tree_files):
        with open(tree_files["lca"], "a") as f:
            f.write("a1,b,ghost\n")
        with pytest.raises(ValueError, match="LCA value\(s\) have no Euler position, e.g. 'ghost'"):
            load_tables(tree_files["levels"], tree_files["positions"], tree_files["lca"])

    def test_sequences(self, tmp_path):
        path = tmp_path / "set.csv"
        path.write_text("a,b,,a1\n\nb\n")
        assert read_sequences(path) == [("a", "b", "a1"), ("b",)]

        out = tmp_path / "copy.csv"
        write_sequences(read_sequences(path), out)
        assert out.read_text() == "a,b,a1\nb\n"
