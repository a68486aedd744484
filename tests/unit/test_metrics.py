"""Unit tests for frustration tallies and ratios."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../../src'))

from frustration.core.graph import EdgeKey, IsingGraph
from frustration.eval.metrics import (
    CycleVerdict,
    Ratio,
    Tally,
    summarize,
    tally_edges,
    tally_vertices,
)


VERDICTS = [
    CycleVerdict(path=("0", "1", "2"), frustrated=True),
    CycleVerdict(path=("0", "2", "3"), frustrated=False),
    CycleVerdict(path=("0", "1", "2", "3"), frustrated=True),
]


class TestTally:
    """Tests for the Tally category rule."""

    def test_strictly_more_frustrated(self):
        t = Tally(frustrated=3, non_frustrated=1)

        assert t.is_frustrated
        assert t.margin == 2
        assert t.total == 4

    def test_tie_is_non_frustrated(self):
        t = Tally(frustrated=2, non_frustrated=2)

        assert not t.is_frustrated
        assert t.margin == 0

    def test_non_frustrated_margin(self):
        t = Tally(frustrated=1, non_frustrated=4)

        assert not t.is_frustrated
        assert t.margin == 3


class TestRatio:
    """Tests for Ratio formatting."""

    def test_format(self):
        assert Ratio(1, 2).format() == "1 / 2 = 0.500000"
        assert Ratio(2, 3).format(precision=3) == "2 / 3 = 0.667"

    def test_zero_total(self):
        assert Ratio(0, 0).value == 0.0


class TestTallies:
    """Tests for vertex and edge tallies."""

    def test_vertex_tally(self):
        tally = tally_vertices(VERDICTS)

        assert tally["0"] == Tally(frustrated=2, non_frustrated=1)
        assert tally["1"] == Tally(frustrated=2, non_frustrated=0)
        assert tally["3"] == Tally(frustrated=1, non_frustrated=1)

    def test_vertex_counts_match_cycle_membership(self):
        tally = tally_vertices(VERDICTS)

        for v, t in tally.items():
            assert t.total == sum(1 for cv in VERDICTS if v in cv.path)

    def test_edge_tally_uses_wraparound(self):
        tally = tally_edges(VERDICTS)

        assert tally[EdgeKey.of("0", "3")] == Tally(frustrated=1, non_frustrated=1)
        assert tally[EdgeKey.of("0", "2")] == Tally(frustrated=1, non_frustrated=1)
        assert tally[EdgeKey.of("2", "3")] == Tally(frustrated=1, non_frustrated=1)
        assert tally[EdgeKey.of("1", "2")] == Tally(frustrated=2, non_frustrated=0)


class TestSummarize:
    """Tests for summarize."""

    def test_denominators_include_unused_vertices_and_edges(self):
        graph = IsingGraph.from_weights(
            [(0, 1, 1), (1, 2, 1), (0, 2, 1), (2, 3, 1), (0, 3, 1), (3, 4, 1)],
            fields={9: 1.0},
        )
        stats = summarize(graph, VERDICTS)

        # 0, 1, 2 are frustrated; 3 is tied
        assert stats.vertices == Ratio(3, 6)
        # 01, 12 frustrated; 02, 23, 03 tied; 34 unused
        assert stats.edges == Ratio(2, 6)
        assert stats.cycles == Ratio(2, 3)
        assert "4" not in stats.vertex_tally
        assert "9" not in stats.vertex_tally
