"""
Smoke test for the frustration pipeline.

Runs small hand-checked graphs end to end and inspects the text report.
"""

import io
import pytest
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../../src'))

from frustration.core.config import EnumerationConfig, FrustrationConfig, ReportConfig
from frustration.core.graph import IsingGraph
from frustration.eval.reports import write_report
from frustration.pipeline import analyze_graph


FRUSTRATED = [(0, 1, -1), (1, 2, -1), (0, 2, 1)]
UNFRUSTRATED = [(3, 4, -1), (4, 5, -1), (3, 5, -1)]


@pytest.fixture
def config() -> FrustrationConfig:
    return FrustrationConfig(report=ReportConfig(deterministic=True))


def _lines(graph, config):
    buf = io.StringIO()
    write_report(analyze_graph(graph, config), buf)
    return buf.getvalue().splitlines()


def test_frustrated_triangle(config):
    lines = _lines(IsingGraph.from_weights(FRUSTRATED), config)

    assert lines[0] == "#BCS 1"
    assert lines[-1] == "#FC  1 / 1 = 1.000000"


def test_ferromagnetic_triangle(config):
    lines = _lines(IsingGraph.from_weights([(0, 1, -1), (1, 2, -1), (0, 2, -1)]), config)

    assert lines[-1] == "#FC  0 / 1 = 0.000000"
    assert "#FV  0 / 3 = 0.000000" in lines


def test_two_components(config):
    lines = _lines(IsingGraph.from_weights(FRUSTRATED + UNFRUSTRATED), config)

    assert lines[0] == "#BCS 2"
    assert lines[-1] == "#FC  1 / 2 = 0.500000"
    assert "#FV  3 / 6 = 0.500000" in lines
    assert "#FE  3 / 6 = 0.500000" in lines
    for v in "012":
        assert f"FV   1 1 | {v}" in lines
    for v in "345":
        assert f"NFV  1 1 | {v}" in lines
    assert "FC   0 1 2" in lines
    assert "NFC  3 4 5" in lines


def test_tree_is_acyclic(config):
    graph = IsingGraph.from_weights([(0, 1, 1), (1, 2, -1), (1, 3, 1)])
    report = analyze_graph(graph, config)

    assert report.is_acyclic
    assert report.stats is None
    assert _lines(graph, config) == ["#BCS 0"]


@pytest.mark.parametrize("all_cycles", [False, True])
def test_vertex_categories_are_exclusive(all_cycles):
    """Every vertex on some cycle is reported exactly once as FV or NFV."""
    graph = IsingGraph.from_weights(
        [(0, 1, 1), (1, 2, -1), (2, 3, 1), (3, 0, -1), (0, 2, 1), (1, 3, -1), (3, 4, 1)],
        fields={4: 2.0},
    )
    config = FrustrationConfig(enumeration=EnumerationConfig(all_cycles=all_cycles, num_workers=2))
    lines = _lines(graph, config)

    tagged = [l.split("|")[1].strip() for l in lines if l.startswith(("FV ", "NFV "))]
    assert sorted(tagged) == ["0", "1", "2", "3"]


def test_basic_cycle_count_is_cyclomatic_number(config):
    # 3x3 grid plus a pendant vertex and a separate triangle
    edges = []
    for r in range(3):
        for c in range(3):
            v = 3 * r + c
            if c < 2:
                edges.append((v, v + 1, 1))
            if r < 2:
                edges.append((v, v + 3, -1))
    edges += [(8, 9, 1)] + [(10, 11, 1), (11, 12, 1), (10, 12, 1)]
    graph = IsingGraph.from_weights(edges)

    report = analyze_graph(graph, config)

    assert report.basic_count == graph.num_edges - graph.num_vertices + 2
    assert report.basic_count == 5
