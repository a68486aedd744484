"""Frustration analysis pipeline.

Wires the stages together:

    IsingGraph
      -> spanning-tree partition
      -> basic cycles (paths -> edge sets)
      -> [optional] elementary cycles (Gibbs)
      -> paths -> frustration verdicts
      -> statistics

Example:
    >>> graph = IsingGraph.from_weights([(0, 1, -1), (1, 2, -1), (0, 2, 1)])
    >>> report = analyze_graph(graph)
    >>> report.stats.cycles.format()
    '1 / 1 = 1.000000'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from frustration.core.classifier import is_frustrated
from frustration.core.codec import EdgeSet, edges_to_path
from frustration.core.config import FrustrationConfig
from frustration.core.cycles import CycleBasis, build_cycle_basis
from frustration.core.elementary import elementary_cycles
from frustration.core.graph import IsingGraph, vertex_sort_key
from frustration.eval.metrics import CycleVerdict, FrustrationStats, summarize

logger = logging.getLogger(__name__)


@dataclass
class FrustrationReport:
    """Result of analysing one graph.

    Attributes:
        graph: The analysed graph
        basis: Basic cycles the analysis started from
        elementary_count: Number of elementary cycles, None unless the
            closure was requested
        verdicts: Every analysed cycle with its verdict
        stats: Tallies and ratios, None for an acyclic graph
        deterministic: Whether report sections should be sorted
    """
    graph: IsingGraph
    basis: CycleBasis
    elementary_count: Optional[int] = None
    verdicts: List[CycleVerdict] = field(default_factory=list)
    stats: Optional[FrustrationStats] = None
    deterministic: bool = False

    @property
    def basic_count(self) -> int:
        return self.basis.num_cycles

    @property
    def is_acyclic(self) -> bool:
        """No cycles means no frustration is possible."""
        return self.basis.num_cycles == 0


def _cycle_order(path) -> tuple:
    return (len(path), [vertex_sort_key(v) for v in path])


def analyze_graph(graph: IsingGraph, config: Optional[FrustrationConfig] = None) -> FrustrationReport:
    """Run the full frustration analysis on a graph.

    Args:
        graph: IsingGraph to analyse
        config: Analysis configuration, defaults if None

    Returns:
        FrustrationReport

    Raises:
        EnumerationLimitError: If the elementary-cycle closure runs out of budget
        NonSimpleCycleError: If a cycle cannot be decoded into a path
    """
    config = config or FrustrationConfig()
    deterministic = config.report.deterministic

    basis = build_cycle_basis(graph, deterministic=deterministic)
    report = FrustrationReport(graph=graph, basis=basis, deterministic=deterministic)

    if report.is_acyclic:
        logger.info("Graph is acyclic: no frustration is possible")
        return report

    cycles: List[EdgeSet] = basis.edge_sets
    enum = config.enumeration
    if enum.all_cycles:
        logger.info(f"Combining {len(cycles)} basic cycles into elementary cycles (this can be very slow)")
        cycles = elementary_cycles(
            cycles,
            num_workers=enum.num_workers,
            max_seconds=enum.max_seconds,
            max_cycles=enum.max_cycles,
        )
        report.elementary_count = len(cycles)

    paths = [edges_to_path(c) for c in cycles]
    if deterministic:
        paths.sort(key=_cycle_order)

    report.verdicts = [CycleVerdict(path=p, frustrated=is_frustrated(graph, p)) for p in paths]
    report.stats = summarize(graph, report.verdicts)
    return report
