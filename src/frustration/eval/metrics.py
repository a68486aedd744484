"""Frustration Statistics.

This module tallies how often each vertex and edge appears in frustrated
and non-frustrated cycles and computes the summary ratios:

- Frustrated vertices: vertices seen more often in frustrated cycles
- Frustrated edges: edges seen more often in frustrated cycles
- Frustrated cycles: cycles with an odd antiferromagnetic count

A vertex or edge that appears in no cycle is in neither category but still
counts toward the graph-wide denominator.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, List, Tuple

from frustration.core.codec import Path, path_to_edges
from frustration.core.graph import EdgeKey, IsingGraph

logger = logging.getLogger(__name__)


# ==============================================================================
# DATA CLASSES
# ==============================================================================

@dataclass(frozen=True)
class CycleVerdict:
    """A cycle in path form tagged with its frustration verdict."""
    path: Path
    frustrated: bool


@dataclass
class Tally:
    """Occurrences of one vertex or edge in frustrated / non-frustrated cycles."""
    frustrated: int = 0
    non_frustrated: int = 0

    @property
    def total(self) -> int:
        return self.frustrated + self.non_frustrated

    @property
    def is_frustrated(self) -> bool:
        """Frustrated iff strictly more frustrated occurrences; ties are not."""
        return self.frustrated > self.non_frustrated

    @property
    def margin(self) -> int:
        """Lead of the reported category over the other one (never negative)."""
        if self.is_frustrated:
            return self.frustrated - self.non_frustrated
        return self.non_frustrated - self.frustrated


@dataclass(frozen=True)
class Ratio:
    """``count / total = value`` summary line."""
    count: int
    total: int

    @property
    def value(self) -> float:
        if self.total == 0:
            return 0.0
        return self.count / self.total

    def format(self, precision: int = 6) -> str:
        return f"{self.count} / {self.total} = {self.value:.{precision}f}"


@dataclass
class FrustrationStats:
    """All tallies and summary ratios for one analysis."""
    vertex_tally: Dict[str, Tally]
    edge_tally: Dict[EdgeKey, Tally]
    vertices: Ratio
    edges: Ratio
    cycles: Ratio


# ==============================================================================
# TALLIES
# ==============================================================================

def _tally(items: Iterable[Tuple[Hashable, bool]]) -> Dict:
    counts: Dict = defaultdict(Tally)
    for key, frustrated in items:
        if frustrated:
            counts[key].frustrated += 1
        else:
            counts[key].non_frustrated += 1
    return dict(counts)


def tally_vertices(verdicts: Iterable[CycleVerdict]) -> Dict[str, Tally]:
    """Count each vertex's occurrences across frustrated and other cycles."""
    return _tally((v, cv.frustrated) for cv in verdicts for v in cv.path)


def tally_edges(verdicts: Iterable[CycleVerdict]) -> Dict[EdgeKey, Tally]:
    """Count each edge's occurrences, walking every cycle with wraparound."""
    return _tally((ek, cv.frustrated) for cv in verdicts for ek in path_to_edges(cv.path))


def summarize(graph: IsingGraph, verdicts: List[CycleVerdict]) -> FrustrationStats:
    """Tally vertices, edges and cycles and compute the summary ratios.

    Args:
        graph: Graph the cycles were taken from (supplies the denominators)
        verdicts: Classified cycles

    Returns:
        FrustrationStats
    """
    vertex_tally = tally_vertices(verdicts)
    edge_tally = tally_edges(verdicts)

    n_fv = sum(1 for t in vertex_tally.values() if t.is_frustrated)
    n_fe = sum(1 for t in edge_tally.values() if t.is_frustrated)
    n_fc = sum(1 for cv in verdicts if cv.frustrated)

    stats = FrustrationStats(
        vertex_tally=vertex_tally,
        edge_tally=edge_tally,
        vertices=Ratio(n_fv, graph.num_vertices),
        edges=Ratio(n_fe, graph.num_edges),
        cycles=Ratio(n_fc, len(verdicts)),
    )
    logger.debug(
        f"Frustrated: {n_fv}/{graph.num_vertices} vertices, "
        f"{n_fe}/{graph.num_edges} edges, {n_fc}/{len(verdicts)} cycles"
    )
    return stats
