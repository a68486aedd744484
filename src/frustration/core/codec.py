"""Conversion between the two forms of a cycle.

A cycle is either a path (an ordered vertex sequence whose last vertex
connects back to the first) or an edge set (a frozenset of canonical
edges). Edge sets are direction-independent and are what the
elementary-cycle enumerator combines; paths are what gets classified and
reported.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, FrozenSet, Iterable, List, Sequence, Tuple

from frustration.core.errors import NonSimpleCycleError
from frustration.core.graph import EdgeKey, vertex_sort_key

logger = logging.getLogger(__name__)

Path = Tuple[str, ...]
EdgeSet = FrozenSet[EdgeKey]


def path_to_edges(path: Sequence[str]) -> Tuple[EdgeKey, ...]:
    """Convert a cyclic path to its canonical edges, wraparound included.

    Example:
        >>> path_to_edges(("0", "1", "2"))
        (EdgeKey(u='0', v='1'), EdgeKey(u='1', v='2'), EdgeKey(u='0', v='2'))
    """
    n = len(path)
    return tuple(EdgeKey.of(path[i], path[(i + 1) % n]) for i in range(n))


def edge_set(path: Sequence[str]) -> EdgeSet:
    """Edge-set form of a cyclic path."""
    return frozenset(path_to_edges(path))


def _adjacency(edges: Iterable[EdgeKey]) -> Dict[str, List[str]]:
    near: Dict[str, List[str]] = defaultdict(list)
    for ek in edges:
        near[ek.u].append(ek.v)
        near[ek.v].append(ek.u)
    return near


def edges_to_path(edges: Iterable[EdgeKey]) -> Path:
    """Convert an edge set forming one simple loop into a path.

    The walk starts at the smallest vertex (natural order) and always moves
    to the neighbor it did not just come from, so the same edge set yields
    the same path in either traversal direction up to the choice of first
    step.

    Args:
        edges: Canonical edges of a single simple loop

    Returns:
        Vertex sequence of the loop

    Raises:
        NonSimpleCycleError: If the set is empty, a vertex has degree other
            than 2, or the edges form more than one loop
    """
    edges = frozenset(edges)
    if not edges:
        raise NonSimpleCycleError("Empty edge set is not a cycle")

    near = _adjacency(edges)
    bad = {v: len(ns) for v, ns in near.items() if len(ns) != 2}
    if bad:
        raise NonSimpleCycleError(
            "Edge set has vertices whose degree is not 2",
            {"degrees": bad, "edges": len(edges)},
        )

    start = min(near, key=vertex_sort_key)
    first = min(near[start], key=vertex_sort_key)
    path: List[str] = [start]
    prev, curr = start, first
    while curr != start:
        path.append(curr)
        a, b = near[curr]
        prev, curr = curr, (b if a == prev else a)

    if len(path) != len(near):
        raise NonSimpleCycleError(
            "Edge set decomposes into more than one loop",
            {"loop_length": len(path), "vertices": len(near)},
        )
    return tuple(path)


def is_simple_cycle(edges: Iterable[EdgeKey]) -> bool:
    """Whether ``edges`` form exactly one simple loop."""
    try:
        edges_to_path(edges)
    except NonSimpleCycleError:
        return False
    return True
