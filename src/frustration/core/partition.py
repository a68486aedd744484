"""Spanning-tree partition of a graph's edges.

Edges are fed one at a time through a disjoint-set forest over the
vertices. An edge joining two different sets is a tree edge (and merges the
sets); an edge inside one set closes a cycle and is a non-tree edge.

The spanning tree chosen depends on edge iteration order. By default the
graph's own mapping order is used, so the basic cycles may differ between
runs on equivalent inputs. Pass ``deterministic=True`` to visit edges in
canonical sorted order instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from networkx.utils import UnionFind

from frustration.core.graph import EdgeKey, IsingGraph

logger = logging.getLogger(__name__)


@dataclass
class Partition:
    """Tree / non-tree split of a graph's edges.

    Attributes:
        tree_edges: Edges of a spanning forest, in discovery order
        non_tree_edges: Remaining edges, in discovery order
        num_components: Connected components, isolated vertices included
    """
    tree_edges: List[EdgeKey] = field(default_factory=list)
    non_tree_edges: List[EdgeKey] = field(default_factory=list)
    num_components: int = 0

    @property
    def cyclomatic_number(self) -> int:
        """|E| - |V| + c, which equals the number of non-tree edges."""
        return len(self.non_tree_edges)


def split_spanning_tree(graph: IsingGraph, deterministic: bool = False) -> Partition:
    """Split the graph's edges into a spanning forest and the rest.

    Args:
        graph: IsingGraph instance
        deterministic: Visit edges in canonical sorted order

    Returns:
        Partition of all edges
    """
    sets = UnionFind(graph.vertices)
    edges = graph.edge_keys if deterministic else list(graph.edges)

    tree_edges: List[EdgeKey] = []
    non_tree_edges: List[EdgeKey] = []
    for ek in edges:
        if sets[ek.u] == sets[ek.v]:
            non_tree_edges.append(ek)
        else:
            sets.union(ek.u, ek.v)
            tree_edges.append(ek)

    num_components = len({sets[v] for v in graph.vertices})

    logger.debug(
        f"Spanning forest: {len(tree_edges)} tree edges, "
        f"{len(non_tree_edges)} non-tree edges, {num_components} components"
    )
    return Partition(
        tree_edges=tree_edges,
        non_tree_edges=non_tree_edges,
        num_components=num_components,
    )
