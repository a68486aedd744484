"""Fundamental Cycle Basis Construction.

This module builds the basic cycles of a graph from a spanning forest:
every non-tree edge closes exactly one cycle with the unique tree path
between its endpoints.

For a graph with n vertices, m edges and c connected components there are
q = m - n + c basic cycles (the cyclomatic number). Every cycle of the
graph is a symmetric difference of some subset of them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

import torch

from frustration.core.codec import EdgeSet, Path, edge_set
from frustration.core.errors import InternalConsistencyError
from frustration.core.graph import EdgeKey, IsingGraph
from frustration.core.partition import Partition, split_spanning_tree

logger = logging.getLogger(__name__)


# ==============================================================================
# DATA CLASSES
# ==============================================================================

@dataclass
class CycleBasis:
    """Basic cycles of a graph.

    The cycle matrix C has shape (q, m) over GF(2):
    - C[i, j] = 1 if edge j lies on basic cycle i
    - C[i, j] = 0 otherwise

    C is dense and takes O(q·m) memory, so it is only built on request by
    ``get_cycle_matrix``; the analysis itself works on paths and edge sets.

    Attributes:
        partition: Tree / non-tree split the cycles were built from
        cycles: Basic cycles in path form, one per non-tree edge
        edge_keys: Edge ordering for C columns
        cycle_matrix: Cached cycle matrix C of shape (q, m), None until built
    """
    partition: Partition
    cycles: List[Path] = field(default_factory=list)
    edge_keys: List[EdgeKey] = field(default_factory=list)
    cycle_matrix: Optional[torch.Tensor] = None

    def get_cycle_matrix(self) -> torch.Tensor:
        """Return C, building and caching it on first use."""
        if self.cycle_matrix is None:
            self.cycle_matrix = _build_cycle_matrix(self.cycles, self.edge_keys)
        return self.cycle_matrix

    @property
    def num_cycles(self) -> int:
        """Number of basic cycles."""
        return len(self.cycles)

    @property
    def num_edges(self) -> int:
        """Number of edges (columns of C)."""
        return len(self.edge_keys)

    @property
    def edge_sets(self) -> List[EdgeSet]:
        """Basic cycles in edge-set form, in the same order as ``cycles``."""
        return [edge_set(p) for p in self.cycles]


# ==============================================================================
# CYCLE BASIS CONSTRUCTION
# ==============================================================================

def build_cycle_basis(graph: IsingGraph, deterministic: bool = False) -> CycleBasis:
    """Construct the basic cycles using a spanning-forest complement.

    Algorithm:
    1. Split the edges into a spanning forest T and non-tree edges
    2. For each non-tree edge e = (u, v):
       - Find the unique path in T from u to v
       - The cycle is: path(u, v) closed by e

    Args:
        graph: IsingGraph instance
        deterministic: Visit edges in canonical order when building T

    Returns:
        CycleBasis with paths and edge ordering; C is built lazily
    """
    partition = split_spanning_tree(graph, deterministic=deterministic)
    edge_keys = graph.edge_keys

    if not partition.non_tree_edges:
        logger.info("Graph is a forest, no cycles")
        return CycleBasis(partition=partition, cycles=[], edge_keys=edge_keys)

    tree_adj = _tree_adjacency(partition.tree_edges)
    cycles: List[Path] = []
    for ek in partition.non_tree_edges:
        cycles.append(_find_tree_path(tree_adj, ek.u, ek.v))

    logger.info(f"Built cycle basis: {len(cycles)} cycles for {len(edge_keys)} edges")

    return CycleBasis(partition=partition, cycles=cycles, edge_keys=edge_keys)


def _tree_adjacency(tree_edges: List[EdgeKey]) -> Dict[str, List[str]]:
    """Map each vertex to its neighbors along tree edges."""
    adj: Dict[str, List[str]] = {}
    for ek in tree_edges:
        adj.setdefault(ek.u, []).append(ek.v)
        adj.setdefault(ek.v, []).append(ek.u)
    return adj


def _find_tree_path(tree_adj: Dict[str, List[str]], source: str, target: str) -> Path:
    """Return the unique tree path from ``source`` to ``target``.

    Iterative depth-first search with backtracking; the stack holds one
    neighbor iterator per vertex on the current path.

    Raises:
        InternalConsistencyError: If the endpoints are not joined by the tree
    """
    path: List[str] = [source]
    visited: Set[str] = {source}
    stack = [iter(tree_adj.get(source, ()))]

    while stack:
        if path[-1] == target:
            return tuple(path)
        for nxt in stack[-1]:
            if nxt not in visited:
                visited.add(nxt)
                path.append(nxt)
                stack.append(iter(tree_adj.get(nxt, ())))
                break
        else:
            # Dead end
            stack.pop()
            path.pop()

    raise InternalConsistencyError(
        "No tree path between endpoints of a non-tree edge",
        {"source": source, "target": target},
    )


def _build_cycle_matrix(cycles: List[Path], edge_keys: List[EdgeKey]) -> torch.Tensor:
    column = {ek: j for j, ek in enumerate(edge_keys)}
    C = torch.zeros(len(cycles), len(edge_keys))
    for i, path in enumerate(cycles):
        for ek in edge_set(path):
            C[i, column[ek]] = 1.0
    return C


# ==============================================================================
# UTILITY FUNCTIONS
# ==============================================================================

def cycle_matrix(graph: IsingGraph) -> torch.Tensor:
    """Return cycle matrix C ∈ {0,1}^{q×m}.

    Convenience function that extracts just the matrix from CycleBasis.
    """
    return build_cycle_basis(graph, deterministic=True).get_cycle_matrix()


def verify_cycle_basis(graph: IsingGraph, basis: CycleBasis) -> bool:
    """Verify that the cycle basis is correctly constructed.

    Checks:
    1. Number of cycles = m - n + c
    2. Cycle matrix has shape (q, m)
    3. Each row has at least 3 edges and even degree at every vertex
    4. Non-tree columns form an identity, so the cycles are independent

    Args:
        graph: IsingGraph instance
        basis: CycleBasis to verify

    Returns:
        True if all checks pass
    """
    n = graph.num_vertices
    m = graph.num_edges
    q = basis.num_cycles
    C = basis.get_cycle_matrix()

    # Check 1: Cycle count
    expected_q = m - n + basis.partition.num_components
    if q != expected_q:
        logger.error(f"Expected {expected_q} cycles, got {q}")
        return False

    # Check 2: Matrix dimensions
    if tuple(C.shape) != (q, m):
        logger.error(f"Cycle matrix shape {tuple(C.shape)} != ({q}, {m})")
        return False

    if q == 0:
        return True

    # Check 3: Closed loops
    for i in range(q):
        nnz = int((C[i] != 0).sum().item())
        if nnz < 3:
            logger.error(f"Cycle {i} has only {nnz} edges (minimum 3 for a cycle)")
            return False
    B = graph.get_incidence_matrix(basis.edge_keys)
    degrees = torch.mm(B, C.t())
    if bool((torch.remainder(degrees, 2) != 0).any()):
        logger.error("A basic cycle has a vertex of odd degree")
        return False

    # Check 4: Independence
    column = {ek: j for j, ek in enumerate(basis.edge_keys)}
    nt_cols = [column[ek] for ek in basis.partition.non_tree_edges]
    if not torch.equal(C[:, nt_cols], torch.eye(q)):
        logger.error("Basic cycles do not each own exactly one non-tree edge")
        return False

    logger.info(f"Cycle basis verified: {q} cycles, {m} edges")
    return True
