"""Weighted Graph Representation for Ising Problems.

This module provides the IsingGraph container analysed by the frustration
pipeline: a mapping from vertex to external field and a mapping from
canonical edge to coupler strength.

Vertex identifiers are opaque strings. Edges are stored in canonical form
(``EdgeKey``) so that ``(u, v)`` and ``(v, u)`` name the same edge.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import torch

logger = logging.getLogger(__name__)

VertexKey = Tuple[int, int, str]


def vertex_sort_key(vertex: str) -> VertexKey:
    """Natural ordering key for vertex identifiers.

    Integer-looking identifiers sort numerically and before every other
    identifier; the rest sort as strings. Ties between spellings of the
    same integer ("5", "05") are broken by the raw string.
    """
    try:
        return (0, int(vertex), vertex)
    except ValueError:
        return (1, 0, vertex)


# ==============================================================================
# DATA CLASSES
# ==============================================================================

@dataclass(frozen=True)
class EdgeKey:
    """Canonical undirected edge identifier.

    ``u`` always precedes ``v`` under ``vertex_sort_key``. Use ``EdgeKey.of``
    to build one from an arbitrary pair.
    """
    u: str
    v: str

    def __post_init__(self):
        if self.u == self.v:
            raise ValueError(f"Self-loop on vertex {self.u!r} is not an edge")
        if vertex_sort_key(self.u) > vertex_sort_key(self.v):
            raise ValueError(f"EdgeKey({self.u!r}, {self.v!r}) is not canonical; use EdgeKey.of")

    @classmethod
    def of(cls, a: str, b: str) -> "EdgeKey":
        """Return the canonical key for the unordered pair ``{a, b}``."""
        if vertex_sort_key(a) > vertex_sort_key(b):
            a, b = b, a
        return cls(a, b)

    @property
    def sort_key(self) -> Tuple[VertexKey, VertexKey]:
        return (vertex_sort_key(self.u), vertex_sort_key(self.v))

    def other(self, vertex: str) -> str:
        """Return the endpoint opposite ``vertex``."""
        if vertex == self.u:
            return self.v
        if vertex == self.v:
            return self.u
        raise KeyError(vertex)

    def __iter__(self):
        yield self.u
        yield self.v

    def __str__(self) -> str:
        return f"{self.u} {self.v}"


@dataclass(frozen=True)
class IsingGraph:
    """Immutable graph of external fields (vertices) and couplers (edges).

    Attributes:
        vertices: Map from vertex identifier to weight (external field)
        edges: Map from canonical edge to weight (coupler strength)

    Every endpoint of an edge is present in ``vertices``; endpoints without
    an explicit weight receive 0. Both mappings are exposed read-only.
    """
    vertices: Mapping[str, float] = field(default_factory=dict)
    edges: Mapping[EdgeKey, float] = field(default_factory=dict)

    def __post_init__(self):
        vertices: Dict[str, float] = {v: float(w) for v, w in self.vertices.items()}
        edges: Dict[EdgeKey, float] = {}
        for ek, w in self.edges.items():
            if not isinstance(ek, EdgeKey):
                ek = EdgeKey.of(*ek)
            edges[ek] = edges.get(ek, 0.0) + float(w)
            vertices.setdefault(ek.u, 0.0)
            vertices.setdefault(ek.v, 0.0)
        object.__setattr__(self, "vertices", MappingProxyType(vertices))
        object.__setattr__(self, "edges", MappingProxyType(edges))

    @property
    def num_vertices(self) -> int:
        """Number of vertices in the graph."""
        return len(self.vertices)

    @property
    def num_edges(self) -> int:
        """Number of edges in the graph."""
        return len(self.edges)

    @property
    def vertex_ids(self) -> List[str]:
        """Vertex identifiers in natural order."""
        return sorted(self.vertices, key=vertex_sort_key)

    @property
    def edge_keys(self) -> List[EdgeKey]:
        """Edge keys in canonical sorted order."""
        return sorted(self.edges, key=lambda ek: ek.sort_key)

    def external_field(self, vertex: str) -> float:
        """External field on ``vertex`` (0 for unknown vertices)."""
        return self.vertices.get(vertex, 0.0)

    def coupler(self, a: str, b: str) -> float:
        """Coupler strength between ``a`` and ``b`` (0 if there is no edge)."""
        if a == b:
            return 0.0
        return self.edges.get(EdgeKey.of(a, b), 0.0)

    def get_incidence_matrix(self, edge_keys: Optional[List[EdgeKey]] = None) -> torch.Tensor:
        """Compute the unsigned incidence matrix B ∈ {0,1}^{n×m}.

        B[i, e] = 1 if vertex i is an endpoint of edge e, else 0. Rows follow
        ``vertex_ids``; columns follow ``edge_keys`` unless an explicit
        ordering is passed.

        Returns:
            Incidence matrix of shape (n, m)
        """
        if edge_keys is None:
            edge_keys = self.edge_keys
        index = {v: i for i, v in enumerate(self.vertex_ids)}
        B = torch.zeros(self.num_vertices, len(edge_keys))
        for e_idx, ek in enumerate(edge_keys):
            B[index[ek.u], e_idx] = 1.0
            B[index[ek.v], e_idx] = 1.0
        return B

    @classmethod
    def from_weights(
        cls,
        edges: Iterable[Tuple[object, object, float]],
        fields: Optional[Mapping[object, float]] = None,
    ) -> "IsingGraph":
        """Create an IsingGraph from ``(u, v, weight)`` triples.

        Identifiers are converted to strings. Repeated edges accumulate,
        and a triple with ``u == v`` adds to the vertex weight instead.

        Args:
            edges: Iterable of (u, v, weight) triples
            fields: Optional map from vertex to external field

        Returns:
            IsingGraph instance
        """
        vertices: Dict[str, float] = {}
        for v, w in (fields or {}).items():
            vertices[str(v)] = vertices.get(str(v), 0.0) + float(w)
        es: Dict[EdgeKey, float] = {}
        for u, v, w in edges:
            u, v = str(u), str(v)
            if u == v:
                vertices[u] = vertices.get(u, 0.0) + float(w)
                continue
            ek = EdgeKey.of(u, v)
            es[ek] = es.get(ek, 0.0) + float(w)

        graph = cls(vertices=vertices, edges=es)
        logger.debug(f"Created IsingGraph with {graph.num_vertices} vertices, {graph.num_edges} edges")
        return graph
