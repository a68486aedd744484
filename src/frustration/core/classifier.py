"""Frustration classification of single cycles.

Each edge along a cycle is either antiferromagnetic (prefers opposite
values at its endpoints) or not. A cycle is frustrated when it has an odd
number of antiferromagnetic edges, since then no assignment of values can
satisfy every edge at once.

Edge rule, with coupler cs and external fields e_u, e_v:
    - if |e_u| > |cs| and |e_v| > |cs| the fields dominate: the edge is
      antiferromagnetic iff one field is strictly positive and the other
      strictly negative
    - otherwise the coupler dominates: antiferromagnetic iff cs > 0
      (zero and negative couplers both count as not antiferromagnetic)
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from frustration.core.graph import IsingGraph

logger = logging.getLogger(__name__)


def is_antiferromagnetic(coupler: float, field_u: float, field_v: float) -> bool:
    """Classify one edge given its coupler and its endpoints' fields."""
    cs = abs(coupler)
    if abs(field_u) > cs and abs(field_v) > cs:
        return (field_u > 0.0 and field_v < 0.0) or (field_u < 0.0 and field_v > 0.0)
    return coupler > 0.0


def antiferromagnetic_mask(
    couplers: np.ndarray,
    fields_u: np.ndarray,
    fields_v: np.ndarray,
) -> np.ndarray:
    """Vectorized ``is_antiferromagnetic`` over arrays of edges.

    Args:
        couplers: Coupler strengths, shape (k,)
        fields_u: Field on the first endpoint of each edge, shape (k,)
        fields_v: Field on the second endpoint of each edge, shape (k,)

    Returns:
        Boolean array of shape (k,)
    """
    cs = np.abs(couplers)
    fields_dominate = (np.abs(fields_u) > cs) & (np.abs(fields_v) > cs)
    opposite = (np.sign(fields_u) * np.sign(fields_v)) < 0.0
    return np.where(fields_dominate, opposite, couplers > 0.0)


def count_antiferromagnetic(graph: IsingGraph, path: Sequence[str]) -> int:
    """Number of antiferromagnetic edges along a cyclic path.

    Consecutive pairs are taken with wraparound. A pair with no edge in the
    graph reads as coupler 0.
    """
    n = len(path)
    if n < 2:
        return 0
    nxt = [path[(i + 1) % n] for i in range(n)]
    couplers = np.array([graph.coupler(u, v) for u, v in zip(path, nxt)], dtype=np.float64)
    fields_u = np.array([graph.external_field(u) for u in path], dtype=np.float64)
    fields_v = np.array([graph.external_field(v) for v in nxt], dtype=np.float64)
    return int(np.count_nonzero(antiferromagnetic_mask(couplers, fields_u, fields_v)))


def is_frustrated(graph: IsingGraph, path: Sequence[str]) -> bool:
    """Whether a cycle has an odd number of antiferromagnetic couplings."""
    return count_antiferromagnetic(graph, path) % 2 == 1
