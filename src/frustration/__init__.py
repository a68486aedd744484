"""
find-frustration: frustration analysis of Ising and QUBO problems.

Treats a problem as a weighted graph (external fields on vertices,
couplers on edges) and reports how many of its cycles are frustrated,
i.e. cannot have every coupling satisfied at once.

Components:
- frustration.core: Graph model, cycle basis, Gibbs closure, classifier
- frustration.eval: Tallies, ratios and report writers
- frustration.io: Readers for QMASM, Qubist, QUBO and bqpjson files
"""

__version__ = "0.1.0"

from frustration.core import (
    EdgeKey,
    IsingGraph,
    CycleBasis,
    build_cycle_basis,
    elementary_cycles,
    is_frustrated,
    FrustrationConfig,
    FrustrationError,
)
from frustration.eval import summarize, write_report
from frustration.io import read_graph
from frustration.pipeline import FrustrationReport, analyze_graph

__all__ = [
    "__version__",
    "EdgeKey",
    "IsingGraph",
    "CycleBasis",
    "build_cycle_basis",
    "elementary_cycles",
    "is_frustrated",
    "FrustrationConfig",
    "FrustrationError",
    "summarize",
    "write_report",
    "read_graph",
    "FrustrationReport",
    "analyze_graph",
]
