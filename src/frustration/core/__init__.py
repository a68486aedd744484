"""Frustration Core Package - Cycle Analysis Engine.

This package provides the core components of the analysis:
- IsingGraph / EdgeKey: Weighted graph with canonical edges
- Partition: Spanning-forest split of the edges
- CycleBasis: Basic cycles and their cycle matrix
- Codec: Path <-> edge-set conversion of cycles
- Gibbs' algorithm: Closure to all elementary cycles
- Classifier: Antiferromagnetic edges and frustrated cycles
"""

from frustration.core.errors import (
    FrustrationError,
    MalformedInputError,
    NonSimpleCycleError,
    InternalConsistencyError,
    EnumerationLimitError,
    ConfigError,
)
from frustration.core.graph import (
    EdgeKey,
    IsingGraph,
    vertex_sort_key,
)
from frustration.core.partition import (
    Partition,
    split_spanning_tree,
)
from frustration.core.codec import (
    EdgeSet,
    Path,
    path_to_edges,
    edge_set,
    edges_to_path,
    is_simple_cycle,
)
from frustration.core.cycles import (
    CycleBasis,
    build_cycle_basis,
    cycle_matrix,
    verify_cycle_basis,
)
from frustration.core.elementary import (
    elementary_cycles,
    find_proper_supersets,
)
from frustration.core.classifier import (
    is_antiferromagnetic,
    antiferromagnetic_mask,
    count_antiferromagnetic,
    is_frustrated,
)
from frustration.core.config import (
    InputConfig,
    EnumerationConfig,
    ReportConfig,
    FrustrationConfig,
    load_config,
    merge_config,
    merge_from_environment,
    validate_config,
    get_default_config,
)

__all__ = [
    # Errors
    "FrustrationError",
    "MalformedInputError",
    "NonSimpleCycleError",
    "InternalConsistencyError",
    "EnumerationLimitError",
    "ConfigError",
    # Graph
    "EdgeKey",
    "IsingGraph",
    "vertex_sort_key",
    # Partition
    "Partition",
    "split_spanning_tree",
    # Codec
    "EdgeSet",
    "Path",
    "path_to_edges",
    "edge_set",
    "edges_to_path",
    "is_simple_cycle",
    # Cycles
    "CycleBasis",
    "build_cycle_basis",
    "cycle_matrix",
    "verify_cycle_basis",
    "elementary_cycles",
    "find_proper_supersets",
    # Classifier
    "is_antiferromagnetic",
    "antiferromagnetic_mask",
    "count_antiferromagnetic",
    "is_frustrated",
    # Config
    "InputConfig",
    "EnumerationConfig",
    "ReportConfig",
    "FrustrationConfig",
    "load_config",
    "merge_config",
    "merge_from_environment",
    "validate_config",
    "get_default_config",
]
