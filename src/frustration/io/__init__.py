"""Readers for Ising and QUBO problem files."""

from frustration.io.readers import (
    READERS,
    qubo_to_ising,
    read_qmasm,
    read_qubist,
    read_qubo,
    read_bqpjson,
    read_graph,
)

__all__ = [
    "READERS",
    "qubo_to_ising",
    "read_qmasm",
    "read_qubist",
    "read_qubo",
    "read_bqpjson",
    "read_graph",
]
