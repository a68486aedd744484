"""Input readers for Ising and QUBO problem files.

Supported dialects:
    - qmasm:   QMASM source (vertex weights, couplers, chains, aliases)
    - qubist:  Qubist output (header line, then ``u v w`` lines)
    - qubo:    QUBO text format (``c`` comments, ``p qubo`` header)
    - bqpjson: bqpjson documents (spin or boolean variable domain)

QUBO problems are converted to the equivalent Ising problem before the
graph is returned. Self-loops are folded into the vertex weight.
"""

from __future__ import annotations

import json
import logging
from typing import Callable, Dict, TextIO, Tuple

from frustration.core.errors import MalformedInputError
from frustration.core.graph import EdgeKey, IsingGraph

logger = logging.getLogger(__name__)

Weights = Tuple[Dict[str, float], Dict[EdgeKey, float]]


# =============================================================================
# Helpers
# =============================================================================

def _add_term(vs: Dict[str, float], es: Dict[EdgeKey, float], u: str, v: str, wt: float) -> None:
    if u == v:
        vs[u] = vs.get(u, 0.0) + wt
        return
    ek = EdgeKey.of(u, v)
    es[ek] = es.get(ek, 0.0) + wt
    vs.setdefault(u, 0.0)
    vs.setdefault(v, 0.0)


def _parse_weight(token: str, dialect: str, lineno: int, line: str) -> float:
    try:
        return float(token)
    except ValueError:
        raise MalformedInputError(
            f"Failed to parse {dialect} weight {token!r}",
            {"line": lineno, "text": line.strip()},
        ) from None


def qubo_to_ising(vs: Dict[str, float], es: Dict[EdgeKey, float]) -> None:
    """Convert QUBO weights to Ising weights in place.

    Every linear weight is halved; every quadratic weight w becomes w/4 and
    also adds w/4 to the weight of each of its endpoints.
    """
    for v in vs:
        vs[v] /= 2
    for ek, wt in es.items():
        wt4 = wt / 4
        es[ek] = wt4
        vs[ek.u] = vs.get(ek.u, 0.0) + wt4
        vs[ek.v] = vs.get(ek.v, 0.0) + wt4


# =============================================================================
# Readers
# =============================================================================

def read_qmasm(r: TextIO) -> IsingGraph:
    """Return the Ising Hamiltonian represented by a QMASM source file.

    ``#`` starts a comment. Two fields give a vertex weight; three fields
    give a coupler, or a chain/alias (``u = v`` / ``u <-> v``) with weight
    -1. Lines with any other number of fields are ignored.
    """
    vs: Dict[str, float] = {}
    es: Dict[EdgeKey, float] = {}
    for lineno, line in enumerate(r, start=1):
        fs = line.split("#", 1)[0].split()
        if len(fs) == 2:
            vs[fs[0]] = vs.get(fs[0], 0.0) + _parse_weight(fs[1], "QMASM", lineno, line)
        elif len(fs) == 3:
            if fs[1] in ("=", "<->"):
                u, v, wt = fs[0], fs[2], -1.0
            else:
                u, v = fs[0], fs[1]
                wt = _parse_weight(fs[2], "QMASM", lineno, line)
            _add_term(vs, es, u, v, wt)
    return IsingGraph(vertices=vs, edges=es)


def read_qubist(r: TextIO) -> IsingGraph:
    """Return the Ising Hamiltonian represented by a Qubist source file.

    The first line is a header and is discarded. Every other line must be
    ``u v w``; ``u == v`` gives a vertex weight.
    """
    vs: Dict[str, float] = {}
    es: Dict[EdgeKey, float] = {}
    header = r.readline()
    if not header:
        raise MalformedInputError("Qubist input is missing its header line", {"line": 1})

    for lineno, line in enumerate(r, start=2):
        fs = line.split()
        if len(fs) != 3:
            raise MalformedInputError(
                "Failed to parse Qubist line",
                {"line": lineno, "text": line.strip()},
            )
        _add_term(vs, es, fs[0], fs[1], _parse_weight(fs[2], "Qubist", lineno, line))
    return IsingGraph(vertices=vs, edges=es)


def read_qubo(r: TextIO) -> IsingGraph:
    """Return the Ising Hamiltonian represented by a QUBO source file."""
    vs: Dict[str, float] = {}
    es: Dict[EdgeKey, float] = {}
    for lineno, line in enumerate(r, start=1):
        fs = line.split()
        if not fs or fs[0] == "c":
            continue
        if fs[0] == "p":
            # Problem sizes are not validated
            if len(fs) != 6 or fs[1] != "qubo":
                raise MalformedInputError(
                    "Failed to parse QUBO header",
                    {"line": lineno, "text": line.strip()},
                )
            continue
        if len(fs) != 3:
            raise MalformedInputError(
                "Failed to parse QUBO line",
                {"line": lineno, "text": line.strip()},
            )
        _add_term(vs, es, fs[0], fs[1], _parse_weight(fs[2], "QUBO", lineno, line))

    qubo_to_ising(vs, es)
    return IsingGraph(vertices=vs, edges=es)


def read_bqpjson(r: TextIO) -> IsingGraph:
    """Return the Ising Hamiltonian represented by a bqpjson document.

    Only ``variable_domain``, ``scale``, ``offset``, ``linear_terms`` and
    ``quadratic_terms`` are read. After repeated terms are summed, every
    vertex and edge weight w becomes ``w * scale + offset`` (``scale``
    defaults to 1, ``offset`` to 0). Quadratic terms with equal endpoints
    are folded into the vertex weight after that step.
    """
    try:
        desc = json.load(r)
    except json.JSONDecodeError as e:
        raise MalformedInputError(
            f"Invalid bqpjson document: {e.msg}",
            {"line": e.lineno, "column": e.colno},
        ) from e
    if not isinstance(desc, dict):
        raise MalformedInputError("bqpjson document must be a JSON object")

    domain = desc.get("variable_domain")
    if domain not in ("spin", "boolean"):
        raise MalformedInputError(f"Unrecognized variable_domain {domain!r}")

    vs: Dict[str, float] = {}
    pairs: Dict[Tuple[str, str], float] = {}
    try:
        scale = float(desc.get("scale", 1.0))
        offset = float(desc.get("offset", 0.0))
        for lt in desc.get("linear_terms", []):
            v = str(int(lt["id"]))
            vs[v] = vs.get(v, 0.0) + float(lt["coeff"])
        for qt in desc.get("quadratic_terms", []):
            u, v = str(int(qt["id_tail"])), str(int(qt["id_head"]))
            key = (u, v) if u == v else tuple(EdgeKey.of(u, v))
            pairs[key] = pairs.get(key, 0.0) + float(qt["coeff"])
            vs.setdefault(u, 0.0)
            vs.setdefault(v, 0.0)
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedInputError(f"Invalid bqpjson term: {e!r}") from e

    vs = {v: wt * scale + offset for v, wt in vs.items()}
    es: Dict[EdgeKey, float] = {}
    for (u, v), wt in pairs.items():
        _add_term(vs, es, u, v, wt * scale + offset)

    if domain == "boolean":
        qubo_to_ising(vs, es)
    return IsingGraph(vertices=vs, edges=es)


READERS: Dict[str, Callable[[TextIO], IsingGraph]] = {
    "qubist": read_qubist,
    "qmasm": read_qmasm,
    "qubo": read_qubo,
    "bqpjson": read_bqpjson,
}


def read_graph(r: TextIO, fmt: str = "qubist") -> IsingGraph:
    """Read a graph in the named dialect.

    Raises:
        MalformedInputError: If the input cannot be parsed
        ValueError: If ``fmt`` is not a known dialect
    """
    try:
        reader = READERS[fmt]
    except KeyError:
        raise ValueError(f"Unrecognized input format {fmt!r}") from None
    graph = reader(r)
    logger.info(f"Read {fmt} graph: {graph.num_vertices} vertices, {graph.num_edges} edges")
    return graph
