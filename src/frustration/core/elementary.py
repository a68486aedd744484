"""Elementary Cycle Enumeration (Gibbs' algorithm).

Combines a set of basic cycles into every elementary (simple) cycle of the
graph by closing the basis under edge-set symmetric difference.

Reference:
    N. E. Gibbs, "A cycle generation algorithm for finite undirected linear
    graphs", J. ACM 16(4), 1969; see also
    http://dspace.mit.edu/bitstream/handle/1721.1/68106/FTL_R_1982_07.pdf, p. 14

The number of elementary cycles can grow exponentially with the number of
basic cycles. ``max_seconds`` and ``max_cycles`` bound the work; leaving
both unset runs to completion however long that takes.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Set

from frustration.core.codec import EdgeSet, is_simple_cycle
from frustration.core.errors import EnumerationLimitError

logger = logging.getLogger(__name__)


# ==============================================================================
# SUPERSET PRUNING
# ==============================================================================

def _supersets_in_chunk(chunk: Sequence[EdgeSet], candidates: Sequence[EdgeSet]) -> Set[EdgeSet]:
    """Members of ``candidates`` that properly contain some member of ``chunk``."""
    found: Set[EdgeSet] = set()
    for u in chunk:
        for v in candidates:
            if u < v:
                found.add(v)
    return found


def find_proper_supersets(
    cycles: Sequence[EdgeSet],
    executor: Optional[ThreadPoolExecutor] = None,
    num_workers: int = 1,
) -> Set[EdgeSet]:
    """Return every member of ``cycles`` that is a proper superset of another.

    The pairwise comparisons are split into ``num_workers`` chunks. Each
    worker returns its own result set and the sets are merged here, so no
    shared state is written concurrently.

    Args:
        cycles: Candidate edge sets
        executor: Pool to run the chunks on; comparisons run inline if None
        num_workers: Number of chunks to split the outer loop into

    Returns:
        Set of edge sets to move out of the candidate list
    """
    if len(cycles) < 2:
        return set()
    if executor is None or num_workers <= 1:
        return _supersets_in_chunk(cycles, cycles)

    size = -(-len(cycles) // num_workers)
    chunks = [cycles[i:i + size] for i in range(0, len(cycles), size)]
    futures = [executor.submit(_supersets_in_chunk, chunk, cycles) for chunk in chunks]

    move: Set[EdgeSet] = set()
    for future in futures:
        move |= future.result()
    return move


# ==============================================================================
# GIBBS' ALGORITHM
# ==============================================================================

def elementary_cycles(
    basics: Sequence[EdgeSet],
    num_workers: int = 4,
    max_seconds: Optional[float] = None,
    max_cycles: Optional[int] = None,
) -> List[EdgeSet]:
    """Combine basic cycles into all elementary cycles.

    Algorithm:
    1. S = Q = {φ0}
    2. For each further basic cycle φi:
       a. For t in Q: t △ φi goes to R if t ∩ φi ≠ ∅, else to R*
       b. Move every member of R that properly contains another member of
          R from R to R*
       c. S ← S ∪ R ∪ {φi}, Q ← Q ∪ R ∪ R* ∪ {φi}
    3. S holds the elementary cycles

    Members of S that do not form a single simple loop are dropped at the
    end so that every returned set can be decoded into a path.

    Args:
        basics: Basic cycles in edge-set form
        num_workers: Threads used for superset pruning
        max_seconds: Wall-clock budget, unlimited if None
        max_cycles: Cap on the size of Q, unlimited if None

    Returns:
        List of elementary cycles in edge-set form

    Raises:
        EnumerationLimitError: If a budget is exhausted
    """
    phi = [frozenset(c) for c in basics]
    if not phi:
        return []

    deadline = None if max_seconds is None else time.monotonic() + max_seconds

    s: Set[EdgeSet] = {phi[0]}
    q: Set[EdgeSet] = {phi[0]}

    with ThreadPoolExecutor(max_workers=max(1, num_workers)) as executor:
        for i in range(1, len(phi)):
            r: Set[EdgeSet] = set()
            rs: Set[EdgeSet] = set()
            for t in q:
                diff = t ^ phi[i]
                if t.isdisjoint(phi[i]):
                    rs.add(diff)
                else:
                    r.add(diff)

            move = find_proper_supersets(list(r), executor, num_workers)
            r -= move
            rs |= move

            s |= r
            s.add(phi[i])
            q |= r
            q |= rs
            q.add(phi[i])

            logger.debug(f"Basic cycle {i + 1}/{len(phi)}: |R|={len(r)}, |R*|={len(rs)}, |S|={len(s)}, |Q|={len(q)}")
            _check_limits(i, len(phi), len(s), len(q), deadline, max_cycles)

    elementary = [c for c in s if is_simple_cycle(c)]
    dropped = len(s) - len(elementary)
    if dropped:
        logger.warning(f"Dropped {dropped} non-simple edge sets from the elementary cycles")
    logger.info(f"Found {len(elementary)} elementary cycles from {len(phi)} basic cycles")
    return elementary


def _check_limits(
    step: int,
    total: int,
    found: int,
    candidates: int,
    deadline: Optional[float],
    max_cycles: Optional[int],
) -> None:
    context = {"basic_cycles_done": step + 1, "basic_cycles": total, "cycles_found": found, "candidates": candidates}
    if max_cycles is not None and candidates > max_cycles:
        raise EnumerationLimitError(f"Candidate set exceeded {max_cycles} cycles", context)
    if deadline is not None and time.monotonic() > deadline:
        raise EnumerationLimitError("Enumeration deadline passed", context)
