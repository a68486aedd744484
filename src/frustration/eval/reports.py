"""Text and JSONL Reporting.

The text report is a sequence of tagged lines:

    #BCS <basic cycles>
    #ECS <elementary cycles>                  (only with the closure)
    FV   <f> <f-nf> | <vertex>
    NFV  <nf> <nf-f> | <vertex>
    #FV  <n> / <vertices> = <ratio>
    FE   <f> <f-nf> | <v1> <v2>
    NFE  <nf> <nf-f> | <v1> <v2>
    #FE  <n> / <edges> = <ratio>
    FC   <vertex> <vertex> ...
    NFC  <vertex> <vertex> ...
    #FC  <n> / <cycles> = <ratio>

An acyclic graph produces only the ``#BCS 0`` line.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, TextIO, Tuple, TYPE_CHECKING

from frustration.core.graph import vertex_sort_key
from frustration.eval.metrics import Tally

if TYPE_CHECKING:
    from frustration.pipeline import FrustrationReport

logger = logging.getLogger(__name__)


# ==============================================================================
# TEXT REPORT
# ==============================================================================

def _ordered(items: Iterable[Tuple[Any, Tally]], key, deterministic: bool) -> List[Tuple[Any, Tally]]:
    items = list(items)
    if deterministic:
        items.sort(key=lambda kv: key(kv[0]))
    return items


def _write_tallies(w: TextIO, tag: str, items: List[Tuple[Any, Tally]], label) -> None:
    f_tag, nf_tag = tag, "N" + tag
    for item, t in items:
        if t.is_frustrated:
            w.write(f"{f_tag:<4} {t.frustrated} {t.margin} | {label(item)}\n")
    for item, t in items:
        if not t.is_frustrated:
            w.write(f"{nf_tag:<4} {t.non_frustrated} {t.margin} | {label(item)}\n")


def write_report(report: "FrustrationReport", w: TextIO, precision: int = 6) -> None:
    """Write the tagged text report.

    Args:
        report: Analysis result
        w: Text stream to write to
        precision: Digits after the point in ratios
    """
    w.write(f"#BCS {report.basic_count}\n")
    if report.is_acyclic or report.stats is None:
        return
    if report.elementary_count is not None:
        w.write(f"#ECS {report.elementary_count}\n")

    stats = report.stats
    det = report.deterministic

    vertices = _ordered(stats.vertex_tally.items(), vertex_sort_key, det)
    _write_tallies(w, "FV", vertices, str)
    w.write(f"#FV  {stats.vertices.format(precision)}\n")

    edges = _ordered(stats.edge_tally.items(), lambda ek: ek.sort_key, det)
    _write_tallies(w, "FE", edges, str)
    w.write(f"#FE  {stats.edges.format(precision)}\n")

    for cv in report.verdicts:
        tag = "FC  " if cv.frustrated else "NFC "
        w.write(tag + "".join(f" {v}" for v in cv.path) + "\n")
    w.write(f"#FC  {stats.cycles.format(precision)}\n")


# ==============================================================================
# JSONL SUMMARY
# ==============================================================================

def summary_record(report: "FrustrationReport") -> Dict[str, Any]:
    """Counts and ratios of a report as a JSON-serializable dict."""
    data: Dict[str, Any] = {
        "type": "frustration",
        "vertices": report.graph.num_vertices,
        "edges": report.graph.num_edges,
        "basic_cycles": report.basic_count,
        "elementary_cycles": report.elementary_count,
        "acyclic": report.is_acyclic,
    }
    if report.stats is not None:
        for name in ("vertices", "edges", "cycles"):
            ratio = getattr(report.stats, name)
            data[f"frustrated_{name}"] = ratio.count
            data[f"frustrated_{name}_ratio"] = ratio.value
    return data


def write_summary_jsonl(report: "FrustrationReport", filepath: str, append: bool = True) -> None:
    """Write one summary entry to a JSONL file.

    Args:
        report: Analysis result
        filepath: Path to JSONL file
        append: If True, append to file; otherwise overwrite
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = summary_record(report)
    data["timestamp"] = datetime.now().isoformat()

    mode = "a" if append else "w"
    with open(path, mode) as f:
        f.write(json.dumps(data) + "\n")

    logger.debug(f"Wrote summary to {filepath}")


def read_summaries(filepath: str) -> List[Dict[str, Any]]:
    """Read all summary entries from a JSONL file."""
    path = Path(filepath)
    if not path.exists():
        return []

    reports = []
    with open(path, "r") as f:
        for line in f:
            line = line.strip()
            if line:
                reports.append(json.loads(line))
    return reports
