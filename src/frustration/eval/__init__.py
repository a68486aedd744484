"""Frustration statistics and reporting."""

from frustration.eval.metrics import (
    CycleVerdict,
    Tally,
    Ratio,
    FrustrationStats,
    tally_vertices,
    tally_edges,
    summarize,
)
from frustration.eval.reports import (
    write_report,
    summary_record,
    write_summary_jsonl,
    read_summaries,
)

__all__ = [
    "CycleVerdict",
    "Tally",
    "Ratio",
    "FrustrationStats",
    "tally_vertices",
    "tally_edges",
    "summarize",
    "write_report",
    "summary_record",
    "write_summary_jsonl",
    "read_summaries",
]
