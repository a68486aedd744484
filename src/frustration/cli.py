"""Command-line entry point.

find-frustration reads a graph and reports various statistics on how much
frustration exists in the graph when treated as an Ising or QUBO problem.

Usage:
    find-frustration [-f FORMAT] [-o OUTPUT] [--all-cycles] [INPUT]
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from frustration.core.config import (
    INPUT_FORMATS,
    FrustrationConfig,
    load_config,
    merge_config,
    merge_from_environment,
    validate_config,
)
from frustration.core.errors import ConfigError, FrustrationError, MalformedInputError
from frustration.eval.reports import write_report, write_summary_jsonl
from frustration.io.readers import read_graph
from frustration.pipeline import analyze_graph

logger = logging.getLogger("find-frustration")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="find-frustration",
        description="Report how much frustration an Ising or QUBO problem contains.",
    )
    parser.add_argument("input", nargs="?", help="input file (default: standard input)")
    parser.add_argument("-f", "--format", choices=INPUT_FORMATS, default=None,
                        help="input file format (default: qubist)")
    parser.add_argument("-o", "--output", default=None,
                        help="output file name (default: standard output)")
    parser.add_argument("--all-cycles", action="store_true", default=None,
                        help="combine basic cycles into elementary cycles (extremely slow)")
    parser.add_argument("--config", default=None, help="YAML configuration file")
    parser.add_argument("--workers", type=int, default=None, dest="num_workers",
                        help="threads used while combining cycles")
    parser.add_argument("--max-seconds", type=float, default=None,
                        help="give up combining cycles after this many seconds")
    parser.add_argument("--max-cycles", type=int, default=None,
                        help="give up combining cycles beyond this many candidates")
    parser.add_argument("--deterministic", action="store_true", default=None,
                        help="choose the spanning tree and order the report deterministically")
    parser.add_argument("--summary-jsonl", default=None, dest="summary_path",
                        help="append a JSON summary record to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def resolve_config(args: argparse.Namespace) -> FrustrationConfig:
    """Defaults < config file < environment < command line."""
    if args.config is not None:
        config = load_config(args.config, use_defaults_on_error=False)
    else:
        config = load_config(use_defaults_on_error=True)
    config = merge_from_environment(config)
    config = merge_config(config, {
        "format": args.format,
        "all_cycles": args.all_cycles,
        "num_workers": args.num_workers,
        "max_seconds": args.max_seconds,
        "max_cycles": args.max_cycles,
        "deterministic": args.deterministic,
        "summary_path": args.summary_path,
    })
    errors = validate_config(config)
    if errors:
        raise ConfigError("; ".join(errors))
    return config


def run(args: argparse.Namespace) -> None:
    config = resolve_config(args)

    try:
        if args.input is None:
            graph = read_graph(sys.stdin, config.input.format)
        else:
            with open(args.input, "r", encoding="utf-8") as r:
                graph = read_graph(r, config.input.format)
    except UnicodeDecodeError as e:
        raise MalformedInputError(
            "Input is not valid UTF-8",
            {"input": args.input or "<stdin>", "byte": e.start},
        ) from e

    report = analyze_graph(graph, config)

    if args.output is None:
        write_report(report, sys.stdout, precision=config.report.precision)
    else:
        with open(args.output, "w", encoding="utf-8") as w:
            write_report(report, w, precision=config.report.precision)

    if config.report.summary_path:
        write_summary_jsonl(report, config.report.summary_path)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(name)s: %(levelname)s: %(message)s",
    )
    try:
        run(args)
    except FrustrationError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"{e.filename or ''}: {e.strerror}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
