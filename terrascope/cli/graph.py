#!/usr/bin/env python3
"""
terrascope/cli/graph.py

CLI that reads a Terraform state file and prints its resource graph as JSON:

  terrascope-graph terraform.tfstate --pretty --stats
  cat terraform.tfstate | terrascope-graph - --provider aws

Defaults come from `GraphSettings` (TERRASCOPE_* environment variables);
flags given on the command line take precedence.
"""

from __future__ import annotations
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from terrascope.models.graph import Graph
from terrascope.models.settings import GraphSettings
from terrascope.models.terraform_state import ResourceMode
from terrascope.parser.graph import build_graph
from terrascope.parser.stats import filter_graph, prune_dangling_edges, with_stats
from terrascope.parser.tfstate import TfstateError, parse_tfstate
from terrascope.utils.files import read_state_file

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _post_process(graph: Graph, args: argparse.Namespace) -> Graph:
    """Apply the opt-in filters, pruning and stats requested on the command line."""
    if args.provider is not None or args.module is not None or args.mode is not None:
        graph = filter_graph(
            graph,
            provider=args.provider,
            module=args.module,
            mode=ResourceMode(args.mode) if args.mode else None,
        )
    if args.prune_dangling:
        graph = prune_dangling_edges(graph)
    if args.stats:
        graph = with_stats(graph)
    return graph


async def _run(args: argparse.Namespace) -> None:
    """Read, decode and render one state file."""
    try:
        raw = await read_state_file(args.state)
    except OSError as exc:
        print(f"Failed to read {args.state}: {exc}", file=sys.stderr)
        sys.exit(1)

    try:
        state = parse_tfstate(raw)
    except TfstateError as exc:
        print(f"Invalid tfstate: {exc}", file=sys.stderr)
        sys.exit(1)

    graph = _post_process(build_graph(state), args)
    logger.info(
        "Built graph with %d nodes and %d edges from %s",
        len(graph.nodes),
        len(graph.edges),
        args.state,
    )
    print(graph.to_json(pretty=args.pretty))


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point for rendering a Terraform state as a dependency graph."""
    settings = GraphSettings()

    parser = argparse.ArgumentParser(
        prog="terrascope-graph",
        description="Print the resource dependency graph of a Terraform state file as JSON.",
    )
    parser.add_argument(
        "state",
        help="Path to a .tfstate file, or '-' to read from stdin.",
    )
    parser.add_argument(
        "--pretty",
        action=argparse.BooleanOptionalAction,
        default=settings.pretty,
        help="Indent the JSON output (env: TERRASCOPE_PRETTY).",
    )
    parser.add_argument(
        "--stats",
        action=argparse.BooleanOptionalAction,
        default=settings.include_stats,
        help="Include node/edge counts (env: TERRASCOPE_INCLUDE_STATS).",
    )
    parser.add_argument(
        "--prune-dangling",
        action=argparse.BooleanOptionalAction,
        default=settings.prune_dangling,
        help="Drop edges pointing at addresses with no node (env: TERRASCOPE_PRUNE_DANGLING).",
    )
    parser.add_argument(
        "--provider",
        default=None,
        help="Only keep nodes of this provider (short name, e.g. 'aws').",
    )
    parser.add_argument(
        "--module",
        default=None,
        help="Only keep nodes in this module address ('' for the root module).",
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in ResourceMode],
        default=None,
        help="Only keep managed resources or data sources.",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level: DEBUG, INFO, WARNING, ERROR or CRITICAL (env: TERRASCOPE_LOG_LEVEL).",
    )

    args = parser.parse_args(argv)
    level = args.log_level.upper()
    if level not in LOG_LEVELS:
        print(
            f"Invalid log level: {args.log_level!r} (expected one of {', '.join(LOG_LEVELS)})",
            file=sys.stderr,
        )
        sys.exit(1)
    logging.basicConfig(level=level, stream=sys.stderr)
    asyncio.run(_run(args))


if __name__ == "__main__":
    main()
