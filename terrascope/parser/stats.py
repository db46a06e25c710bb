"""
terrascope/parser/stats.py

Optional post-processing for a built graph. `build_graph` never calls these;
callers opt in:

  - compute_stats / with_stats: node and edge counts, per type and per mode.
  - prune_dangling_edges: drop edges whose source or target is not a node.
  - filter_graph: keep nodes matching provider/module/mode filters and the
    edges between them.

Every function returns a new object and leaves its input untouched.
"""

from __future__ import annotations

from collections import Counter
from typing import Optional

from terrascope.models.graph import Graph, Stats
from terrascope.models.terraform_state import ResourceMode


def compute_stats(graph: Graph) -> Stats:
    """Count nodes and edges, and nodes per resource type and per mode."""
    return Stats(
        total_nodes=len(graph.nodes),
        total_edges=len(graph.edges),
        resources_by_type=dict(Counter(node.type for node in graph.nodes)),
        resources_by_mode=dict(Counter(node.mode.value for node in graph.nodes)),
    )


def with_stats(graph: Graph) -> Graph:
    """Return a copy of `graph` with `stats` populated."""
    return graph.model_copy(update={"stats": compute_stats(graph)})


def prune_dangling_edges(graph: Graph) -> Graph:
    """Return a copy of `graph` keeping only edges between existing nodes.

    Stats, if present, are recomputed.
    """
    ids = graph.node_ids()
    pruned = graph.model_copy(
        update={
            "edges": [
                e for e in graph.edges if e.source in ids and e.target in ids
            ]
        }
    )
    return with_stats(pruned) if graph.stats is not None else pruned


def filter_graph(
    graph: Graph,
    provider: Optional[str] = None,
    module: Optional[str] = None,
    mode: Optional[ResourceMode] = None,
) -> Graph:
    """Keep nodes matching every given filter, and edges between kept nodes.

    Args:
        graph: The graph to filter.
        provider: Short provider name, e.g. "aws".
        module: Module address; "" selects root-module nodes.
        mode: Resource mode.

    Returns:
        Graph: The filtered copy. Stats, if present, are recomputed.
    """
    nodes = [
        node
        for node in graph.nodes
        if (provider is None or node.provider == provider)
        and (module is None or node.module == module)
        and (mode is None or node.mode == mode)
    ]
    filtered = prune_dangling_edges(
        Graph(nodes=nodes, edges=list(graph.edges))
    )
    return with_stats(filtered) if graph.stats is not None else filtered
