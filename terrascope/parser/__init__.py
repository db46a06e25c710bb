"""
terrascope/parser/__init__.py

Provides a convenient import interface for the parser submodules:

- tfstate.py decodes raw state bytes into a TerraformState
- graph.py turns a TerraformState into a Graph
- stats.py offers opt-in post-processing of a Graph

Typical use:
    graph = build_graph(parse_tfstate(raw_bytes))
"""

from terrascope.parser.tfstate import (
    TfstateError,
    EmptyInputError,
    MalformedDocumentError,
    MissingVersionError,
    MissingTerraformVersionError,
    MissingToolVersionError,
    parse_tfstate,
)
from terrascope.parser.graph import (
    build_graph,
    build_node_id,
    build_metadata,
    collect_dependencies,
    extract_provider_name,
)
from terrascope.parser.stats import (
    compute_stats,
    with_stats,
    prune_dangling_edges,
    filter_graph,
)

__all__ = [
    "TfstateError",
    "EmptyInputError",
    "MalformedDocumentError",
    "MissingVersionError",
    "MissingTerraformVersionError",
    "MissingToolVersionError",
    "parse_tfstate",
    "build_graph",
    "build_node_id",
    "build_metadata",
    "collect_dependencies",
    "extract_provider_name",
    "compute_stats",
    "with_stats",
    "prune_dangling_edges",
    "filter_graph",
]
