"""
terrascope/models/graph.py

Pydantic models for the resource graph handed to visualization clients:
Node, Edge, Stats and Graph. Field names are the wire names; `to_dict` and
`to_json` drop the optional fields the same way the API always has
(empty `module`/`metadata`, absent `stats`, empty per-type/per-mode counts).
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Set

from pydantic import BaseModel, Field, model_serializer

from terrascope.models.terraform_state import ResourceMode


class EdgeKind(str, Enum):
    depends_on = "depends_on"
    implicit = "implicit"


def _drop_empty(data: Dict[str, Any], keys: List[str]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if not (k in keys and not v)}


class Node(BaseModel):
    """A single resource instance in the graph.

    Attributes:
        id: Terraform-style address, unique within one graph.
        type: Resource type, e.g. "aws_instance".
        mode: "managed" or "data".
        provider: Short provider name, e.g. "aws".
        module: Module address, empty for the root module.
        metadata: Allow-listed attributes (id, name, arn, tags) plus mode and index_key.
    """

    id: str
    type: str
    mode: ResourceMode
    provider: str
    module: str = ""
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @model_serializer(mode="wrap")
    def serialize_node(self, handler: Callable[[Any], Dict[str, Any]]) -> Dict[str, Any]:
        return _drop_empty(handler(self), ["module", "metadata"])


class Edge(BaseModel):
    """A directed dependency from `source` to `target`."""

    source: str
    target: str
    type: EdgeKind


class Stats(BaseModel):
    """Summary counts for a graph."""

    total_nodes: int
    total_edges: int
    resources_by_type: Dict[str, int] = Field(default_factory=dict)
    resources_by_mode: Dict[str, int] = Field(default_factory=dict)

    @model_serializer(mode="wrap")
    def serialize_stats(self, handler: Callable[[Any], Dict[str, Any]]) -> Dict[str, Any]:
        return _drop_empty(handler(self), ["resources_by_type", "resources_by_mode"])


class Graph(BaseModel):
    """Nodes in first-seen order, edges in traversal order, optional stats."""

    nodes: List[Node] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)
    stats: Optional[Stats] = None

    def node_ids(self) -> Set[str]:
        """Return the set of node identifiers."""
        return {node.id for node in self.nodes}

    def to_dict(self) -> Dict[str, Any]:
        """Dump to JSON-compatible primitives in the wire shape."""
        data = self.model_dump(mode="json")
        if data.get("stats") is None:
            data.pop("stats", None)
        return data

    def to_json(self, pretty: bool = False) -> str:
        """Serialize to a JSON string, indented by two spaces if `pretty`."""
        return json.dumps(self.to_dict(), indent=2 if pretty else None)
