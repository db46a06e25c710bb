"""
terrascope/parser/graph.py

Builds a `Graph` from a decoded `TerraformState`.

Node identifiers follow Terraform's own address syntax, so
`module.app.aws_instance.web.[frontend]` reads the way users already know
from `terraform state list` (with an extra `.` before the bracketed key).

Edges come from two sources per instance:
  - the resource-level `depends_on` list -> EdgeKind.depends_on
  - the instance-level `dependencies` list -> EdgeKind.implicit
An explicit dependency on a target suppresses the implicit edge to it.
No reference validation is done: edges to unknown targets are kept.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List, Set

from terrascope.models.graph import Edge, EdgeKind, Graph, Node
from terrascope.models.terraform_state import (
    ResourceInstance,
    ResourceState,
    TerraformState,
    index_key_text,
)

logger = logging.getLogger(__name__)

_PROVIDER_PREFIX = 'provider["'
_PROVIDER_SUFFIX = '"]'

# Attributes copied verbatim into node metadata. Everything else is dropped.
_METADATA_KEYS = ("id", "name", "arn")


def build_node_id(
    resource: ResourceState, instance: ResourceInstance, position: int
) -> str:
    """Build the node identifier for one instance of a resource.

    Args:
        resource: The owning resource declaration.
        instance: The instance being addressed.
        position: Zero-based position of `instance` in `resource.instances`,
            used when a multi-instance resource carries no index key.

    Returns:
        str: e.g. "aws_vpc.main", "module.app.aws_instance.web",
            "aws_subnet.private.[0]" or "aws_subnet.private.[frontend]".
    """
    parts: List[str] = []
    if resource.module:
        parts.append(resource.module)
    parts += [resource.type, resource.name]

    if resource.is_multi_instance():
        key = (
            index_key_text(instance.index_key)
            if instance.index_key is not None
            else str(position)
        )
        parts.append(f"[{key}]")

    return ".".join(parts)


def extract_provider_name(provider: str) -> str:
    """Reduce a provider string to its short name.

    `provider["registry.terraform.io/hashicorp/aws"]` -> `aws`,
    `provider["aws"]` -> `aws`, `aws` -> `aws`, `` -> ``.
    """
    if provider.startswith(_PROVIDER_PREFIX):
        provider = provider[len(_PROVIDER_PREFIX) :]
    if provider.endswith(_PROVIDER_SUFFIX):
        provider = provider[: -len(_PROVIDER_SUFFIX)]
    return provider.split("/")[-1]


def build_metadata(
    resource: ResourceState, instance: ResourceInstance
) -> Dict[str, Any]:
    """Extract the allow-listed attributes of an instance.

    `mode` is always set; `id`, `name` and `arn` are copied when present;
    `tags` only when it is a mapping; `index_key` only when non-null.
    """
    attributes = instance.attributes
    metadata: Dict[str, Any] = {"mode": resource.mode.value}

    for key in _METADATA_KEYS:
        if key in attributes:
            metadata[key] = copy.deepcopy(attributes[key])

    tags = attributes.get("tags")
    if isinstance(tags, dict):
        metadata["tags"] = copy.deepcopy(tags)

    if instance.index_key is not None:
        metadata["index_key"] = instance.index_key

    return metadata


def collect_dependencies(
    explicit: List[str], implicit: List[str]
) -> Dict[str, EdgeKind]:
    """Merge explicit and implicit dependencies into target -> edge kind.

    Explicit entries always win. The result preserves declaration order:
    explicit targets first, then implicit targets not already present.
    """
    deps: Dict[str, EdgeKind] = {target: EdgeKind.depends_on for target in explicit}
    for target in implicit:
        deps.setdefault(target, EdgeKind.implicit)
    return deps


def build_graph(state: TerraformState) -> Graph:
    """Transform a decoded state into nodes and dependency edges.

    Resources are walked in document order and instances in order within each
    resource. When two instances produce the same identifier only the first
    becomes a node; the later one is skipped entirely, dependencies included.

    Args:
        state: A state returned by `parse_tfstate`.

    Returns:
        Graph: A new graph without stats. An empty state gives an empty graph.
    """
    nodes: List[Node] = []
    edges: List[Edge] = []
    seen: Set[str] = set()

    for resource in state.resources:
        provider = extract_provider_name(resource.provider)

        for position, instance in enumerate(resource.instances):
            node_id = build_node_id(resource, instance, position)

            if node_id in seen:
                # TODO: merge the duplicate's dependencies into the first node's edges
                # once clients no longer rely on first-occurrence-only output.
                logger.debug("Skipping duplicate resource address %s", node_id)
                continue
            seen.add(node_id)

            nodes.append(
                Node(
                    id=node_id,
                    type=resource.type,
                    mode=resource.mode,
                    provider=provider,
                    module=resource.module,
                    metadata=build_metadata(resource, instance),
                )
            )

            deps = collect_dependencies(resource.depends_on, instance.dependencies)
            edges += [
                Edge(source=node_id, target=target, type=kind)
                for target, kind in deps.items()
            ]

    return Graph(nodes=nodes, edges=edges)
