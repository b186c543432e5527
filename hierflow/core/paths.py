"""Breadcrumb paths from a node up to its root."""

from typing import Dict, Iterable

from hierflow.core.ir import Node, Edge

MAX_PATH_DEPTH = 20


def node_path(node_id: str, nodes: Iterable[Node], edges: Iterable[Edge], max_depth: int = MAX_PATH_DEPTH, separator: str = " / ") -> str:
    """
    Join labels from the root down to ``node_id``, following each node's first parent.

    Edges touching unknown nodes are never followed. The walk stops at a node
    without parents, at an unknown id, or after
    ``max_depth`` steps, which also bounds walks around a cycle.
    """
    by_id: Dict[str, Node] = {node.id: node for node in nodes}
    first_parent: Dict[str, str] = {}
    for edge in edges:
        if edge.source_id in by_id and edge.target_id in by_id:
            first_parent.setdefault(edge.target_id, edge.source_id)

    path = []
    current = node_id
    depth = 0
    while current and depth < max_depth:
        node = by_id.get(current)
        if node is None:
            break
        path.insert(0, node.data.label or "Unknown")
        current = first_parent.get(current)
        depth += 1

    return separator.join(path)
