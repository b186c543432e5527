"""
JSON snapshot serialization for FlowGraph objects.

Unlike the interchange format, a snapshot keeps everything the canvas needs:
node positions, edge ids and edge styling. The layout matches the node/edge
objects the browser editor saves, so snapshots can be loaded on either side.
"""

import json
import logging
from typing import Dict, Any

from hierflow.core.errors import ImportValidationError
from hierflow.core.ir import FlowGraph, Node, NodeData, Edge, Position

logger = logging.getLogger(__name__)

NODE_TYPE = "hierarchyNode"


class JsonSerializer:
    """
    Serializes and deserializes FlowGraph snapshots to/from JSON.

    Levels are written as they currently stand on each node. They are not
    trusted on load: callers recalculate them from the edges.
    """

    @staticmethod
    def node_to_dict(node: Node) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "label": node.data.label,
            "level": node.data.level,
            "category": node.data.category,
            "code": node.data.code,
            "isActive": node.data.is_active,
        }
        if node.data.description is not None:
            data["description"] = node.data.description
        if node.data.content is not None:
            data["content"] = node.data.content
        return {
            "id": node.id,
            "type": NODE_TYPE,
            "position": {"x": node.position.x, "y": node.position.y},
            "data": data,
        }

    @staticmethod
    def to_dict(graph: FlowGraph) -> Dict[str, Any]:
        nodes_data = [JsonSerializer.node_to_dict(node) for node in graph.nodes.values()]

        edges_data = []
        for edge in graph.edges:
            edge_data = {
                "id": edge.id,
                "source": edge.source_id,
                "target": edge.target_id,
            }
            edge_data.update(edge.metadata)
            edges_data.append(edge_data)

        return {
            "name": graph.name,
            "nodes": nodes_data,
            "edges": edges_data,
        }

    @staticmethod
    def to_json(graph: FlowGraph, indent: int = 2) -> str:
        return json.dumps(JsonSerializer.to_dict(graph), indent=indent)

    @staticmethod
    def node_from_dict(node_data: Dict[str, Any]) -> Node:
        data = node_data.get("data") or {}
        position = node_data.get("position") or {}
        category = data.get("category")
        return Node(
            node_id=node_data.get("id"),
            position=Position(position.get("x", 0), position.get("y", 0)),
            data=NodeData(
                label=data.get("label", ""),
                level=data.get("level", 0),
                category="default" if category is None else category,
                code=data.get("code") or "",
                is_active=data.get("isActive", True),
                description=data.get("description"),
                content=data.get("content"),
            ),
        )

    @staticmethod
    def _validate(data: Any) -> None:
        """Check the snapshot shape. Raises ImportValidationError before anything is built."""
        if not isinstance(data, dict) or not isinstance(data.get("nodes"), list):
            raise ImportValidationError("Invalid snapshot: missing nodes array")
        if not isinstance(data.get("edges", []), list):
            raise ImportValidationError("Invalid snapshot: edges must be an array")

        seen = set()
        for index, node_data in enumerate(data["nodes"]):
            if not isinstance(node_data, dict) or not isinstance(node_data.get("id"), str) or not node_data["id"]:
                raise ImportValidationError(f"Invalid snapshot node at index {index}: missing id")
            node_id = node_data["id"]
            if node_id in seen:
                raise ImportValidationError(f"Duplicate node id {node_id!r}")
            seen.add(node_id)
            for key in ("data", "position"):
                if node_data.get(key) is not None and not isinstance(node_data[key], dict):
                    raise ImportValidationError(f"Invalid snapshot node {node_id!r}: {key} must be an object")

        for index, edge_data in enumerate(data.get("edges", [])):
            if not isinstance(edge_data, dict):
                raise ImportValidationError(f"Invalid snapshot edge at index {index}: expected an object")
            for key in ("source", "target"):
                if not isinstance(edge_data.get(key), str):
                    raise ImportValidationError(f"Invalid snapshot edge at index {index}: {key} must be a string")

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> FlowGraph:
        JsonSerializer._validate(data)

        graph = FlowGraph(name=data.get("name", "LoadedHierarchy"))

        # Reconstruct nodes
        for node_data in data["nodes"]:
            graph.add_node(JsonSerializer.node_from_dict(node_data))

        # Reconstruct edges; everything besides the endpoints is styling
        dangling = 0
        for edge_data in data.get("edges", []):
            source = edge_data["source"]
            target = edge_data["target"]
            if source not in graph.nodes or target not in graph.nodes:
                dangling += 1
                continue
            metadata = {k: v for k, v in edge_data.items() if k not in ("id", "source", "target")}
            graph.add_edge(Edge(source, target, edge_id=edge_data.get("id"), metadata=metadata))

        if dangling:
            logger.warning("Dropped %d dangling edge(s) from snapshot %r", dangling, graph.name)
        return graph

    @staticmethod
    def from_json(json_str: str) -> FlowGraph:
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ImportValidationError(f"Invalid JSON: {e}") from e
        return JsonSerializer.from_dict(data)
