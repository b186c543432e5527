"""
Flat interchange format for hierarchy graphs.

Every node becomes one entry of ``structures`` carrying its display fields and
a list of outgoing ``connections``. The document carries no positions or edge
ids; importing lays nodes out on a grid and regenerates edge styling.

Importers also accept the older shapes: a ``children`` id list, or a single
``parentId`` (``parentTempId``) pointer. The parent-pointer shape can only
express one parent per node and is never written by default.
"""

import json
import logging
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from hierflow.config import LayoutConfig, EdgeStyleConfig, settings
from hierflow.core.errors import ImportValidationError
from hierflow.core.ir import FlowGraph, Node, NodeData, Edge, Position

logger = logging.getLogger(__name__)

SHAPES = ("connections", "children", "parent")


def to_interchange(nodes: Iterable[Node], edges: Iterable[Edge], shape: str = "connections") -> Dict[str, Any]:
    """
    Convert nodes and edges into an interchange document.

    Args:
        nodes: Nodes to export, one structure each, in this order.
        edges: Directed edges. Edges touching unknown nodes are left out.
        shape: "connections" (default), "children", or the lossy "parent".
    """
    if shape not in SHAPES:
        raise ValueError(f"Unknown interchange shape: {shape}. Use: {', '.join(SHAPES)}")

    nodes = list(nodes)
    known = {node.id for node in nodes}

    outgoing: Dict[str, List[str]] = {}
    first_parent: Dict[str, str] = {}
    skipped = 0
    for edge in edges:
        if edge.source_id not in known or edge.target_id not in known:
            skipped += 1
            continue
        outgoing.setdefault(edge.source_id, []).append(edge.target_id)
        first_parent.setdefault(edge.target_id, edge.source_id)

    if skipped:
        logger.warning("Left %d dangling edge(s) out of the export", skipped)

    structures = []
    for node in nodes:
        data = node.data
        structure: Dict[str, Any] = {
            "id": node.id,
            "name": data.label,
            "code": data.code,
            "category": data.category,
            "isActive": data.is_active,
            "level": data.level,
        }
        if data.description is not None:
            structure["description"] = data.description
        if data.content is not None:
            structure["content"] = data.content

        targets = outgoing.get(node.id, [])
        if shape == "connections":
            structure["connections"] = [{"targetId": target} for target in targets]
        elif shape == "children":
            structure["children"] = list(targets)
        else:
            structure["parentId"] = first_parent.get(node.id)
        structures.append(structure)

    return {"structures": structures}


def validate_document(doc: Any) -> List[Dict[str, Any]]:
    """Check the document shape and return its structures. Raises ImportValidationError."""
    if not isinstance(doc, dict):
        raise ImportValidationError("Invalid import data: expected a JSON object")
    structures = doc.get("structures")
    if structures is None:
        raise ImportValidationError("Invalid import data: missing structures array")
    if not isinstance(structures, list):
        raise ImportValidationError("Invalid import data: structures must be an array")

    seen: Set[str] = set()
    for index, structure in enumerate(structures):
        if not isinstance(structure, dict):
            raise ImportValidationError(f"Invalid structure at index {index}: expected an object")
        structure_id = _structure_id(structure)
        if not isinstance(structure_id, str) or not structure_id:
            raise ImportValidationError(f"Invalid structure at index {index}: missing id")
        if not isinstance(structure.get("name"), str):
            raise ImportValidationError(f"Invalid structure {structure_id!r}: missing name")
        if structure_id in seen:
            raise ImportValidationError(f"Duplicate structure id {structure_id!r}")
        seen.add(structure_id)
    return structures


def _as_bool(value: Any) -> bool:
    """Flags written as text ("false", "0", "no") are read as False."""
    if isinstance(value, str):
        return value.strip().lower() not in ("false", "0", "no", "off", "")
    return bool(value)


def _structure_id(structure: Dict[str, Any]) -> Any:
    return structure.get("id", structure.get("tempId"))


def _declared_targets(structure: Dict[str, Any]) -> List[str]:
    """Outgoing targets from the ``connections`` and ``children`` lists."""
    targets = []
    connections = structure.get("connections")
    if isinstance(connections, list):
        for connection in connections:
            if isinstance(connection, dict):
                target = connection.get("targetId")
            else:
                target = connection
            if isinstance(target, str):
                targets.append(target)
    children = structure.get("children")
    if isinstance(children, list):
        targets.extend(child for child in children if isinstance(child, str))
    return targets


def _edge_pairs(structures: List[Dict[str, Any]], known: Set[str]) -> List[Tuple[str, str]]:
    pairs: List[Tuple[str, str]] = []
    unresolved = 0

    for structure in structures:
        source = _structure_id(structure)
        for target in _declared_targets(structure):
            if target not in known:
                unresolved += 1
                continue
            pairs.append((source, target))

    declared = set(pairs)
    for structure in structures:
        parent = structure.get("parentId", structure.get("parentTempId"))
        if parent is None or parent == "":
            continue
        child = _structure_id(structure)
        if not isinstance(parent, str) or parent not in known:
            unresolved += 1
            continue
        if (parent, child) not in declared:
            pairs.append((parent, child))
            declared.add((parent, child))

    if unresolved:
        logger.warning("Skipped %d reference(s) to unknown structure ids", unresolved)
    return pairs


def from_interchange(
    doc: Any,
    layout: Optional[LayoutConfig] = None,
    edge_style: Optional[EdgeStyleConfig] = None,
    name: str = "Hierarchy",
) -> FlowGraph:
    """
    Rebuild a graph from an interchange document.

    Levels are left at 0; call ``FlowGraph.recalculate_levels`` afterwards.
    Raises ImportValidationError before building anything if the document
    is malformed.
    """
    structures = validate_document(doc)
    layout = layout or settings.layout
    edge_style = edge_style or settings.edge_style

    graph = FlowGraph(name)
    for index, structure in enumerate(structures):
        x, y = layout.cell(index)
        category = structure.get("category", structure.get("type"))
        data = NodeData(
            label=structure["name"],
            level=0,
            category="default" if category is None else category,
            code=structure.get("code") or "",
            is_active=_as_bool(structure.get("isActive", True)),
            description=structure.get("description"),
            content=structure.get("content"),
        )
        graph.add_node(Node(node_id=_structure_id(structure), position=Position(x, y), data=data))

    for source, target in _edge_pairs(structures, set(graph.nodes)):
        graph.add_edge(Edge(source, target, metadata=edge_style.to_metadata()))

    logger.debug("Imported %d node(s) and %d edge(s)", len(graph.nodes), len(graph.edges))
    return graph


class InterchangeCodec:
    """Reads and writes interchange documents for a FlowGraph."""

    @staticmethod
    def to_dict(graph: FlowGraph, shape: str = "connections") -> Dict[str, Any]:
        return to_interchange(graph.node_list(), graph.edges, shape=shape)

    @staticmethod
    def to_json(graph: FlowGraph, indent: int = 2, shape: str = "connections") -> str:
        return json.dumps(InterchangeCodec.to_dict(graph, shape=shape), indent=indent)

    @staticmethod
    def from_dict(doc: Any, layout: Optional[LayoutConfig] = None) -> FlowGraph:
        return from_interchange(doc, layout=layout)

    @staticmethod
    def from_json(json_str: str, layout: Optional[LayoutConfig] = None) -> FlowGraph:
        try:
            doc = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ImportValidationError(f"Invalid JSON: {e}") from e
        return from_interchange(doc, layout=layout)
