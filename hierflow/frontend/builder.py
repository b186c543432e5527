"""Imperative HierarchyBuilder for manual graph construction."""

from typing import Optional

from hierflow.config import EdgeStyleConfig, settings
from hierflow.core.ir import FlowGraph, Node, NodeData, Edge, Position


class HierarchyBuilder:
    """
    Imperative API for building hierarchy graphs by adding entities and connections.

    Levels are recalculated after every connection, the same way the editor
    does after each structural change.

    Example:
        builder = HierarchyBuilder("Regions")
        hq = builder.entity("Headquarters", code="HQ")
        north = builder.entity("North", category="gold")
        builder.connect(hq, north)
        graph = builder.build()
    """

    def __init__(self, name: str = "Hierarchy", edge_style: Optional[EdgeStyleConfig] = None):
        self.graph = FlowGraph(name)
        self.edge_style = edge_style or settings.edge_style

    def entity(
        self,
        label: str = "New Entity",
        category: str = "default",
        code: str = "",
        node_id: Optional[str] = None,
        position: Optional[Position] = None,
        is_active: bool = True,
        description: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Node:
        data = NodeData(
            label=label or "New Entity",
            level=0,
            category=category,
            code=code,
            is_active=is_active,
            description=description,
            content=content,
        )
        node = Node(node_id=node_id, position=position, data=data)
        self.graph.add_node(node)
        return node

    def connect(self, source: Node, target: Node) -> Edge:
        edge = Edge(source.id, target.id, metadata=self.edge_style.to_metadata())
        self.graph.add_edge(edge)
        self.graph.recalculate_levels()
        return edge

    def disconnect(self, edge: Edge) -> None:
        self.graph.remove_edge(edge.id)
        self.graph.recalculate_levels()

    def remove(self, node: Node) -> None:
        self.graph.remove_node(node.id)
        self.graph.recalculate_levels()

    def build(self) -> FlowGraph:
        self.graph.recalculate_levels()
        return self.graph
