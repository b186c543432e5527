import uuid
from typing import Dict, List, Optional, Any


class Position:
    """Canvas coordinates of a node."""
    def __init__(self, x: float = 0.0, y: float = 0.0):
        self.x = x
        self.y = y

    def __eq__(self, other):
        if not isinstance(other, Position):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __repr__(self):
        return f"<Position x={self.x} y={self.y}>"


class NodeData:
    """Display fields of a hierarchy entity. `level` is derived from the edges."""
    def __init__(
        self,
        label: str = "",
        level: int = 0,
        category: str = "default",
        code: str = "",
        is_active: bool = True,
        description: Optional[str] = None,
        content: Optional[str] = None,
    ):
        self.label = label
        self.level = level
        self.category = category
        self.code = code
        self.is_active = is_active
        self.description = description
        self.content = content

    def __repr__(self):
        return f"<NodeData label='{self.label}' level={self.level} category='{self.category}'>"


class Node:
    """An entity on the canvas."""
    def __init__(self, node_id: Optional[str] = None, position: Optional[Position] = None, data: Optional[NodeData] = None):
        self.id = node_id if node_id else str(uuid.uuid4())
        self.position = position or Position()
        self.data = data or NodeData()

    @property
    def label(self) -> str:
        return self.data.label

    def __repr__(self):
        return f"<{self.__class__.__name__} id={self.id} label='{self.data.label}' level={self.data.level}>"


class Edge:
    """A directed connection. The source is the structural parent of the target."""
    def __init__(self, source_id: str, target_id: str, edge_id: Optional[str] = None, metadata: Optional[Dict[str, Any]] = None):
        self.id = edge_id if edge_id else f"edge-{source_id}-{target_id}"
        self.source_id = source_id
        self.target_id = target_id
        self.metadata = metadata or {}  # styling: animated, style, markerEnd

    def __repr__(self):
        return f"<Edge {self.source_id} -> {self.target_id} id='{self.id}'>"


class FlowGraph:
    """Caller-owned node/edge state of a hierarchy diagram."""
    def __init__(self, name: str = "Hierarchy"):
        self.name = name
        self.nodes: Dict[str, Node] = {}
        self.edges: List[Edge] = []

    def add_node(self, node: Node) -> Node:
        if node.id in self.nodes:
            raise ValueError(f"Node with id {node.id} already exists.")
        self.nodes[node.id] = node
        return node

    def add_edge(self, edge: Edge) -> Edge:
        if edge.source_id not in self.nodes:
            raise ValueError(f"Source node {edge.source_id} does not exist.")
        if edge.target_id not in self.nodes:
            raise ValueError(f"Target node {edge.target_id} does not exist.")
        # Multiple edges between the same pair are allowed, ids are not shared.
        if any(e.id == edge.id for e in self.edges):
            edge.id = self._unique_edge_id(edge.id)
        self.edges.append(edge)
        return edge

    def _unique_edge_id(self, base: str) -> str:
        taken = {e.id for e in self.edges}
        suffix = 1
        while f"{base}-{suffix}" in taken:
            suffix += 1
        return f"{base}-{suffix}"

    def remove_node(self, node_id: str) -> Optional[Node]:
        """Remove a node together with every edge touching it."""
        node = self.nodes.pop(node_id, None)
        if node is not None:
            self.edges = [e for e in self.edges if e.source_id != node_id and e.target_id != node_id]
        return node

    def remove_edge(self, edge_id: str) -> Optional[Edge]:
        for idx, edge in enumerate(self.edges):
            if edge.id == edge_id:
                return self.edges.pop(idx)
        return None

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def node_list(self) -> List[Node]:
        return list(self.nodes.values())

    def parents_of(self, node_id: str) -> List[Node]:
        return [self.nodes[e.source_id] for e in self.edges if e.target_id == node_id and e.source_id in self.nodes]

    def children_of(self, node_id: str) -> List[Node]:
        return [self.nodes[e.target_id] for e in self.edges if e.source_id == node_id and e.target_id in self.nodes]

    def recalculate_levels(self) -> Dict[str, int]:
        """Resolve levels from the edges and write them into each node's data."""
        from hierflow.core.levels import compute_levels

        levels = compute_levels(self.node_list(), self.edges)
        for node in self.nodes.values():
            node.data.level = levels.get(node.id, 0)
        return levels
