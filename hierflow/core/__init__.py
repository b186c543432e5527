"""Core data structures and algorithms for hierflow graphs."""

from .ir import Position, NodeData, Node, Edge, FlowGraph
from .errors import ImportValidationError
from .levels import compute_levels, find_dangling_edges, level_name, HIERARCHY_LEVELS
from .interchange import to_interchange, from_interchange, InterchangeCodec
from .serialization import JsonSerializer
from .paths import node_path

__all__ = [
    "Position",
    "NodeData",
    "Node",
    "Edge",
    "FlowGraph",
    "ImportValidationError",
    "compute_levels",
    "find_dangling_edges",
    "level_name",
    "HIERARCHY_LEVELS",
    "to_interchange",
    "from_interchange",
    "InterchangeCodec",
    "JsonSerializer",
    "node_path",
]
