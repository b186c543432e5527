"""
hierflow - Level resolution and interchange for hierarchy flow diagrams.

Main APIs:
- compute_levels: Derive each node's hierarchy level from the edges
- to_interchange / from_interchange: Flat connection-list documents
- JsonSerializer: Full graph snapshots with positions and edge styling
- HierarchyBuilder: Imperative API for manual graph construction

Backends:
- GraphvizExporter: Graphviz DOT format, one rank per level
"""

from hierflow.core.ir import FlowGraph, Node, NodeData, Edge, Position
from hierflow.core.errors import ImportValidationError
from hierflow.core.levels import compute_levels, find_dangling_edges, level_name
from hierflow.core.interchange import to_interchange, from_interchange, InterchangeCodec
from hierflow.core.serialization import JsonSerializer
from hierflow.core.paths import node_path
from hierflow.frontend import HierarchyBuilder
from hierflow.backend import GraphvizExporter

__all__ = [
    # Core IR
    "FlowGraph",
    "Node",
    "NodeData",
    "Edge",
    "Position",
    "ImportValidationError",
    # Levels
    "compute_levels",
    "find_dangling_edges",
    "level_name",
    "node_path",
    # Serialization
    "to_interchange",
    "from_interchange",
    "InterchangeCodec",
    "JsonSerializer",
    # Frontends
    "HierarchyBuilder",
    # Backends
    "GraphvizExporter",
]
