import graphviz
from typing import Dict, List, Optional

from hierflow.core.ir import FlowGraph, Node
from hierflow.core.levels import compute_levels


class GraphvizExporter:
    """Exports a FlowGraph to Graphviz/Dot source, one rank per hierarchy level."""

    @staticmethod
    def _escape(text: str) -> str:
        """Keep literal backslashes; graphviz.quoting handles the double quotes."""
        return text.replace("\\", "\\\\")

    @staticmethod
    def _node_label(node: Node) -> str:
        label = GraphvizExporter._escape(node.data.label or node.id)
        if node.data.code:
            return f"{label}\\n{GraphvizExporter._escape(node.data.code)}"
        return label

    @staticmethod
    def to_digraph(graph: FlowGraph, levels: Optional[Dict[str, int]] = None) -> graphviz.Digraph:
        """
        Converts a FlowGraph to a graphviz.Digraph.

        Args:
            graph: The graph to convert
            levels: Precomputed levels; resolved from the edges when omitted
        """
        if levels is None:
            levels = compute_levels(graph.node_list(), graph.edges)

        dot = graphviz.Digraph(name=graph.name, comment=graph.name)
        dot.attr(rankdir="TB")

        by_level: Dict[int, List[Node]] = {}
        for node in graph.nodes.values():
            by_level.setdefault(levels.get(node.id, 0), []).append(node)

        for level in sorted(by_level):
            with dot.subgraph(name=f"level_{level}") as rank:
                rank.attr(rank="same")
                for node in by_level[level]:
                    attrs = {"shape": "box"}
                    if not node.data.is_active:
                        attrs["style"] = "dashed"
                    rank.node(node.id, label=GraphvizExporter._node_label(node), **attrs)

        for edge in graph.edges:
            if edge.source_id in graph.nodes and edge.target_id in graph.nodes:
                dot.edge(edge.source_id, edge.target_id)

        return dot

    @staticmethod
    def to_dot(graph: FlowGraph) -> str:
        """Returns the DOT source string for the graph."""
        return GraphvizExporter.to_digraph(graph).source
