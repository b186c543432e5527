"""Backend exporters for hierarchy graphs."""

from hierflow.backend.graphviz import GraphvizExporter

__all__ = [
    "GraphvizExporter",
]
