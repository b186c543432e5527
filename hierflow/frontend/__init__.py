"""
hierflow frontend modules for building hierarchy graphs.

- HierarchyBuilder: Imperative API mirroring the editor's create/connect actions
"""

from .builder import HierarchyBuilder

__all__ = [
    "HierarchyBuilder",
]
