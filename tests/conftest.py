import sys
import os
import pytest
sys.path.append(os.path.dirname(__file__))

from sample_hierarchy import create_regional_hierarchy
from hierflow.core.ir import Node, NodeData, Edge


def make_nodes(*ids):
    return [Node(node_id=node_id, data=NodeData(label=node_id.upper())) for node_id in ids]


def make_edges(*pairs):
    return [Edge(source, target) for source, target in pairs]


@pytest.fixture
def regional_hierarchy():
    return create_regional_hierarchy()


@pytest.fixture
def chain():
    return make_nodes("a", "b", "c"), make_edges(("a", "b"), ("b", "c"))


@pytest.fixture
def diamond():
    return make_nodes("a", "b", "c", "d"), make_edges(("a", "b"), ("a", "c"), ("b", "d"), ("c", "d"))
