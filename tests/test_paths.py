from conftest import make_nodes, make_edges
from hierflow.core.paths import node_path


def test_path_from_root(regional_hierarchy):
    path = node_path("area", regional_hierarchy.node_list(), regional_hierarchy.edges)
    assert path == "Headquarters / East Region / Lakeside Province / Central Zone / Market Area"


def test_root_path_is_its_label():
    assert node_path("a", make_nodes("a"), []) == "A"


def test_unknown_node_gives_empty_path():
    assert node_path("ghost", make_nodes("a"), []) == ""


def test_walk_stops_at_unknown_parent():
    nodes = make_nodes("b")
    assert node_path("b", nodes, make_edges(("ghost", "b"))) == "B"


def test_cycle_is_bounded():
    nodes = make_nodes("a", "b")
    path = node_path("a", nodes, make_edges(("a", "b"), ("b", "a")), max_depth=5)
    assert path.split(" / ") == ["A", "B", "A", "B", "A"]


def test_custom_separator():
    nodes, edges = make_nodes("a", "b"), make_edges(("a", "b"))
    assert node_path("b", nodes, edges, separator=" > ") == "A > B"


def test_dangling_first_parent_is_skipped():
    nodes = make_nodes("a", "b")
    edges = make_edges(("ghost", "b"), ("a", "b"))
    assert node_path("b", nodes, edges) == "A / B"
