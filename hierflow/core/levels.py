"""
Hierarchy level resolution.

A node's level is one more than the highest level among its direct parents.
Nodes without parents (roots and isolated nodes) sit at level 0. Cycles are
broken when resolution walks back onto a node that is still being resolved:
that node then contributes whatever its already resolved parents allow,
ignoring the rest. The numbers assigned inside a cycle therefore depend on
the order of the node list.
"""

import logging
from typing import Dict, Iterable, List

from hierflow.core.ir import Node, Edge

logger = logging.getLogger(__name__)

HIERARCHY_LEVELS: Dict[int, str] = {
    0: "National",
    1: "Regional",
    2: "Province",
    3: "Zone",
    4: "Area",
    5: "Parish",
    6: "Additional",
}


def level_name(level: int) -> str:
    """Display name of a hierarchy level. Everything past the table is 'Additional'."""
    if level < 0:
        raise ValueError(f"Level must be non-negative, got {level}")
    return HIERARCHY_LEVELS.get(level, HIERARCHY_LEVELS[max(HIERARCHY_LEVELS)])


def find_dangling_edges(nodes: Iterable[Node], edges: Iterable[Edge]) -> List[Edge]:
    """Edges whose source or target is not among `nodes`."""
    known = {node.id for node in nodes}
    return [e for e in edges if e.source_id not in known or e.target_id not in known]


def compute_levels(nodes: Iterable[Node], edges: Iterable[Edge]) -> Dict[str, int]:
    """
    Compute the level of every node from the edge topology.

    Args:
        nodes: The nodes to resolve. Returned keys follow this order.
        edges: Directed parent -> child edges. Edges touching unknown node
            ids are ignored.

    Returns:
        Mapping of node id to a non-negative level. Inputs are not mutated.
    """
    node_ids: List[str] = []
    seen = set()
    for node in nodes:
        if node.id not in seen:
            seen.add(node.id)
            node_ids.append(node.id)

    # child -> parents, in edge order
    parents: Dict[str, List[str]] = {node_id: [] for node_id in node_ids}
    dangling = 0
    for edge in edges:
        if edge.source_id not in seen or edge.target_id not in seen:
            dangling += 1
            continue
        parents[edge.target_id].append(edge.source_id)

    if dangling:
        logger.warning("Ignoring %d dangling edge(s) during level resolution", dangling)

    levels: Dict[str, int] = {node_id: 0 for node_id in node_ids if not parents[node_id]}

    def cycle_fallback(node_id: str) -> int:
        resolved = [levels[p] for p in parents[node_id] if p in levels]
        logger.debug("Cycle through %s; using %d resolved parent(s)", node_id, len(resolved))
        return max(resolved, default=-1) + 1

    for start in node_ids:
        if start in levels:
            continue

        # Each frame is [node id, iterator over its parents, best parent level so far].
        # The stack is the current resolution chain.
        stack = [[start, iter(parents[start]), -1]]
        on_chain = {start}
        while stack:
            frame = stack[-1]
            descended = False
            for parent in frame[1]:
                if parent in levels:
                    frame[2] = max(frame[2], levels[parent])
                elif parent in on_chain:
                    frame[2] = max(frame[2], cycle_fallback(parent))
                else:
                    stack.append([parent, iter(parents[parent]), -1])
                    on_chain.add(parent)
                    descended = True
                    break
            if descended:
                continue

            node_id, _, best = stack.pop()
            on_chain.discard(node_id)
            levels[node_id] = best + 1
            if stack:
                stack[-1][2] = max(stack[-1][2], levels[node_id])

    return {node_id: levels[node_id] for node_id in node_ids}
