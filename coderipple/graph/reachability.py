"""
Reachability queries behind the ripple highlight.

Selecting a node highlights everything it can reach (downstream) and
everything that can reach it (upstream), across all relation kinds.
"""

from typing import Callable, List, Set

from .code_graph import CodeGraph, NodeRef, as_node_key
from .nodes import NodeKey


def _collect(graph: CodeGraph, start: NodeRef,
             neighbours: Callable[[NodeKey], List[NodeKey]]) -> Set[NodeKey]:
    """
    Iterative depth-first walk from `start`.

    The start node is never part of its own result, even on a cycle.
    Unknown or unparseable ids give an empty set.
    """
    key = as_node_key(start)
    if key is None or not graph.has_node(key):
        return set()

    reached: Set[NodeKey] = set()
    visited = {key}
    stack = [key]
    while stack:
        current = stack.pop()
        for nxt in neighbours(current):
            reached.add(nxt)
            if nxt not in visited:
                visited.add(nxt)
                stack.append(nxt)
    reached.discard(key)
    return reached


def downstream(graph: CodeGraph, node_id: NodeRef) -> Set[NodeKey]:
    """Every node reachable by following outgoing edges."""
    return _collect(graph, node_id, graph.successors)


def upstream(graph: CodeGraph, node_id: NodeRef) -> Set[NodeKey]:
    """Every node that can reach `node_id` through incoming edges."""
    return _collect(graph, node_id, graph.predecessors)


def ripple(graph: CodeGraph, node_id: NodeRef) -> Set[NodeKey]:
    """The full highlight set: the node itself plus both directions."""
    key = as_node_key(node_id)
    if key is None or not graph.has_node(key):
        return set()
    return {key} | downstream(graph, key) | upstream(graph, key)
