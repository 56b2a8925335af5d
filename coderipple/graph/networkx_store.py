"""
NetworkX implementation of the graph store.

Wraps a NetworkX MultiDiGraph behind the BaseGraphStore interface,
using the relation name as the edge key. This is the default backend.
"""

from typing import Any, Dict, Hashable, List, Tuple

import networkx as nx

from .base_graph_store import BaseGraphStore


class NetworkXStore(BaseGraphStore):
    """Graph store backed by NetworkX (in-memory directed multigraph)."""

    def __init__(self):
        self._graph = nx.MultiDiGraph()

    # ─── Node Operations ──────────────────────────

    def add_node(self, node_id: Hashable, **attrs) -> None:
        self._graph.add_node(node_id, **attrs)

    def has_node(self, node_id: Hashable) -> bool:
        try:
            return node_id in self._graph
        except TypeError:
            # unhashable ids are never nodes
            return False

    def get_node_data(self, node_id: Hashable) -> Dict[str, Any]:
        if self.has_node(node_id):
            return dict(self._graph.nodes[node_id])
        return {}

    def get_all_nodes(self) -> List[Hashable]:
        return list(self._graph.nodes)

    def number_of_nodes(self) -> int:
        return self._graph.number_of_nodes()

    # ─── Edge Operations ──────────────────────────

    def add_edge(self, source: Hashable, target: Hashable, relation: str, **attrs) -> bool:
        if self._graph.has_edge(source, target, key=relation):
            return False
        self._graph.add_edge(source, target, key=relation, **attrs)
        return True

    def has_edge(self, source: Hashable, target: Hashable, relation: str = None) -> bool:
        if relation is None:
            return self._graph.has_edge(source, target)
        return self._graph.has_edge(source, target, key=relation)

    def get_edge_data(self, source: Hashable, target: Hashable) -> Dict[str, Dict[str, Any]]:
        data = self._graph.get_edge_data(source, target)
        if not data:
            return {}
        return {relation: dict(attrs) for relation, attrs in data.items()}

    def get_all_edges(self) -> List[Tuple[Hashable, Hashable, str, Dict[str, Any]]]:
        return [
            (source, target, relation, dict(attrs))
            for source, target, relation, attrs in self._graph.edges(keys=True, data=True)
        ]

    def number_of_edges(self) -> int:
        return self._graph.number_of_edges()

    # ─── Traversal ────────────────────────────────

    def predecessors(self, node_id: Hashable) -> List[Hashable]:
        if not self.has_node(node_id):
            return []
        return list(self._graph.predecessors(node_id))

    def successors(self, node_id: Hashable) -> List[Hashable]:
        if not self.has_node(node_id):
            return []
        return list(self._graph.successors(node_id))

    # ─── Analysis ─────────────────────────────────

    def find_cycles(self) -> List[List[Hashable]]:
        # parallel relations between one pair would repeat cycles
        return list(nx.simple_cycles(nx.DiGraph(self._graph)))
