"""
Abstract base class for graph stores.

Defines the contract that graph storage implementations must follow.
Edges are keyed by (source, target, relation) so that one pair of nodes
may be linked by several relations at once, while re-adding the same
relation is a no-op.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Hashable, List, Tuple


class BaseGraphStore(ABC):
    """
    Abstract graph store interface.

    All implementations must support directed multi-relation graph
    operations: nodes, keyed edges and one-step traversal.
    """

    # ─────────────────────────────────────────────
    # Node Operations
    # ─────────────────────────────────────────────

    @abstractmethod
    def add_node(self, node_id: Hashable, **attrs) -> None:
        """Add a node with optional attributes."""
        ...

    @abstractmethod
    def has_node(self, node_id: Hashable) -> bool:
        """Check if a node exists in the graph."""
        ...

    @abstractmethod
    def get_node_data(self, node_id: Hashable) -> Dict[str, Any]:
        """Get all attributes for a node. Returns {} if node not found."""
        ...

    @abstractmethod
    def get_all_nodes(self) -> List[Hashable]:
        """Return list of all node IDs in insertion order."""
        ...

    @abstractmethod
    def number_of_nodes(self) -> int:
        """Return total number of nodes."""
        ...

    # ─────────────────────────────────────────────
    # Edge Operations
    # ─────────────────────────────────────────────

    @abstractmethod
    def add_edge(self, source: Hashable, target: Hashable, relation: str, **attrs) -> bool:
        """
        Add a directed edge for `relation`.

        Returns False (and leaves the existing payload untouched) when an
        edge with the same relation already links the pair.
        """
        ...

    @abstractmethod
    def has_edge(self, source: Hashable, target: Hashable, relation: str = None) -> bool:
        """Check if an edge exists, optionally for one relation only."""
        ...

    @abstractmethod
    def get_edge_data(self, source: Hashable, target: Hashable) -> Dict[str, Dict[str, Any]]:
        """Get relation -> attributes for all edges of a pair. {} if none."""
        ...

    @abstractmethod
    def get_all_edges(self) -> List[Tuple[Hashable, Hashable, str, Dict[str, Any]]]:
        """Return (source, target, relation, attributes) for every edge."""
        ...

    @abstractmethod
    def number_of_edges(self) -> int:
        """Return total number of edges."""
        ...

    # ─────────────────────────────────────────────
    # Traversal
    # ─────────────────────────────────────────────

    @abstractmethod
    def predecessors(self, node_id: Hashable) -> List[Hashable]:
        """Get direct predecessors (nodes with edges INTO this node)."""
        ...

    @abstractmethod
    def successors(self, node_id: Hashable) -> List[Hashable]:
        """Get direct successors (nodes this node has edges TO)."""
        ...

    # ─────────────────────────────────────────────
    # Graph Analysis
    # ─────────────────────────────────────────────

    @abstractmethod
    def find_cycles(self) -> List[List[Hashable]]:
        """Find all simple cycles in the graph."""
        ...
