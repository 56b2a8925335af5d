"""
In-memory dependency graph of files and functions.

CodeGraph is an explicit, owned value: the builder fills it, freezes it,
and hands it to the reachability and statistics functions. There is no
module-level graph state.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from .base_graph_store import BaseGraphStore
from .graph_store_factory import create_graph_store
from .nodes import NodeKey, NodeKind
from .relationships import Relationship, RelationType


NodeRef = Union[NodeKey, str]


class GraphFrozenError(RuntimeError):
    """Raised when a finished graph is mutated."""


@dataclass
class BuildReport:
    """Counters for everything the builder could not link."""
    records: int = 0
    skipped_records: int = 0
    unresolved_imports: int = 0
    unresolved_calls: int = 0
    orphan_calls: int = 0  # resolved callee but no containing function

    def to_dict(self) -> Dict[str, int]:
        return {
            "records": self.records,
            "skipped_records": self.skipped_records,
            "unresolved_imports": self.unresolved_imports,
            "unresolved_calls": self.unresolved_calls,
            "orphan_calls": self.orphan_calls,
        }


def as_node_key(node_id: NodeRef) -> Optional[NodeKey]:
    """Accept either a NodeKey or its string form."""
    if isinstance(node_id, NodeKey):
        return node_id
    return NodeKey.parse(node_id)


class CodeGraph:
    """
    Directed multi-relation graph of files and functions.

    Uses a pluggable graph store backend (NetworkX by default).
    """

    def __init__(self, store: Optional[BaseGraphStore] = None):
        self.store = store if store is not None else create_graph_store()
        self.report = BuildReport()
        self._frozen = False

    # ─── Construction ─────────────────────────────

    def _check_mutable(self):
        if self._frozen:
            raise GraphFrozenError("graph is frozen after construction")

    def freeze(self):
        """Mark construction complete; later mutation raises GraphFrozenError."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add_entity(self, key: NodeKey, metadata: Optional[Dict[str, Any]] = None):
        """Add a file or function node to the graph."""
        self._check_mutable()
        self.store.add_node(key, **(metadata or {}))

    def add_relationship(self, rel: Relationship) -> bool:
        """
        Add a relationship edge to the graph.

        Self-loops are discarded and re-adding an existing
        (source, target, relation) edge is a no-op. Returns True when a
        new edge was stored.
        """
        self._check_mutable()
        if rel.source == rel.target:
            return False
        attrs = dict(rel.metadata)
        if rel.line is not None:
            attrs["line"] = rel.line
        return self.store.add_edge(rel.source, rel.target, rel.rel_type.value, **attrs)

    # ─── Queries ──────────────────────────────────

    def has_node(self, node_id: NodeRef) -> bool:
        key = as_node_key(node_id)
        return key is not None and self.store.has_node(key)

    def nodes(self, kind: Optional[NodeKind] = None) -> List[NodeKey]:
        """All node keys in insertion order, optionally of one kind."""
        keys = self.store.get_all_nodes()
        if kind is None:
            return keys
        return [k for k in keys if k.kind is kind]

    def edges(self, rel_type: Optional[RelationType] = None) -> List[Relationship]:
        """All edges in insertion order, optionally of one relation."""
        result = []
        for source, target, relation, attrs in self.store.get_all_edges():
            if rel_type is not None and relation != rel_type.value:
                continue
            line = attrs.pop("line", None)
            result.append(Relationship(
                source=source,
                target=target,
                rel_type=RelationType(relation),
                line=line,
                metadata=attrs
            ))
        return result

    def get_node_data(self, node_id: NodeRef) -> Dict[str, Any]:
        key = as_node_key(node_id)
        if key is None:
            return {}
        return self.store.get_node_data(key)

    def get_edge_data(self, source: NodeRef, target: NodeRef) -> Dict[str, Dict[str, Any]]:
        """Payloads of every edge from source to target, keyed by relation."""
        s, t = as_node_key(source), as_node_key(target)
        if s is None or t is None:
            return {}
        return self.store.get_edge_data(s, t)

    def successors(self, node_id: NodeRef) -> List[NodeKey]:
        key = as_node_key(node_id)
        return self.store.successors(key) if key is not None else []

    def predecessors(self, node_id: NodeRef) -> List[NodeKey]:
        key = as_node_key(node_id)
        return self.store.predecessors(key) if key is not None else []

    def number_of_nodes(self) -> int:
        return self.store.number_of_nodes()

    def number_of_edges(self) -> int:
        return self.store.number_of_edges()

    def _neighbours_by(self, key: NodeRef, rel_type: RelationType, incoming: bool) -> List[NodeKey]:
        found = []
        if incoming:
            for pred in self.predecessors(key):
                if rel_type.value in self.get_edge_data(pred, key):
                    found.append(pred)
        else:
            for succ in self.successors(key):
                if rel_type.value in self.get_edge_data(key, succ):
                    found.append(succ)
        return found

    def get_callers(self, node_id: NodeRef) -> List[NodeKey]:
        """Functions with a `calls` edge into this function."""
        return self._neighbours_by(node_id, RelationType.CALLS, incoming=True)

    def get_callees(self, node_id: NodeRef) -> List[NodeKey]:
        """Functions this function calls."""
        return self._neighbours_by(node_id, RelationType.CALLS, incoming=False)

    def get_importers(self, node_id: NodeRef) -> List[NodeKey]:
        """Files with an `imports` edge into this file."""
        return self._neighbours_by(node_id, RelationType.IMPORTS, incoming=True)

    def get_imports(self, node_id: NodeRef) -> List[NodeKey]:
        """Files this file imports."""
        return self._neighbours_by(node_id, RelationType.IMPORTS, incoming=False)

    def get_functions(self, node_id: NodeRef) -> List[NodeKey]:
        """Functions contained in a file."""
        return self._neighbours_by(node_id, RelationType.CONTAINS, incoming=False)

    def find_cycles(self) -> List[List[NodeKey]]:
        """Find all simple cycles in the graph."""
        return self.store.find_cycles()
