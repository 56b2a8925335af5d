"""
Relationship types and models for the dependency graph.

This module defines the three relation kinds that can connect
nodes in the graph and the edge record carried between them.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from enum import Enum

from .nodes import NodeKey


class RelationType(Enum):
    """
    Types of relationships between graph nodes.

    These represent the edges in the graph.
    """
    CONTAINS = "contains"   # File owns a function
    IMPORTS = "imports"     # File references another file
    CALLS = "calls"         # Function references another function


@dataclass(frozen=True)
class Relationship:
    """
    Represents a relationship (edge) between two nodes.

    Identity is (source, target, rel_type); `line` and `metadata` are
    payload only.

    Attributes:
        source: Key of the source node
        target: Key of the target node
        rel_type: Type of relationship
        line: Line number where the relationship occurs
        metadata: Extra payload (raw import specifier, callee name, ...)
    """
    source: NodeKey
    target: NodeKey
    rel_type: RelationType
    line: Optional[int] = field(default=None, compare=False, hash=False)
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def key(self):
        return (self.source, self.target, self.rel_type)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize relationship to dictionary."""
        return {
            "source": str(self.source),
            "target": str(self.target),
            "type": self.rel_type.value,
            "line": self.line,
            "metadata": dict(self.metadata)
        }
