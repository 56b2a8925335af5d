"""
Graph module - Dependency graph construction and analysis.

This module builds the file/function graph from extraction records,
resolves imports and calls, and answers ripple reachability queries.
"""

from .nodes import (
    NodeKind,
    NodeKey
)

from .relationships import (
    RelationType,
    Relationship
)

from .code_graph import (
    CodeGraph,
    BuildReport,
    GraphFrozenError
)

from .import_resolver import (
    ImportResolver,
    ImportResolution,
    resolve_import_path
)

from .resolver import (
    FunctionIndex,
    CallResolver,
    ResolvedCall,
    find_containing_function
)

from .builder import (
    GraphBuilder,
    build_dependency_graph
)

from .reachability import (
    downstream,
    upstream,
    ripple
)

from .statistics import (
    GraphStats,
    graph_stats
)

from .export import graph_to_dict

__all__ = [
    # Nodes
    "NodeKind",
    "NodeKey",
    # Relationships
    "RelationType",
    "Relationship",
    # Graph
    "CodeGraph",
    "BuildReport",
    "GraphFrozenError",
    # Resolvers
    "ImportResolver",
    "ImportResolution",
    "resolve_import_path",
    "FunctionIndex",
    "CallResolver",
    "ResolvedCall",
    "find_containing_function",
    # Builder
    "GraphBuilder",
    "build_dependency_graph",
    # Reachability
    "downstream",
    "upstream",
    "ripple",
    # Statistics
    "GraphStats",
    "graph_stats",
    # Export
    "graph_to_dict",
]
