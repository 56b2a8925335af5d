"""
Aggregate counts for the graph summary panel.
"""

from dataclasses import dataclass, asdict
from typing import Dict

from .code_graph import CodeGraph
from .nodes import NodeKind
from .relationships import RelationType


@dataclass
class GraphStats:
    file_nodes: int = 0
    function_nodes: int = 0
    import_edges: int = 0
    call_edges: int = 0
    contains_edges: int = 0
    total_nodes: int = 0
    total_edges: int = 0
    unresolved_imports: int = 0
    unresolved_calls: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def graph_stats(graph: CodeGraph) -> GraphStats:
    """Count nodes by kind and edges by relation. No resolution or traversal."""
    stats = GraphStats()

    for key in graph.store.get_all_nodes():
        stats.total_nodes += 1
        if key.kind is NodeKind.FILE:
            stats.file_nodes += 1
        elif key.kind is NodeKind.FUNCTION:
            stats.function_nodes += 1

    for _, _, relation, _ in graph.store.get_all_edges():
        stats.total_edges += 1
        if relation == RelationType.IMPORTS.value:
            stats.import_edges += 1
        elif relation == RelationType.CALLS.value:
            stats.call_edges += 1
        elif relation == RelationType.CONTAINS.value:
            stats.contains_edges += 1

    stats.unresolved_imports = graph.report.unresolved_imports
    stats.unresolved_calls = graph.report.unresolved_calls
    return stats
