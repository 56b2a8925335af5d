"""
Plain-data export of a CodeGraph for the rendering layer.

Positions and styling are the renderer's concern; this only emits
ids, kinds and payloads.
"""

from typing import Any, Dict, List

from .code_graph import CodeGraph


def node_to_dict(graph: CodeGraph, key) -> Dict[str, Any]:
    return {"id": str(key), **graph.get_node_data(key)}


def graph_to_dict(graph: CodeGraph) -> Dict[str, List[Dict[str, Any]]]:
    """
    Serialize nodes and edges.

    Edge ids are "<source>-<target>-<relation>" so that two relations
    between the same pair stay distinct.
    """
    nodes = [node_to_dict(graph, key) for key in graph.nodes()]

    edges = []
    for rel in graph.edges():
        edge = rel.to_dict()
        edge["id"] = f"{edge['source']}-{edge['target']}-{edge['type']}"
        edges.append(edge)

    return {"nodes": nodes, "edges": edges}
