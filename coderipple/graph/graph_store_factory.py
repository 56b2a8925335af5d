"""
Graph store factory.

Returns the appropriate graph store backend based on configuration.

Set GRAPH_STORE_BACKEND env var to choose:
    - "networkx" → NetworkX in-memory (default)
"""

from typing import Optional

from .base_graph_store import BaseGraphStore
from ..config import get_settings, log


def create_graph_store(backend: Optional[str] = None) -> BaseGraphStore:
    """
    Create and return a graph store instance.

    Args:
        backend: Backend name. If None, reads from GRAPH_STORE_BACKEND
                 env var (default: "networkx").

    Returns:
        A BaseGraphStore implementation.
    """
    backend = (backend or get_settings().graph_store_backend).lower()

    if backend == "networkx":
        from .networkx_store import NetworkXStore
        log("[Factory] Using NetworkX graph store")
        return NetworkXStore()

    raise ValueError(
        f"Unknown graph store backend: '{backend}'. "
        f"Supported: 'networkx'"
    )
