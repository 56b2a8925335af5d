from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from coderipple.config import get_settings
from coderipple.graph import (
    CodeGraph,
    build_dependency_graph,
    downstream,
    upstream,
    ripple,
    graph_stats,
    graph_to_dict,
)
from coderipple.graph.code_graph import as_node_key
from coderipple.parsing import parse_files

settings = get_settings()

app = FastAPI(
    title="coderipple",
    description="Dependency graph and ripple reachability for uploaded source trees",
    version="0.1.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- REQUEST MODELS ---

class SourceFile(BaseModel):
    path: str
    content: str


class ProjectUpload(BaseModel):
    name: Optional[str] = None
    # Pre-extracted records, in SourceRecord.to_dict or browser-parser shape
    records: List[Dict[str, Any]] = []
    # Raw sources, parsed server side
    files: List[SourceFile] = []


# --- SESSION STATE ---

@dataclass
class ProjectSession:
    """The one project currently being browsed. Replaced on every upload."""
    name: Optional[str]
    graph: CodeGraph


_session: Dict[str, Optional[ProjectSession]] = {"current": None}


def get_session() -> ProjectSession:
    session = _session["current"]
    if session is None:
        raise HTTPException(status_code=404, detail="No project loaded")
    return session


def reset_session() -> None:
    _session["current"] = None


def _sorted_ids(keys) -> List[str]:
    return sorted(str(k) for k in keys)


# --- ENDPOINTS ---

@app.get("/")
def health_check():
    session = _session["current"]
    return {
        "status": "active",
        "system": "coderipple",
        "project": session.name if session else None
    }


@app.post("/projects")
def upload_project(upload: ProjectUpload):
    """Build a fresh graph for the uploaded project, replacing any previous one."""
    records: List[Any] = list(upload.records)
    if upload.files:
        records.extend(parse_files((f.path, f.content) for f in upload.files))

    graph = build_dependency_graph(records)
    _session["current"] = ProjectSession(name=upload.name, graph=graph)
    return {
        "project": upload.name,
        "stats": graph_stats(graph).to_dict(),
        "report": graph.report.to_dict()
    }


@app.get("/graph")
def get_full_graph():
    """Returns the raw nodes and edges for visualization"""
    return graph_to_dict(get_session().graph)


@app.get("/graph/stats")
def get_graph_stats():
    return graph_stats(get_session().graph).to_dict()


@app.get("/graph/node")
def get_node(node_id: str = Query(..., description="Node id, e.g. file:src/a.js")):
    graph = get_session().graph
    if not graph.has_node(node_id):
        raise HTTPException(status_code=404, detail=f"Unknown node: {node_id}")
    return {"id": str(as_node_key(node_id)), **graph.get_node_data(node_id)}


@app.get("/graph/ripple")
def get_ripple(node_id: str = Query(..., description="Node id, e.g. func:src/a.js:foo:3")):
    """
    Ripple highlight for a node.

    Unknown ids return empty sets rather than 404: the client may click
    a node from a graph that has just been replaced.
    """
    graph = get_session().graph
    return {
        "node_id": node_id,
        "downstream": _sorted_ids(downstream(graph, node_id)),
        "upstream": _sorted_ids(upstream(graph, node_id)),
        "highlighted": _sorted_ids(ripple(graph, node_id))
    }


# --- MAIN EXECUTION ---
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
