"""
Dependency graph construction.

Turns a collection of SourceRecords into a CodeGraph in three ordered
passes:
1. Nodes: one file node per record, one function node per declaration,
   each function linked to its file by a `contains` edge
2. Imports: file -> file edges for every import that resolves to an
   uploaded file
3. Calls: function -> function edges from the function enclosing each
   call site to the function it resolves to

Passes 2 and 3 look up nodes created in pass 1, so the order matters.
Nothing here raises on bad input; whatever cannot be linked is counted
in the graph's BuildReport and skipped.
"""

from typing import Any, Dict, Iterable, List, Optional, Union

from .base_graph_store import BaseGraphStore
from .code_graph import CodeGraph, BuildReport
from .import_resolver import ImportResolver
from .nodes import NodeKey, NodeKind
from .relationships import Relationship, RelationType
from .resolver import CallResolver, FunctionIndex, find_containing_function
from ..config import log
from ..parsing.records import SourceRecord


RecordLike = Union[SourceRecord, Dict[str, Any]]


def _coerce_records(raw_records: Iterable[RecordLike], report: BuildReport) -> List[SourceRecord]:
    """Normalize input into unique-path SourceRecords, dropping the unusable."""
    records: List[SourceRecord] = []
    seen = set()
    for raw in raw_records or ():
        report.records += 1
        if isinstance(raw, SourceRecord):
            record = raw.sanitized()
        else:
            record = SourceRecord.from_dict(raw)
        if record is None or not record.path:
            report.skipped_records += 1
            continue
        if record.path in seen:
            # first record for a path wins
            report.skipped_records += 1
            continue
        seen.add(record.path)
        records.append(record)
    return records


def _file_label(path: str) -> str:
    return path.split('/')[-1] or path


class GraphBuilder:
    """Builds one CodeGraph from one project's records."""

    def __init__(self, records: Iterable[RecordLike], store: Optional[BaseGraphStore] = None):
        self.graph = CodeGraph(store=store)
        self.records = _coerce_records(records, self.graph.report)
        self.index = FunctionIndex()
        self.import_resolver = ImportResolver(r.path for r in self.records)
        self.call_resolver = CallResolver(self.index)

    def build(self) -> CodeGraph:
        self._add_nodes()
        self._add_import_edges()
        self._add_call_edges()
        self.graph.freeze()
        return self.graph

    # ─── Pass 1 ───────────────────────────────────

    def _add_nodes(self):
        # Sorted so the function index has a stable "first match" order
        for record in sorted(self.records, key=lambda r: r.path):
            file_key = NodeKey.for_file(record.path)
            self.graph.add_entity(file_key, metadata={
                "kind": NodeKind.FILE.value,
                "label": _file_label(record.path),
                "path": record.path,
                "functions": len(record.declared_functions),
                "imports": len(record.declared_imports),
                "size": len(record.declared_functions) + len(record.declared_imports)
            })

            for decl in record.declared_functions:
                func_key = self.index.register(record.path, decl)
                self.graph.add_entity(func_key, metadata={
                    "kind": NodeKind.FUNCTION.value,
                    "label": decl.name,
                    "path": record.path,
                    "name": decl.name,
                    "line": decl.line,
                    "decl_kind": decl.kind,
                    "parent_file": str(file_key)
                })
                self.graph.add_relationship(Relationship(
                    source=file_key,
                    target=func_key,
                    rel_type=RelationType.CONTAINS
                ))

    # ─── Pass 2 ───────────────────────────────────

    def _add_import_edges(self):
        report = self.graph.report
        for record in self.records:
            source_key = NodeKey.for_file(record.path)
            for imp in record.declared_imports:
                resolution = self.import_resolver.resolve(imp.specifier, record.path)
                if not resolution.exists:
                    report.unresolved_imports += 1
                    continue
                if resolution.resolved_path == record.path:
                    continue
                self.graph.add_relationship(Relationship(
                    source=source_key,
                    target=NodeKey.for_file(resolution.resolved_path),
                    rel_type=RelationType.IMPORTS,
                    line=imp.line,
                    metadata={"specifier": imp.specifier, "import_kind": imp.kind.value}
                ))

    # ─── Pass 3 ───────────────────────────────────

    def _add_call_edges(self):
        report = self.graph.report
        for record in self.records:
            for call in record.call_sites:
                target = self.call_resolver.resolve_callee(call.callee_name, record.path)
                if target is None:
                    report.unresolved_calls += 1
                    continue

                caller = find_containing_function(record.declared_functions, call.line)
                if caller is None:
                    report.orphan_calls += 1
                    continue

                caller_key = NodeKey.for_function(record.path, caller.name, caller.line)
                if caller_key == target:
                    continue
                self.graph.add_relationship(Relationship(
                    source=caller_key,
                    target=target,
                    rel_type=RelationType.CALLS,
                    line=call.line,
                    metadata={"callee_name": call.callee_name}
                ))


def build_dependency_graph(records: Iterable[RecordLike],
                           store: Optional[BaseGraphStore] = None) -> CodeGraph:
    """
    Build a frozen CodeGraph from extraction records.

    Args:
        records: SourceRecords, or dicts accepted by SourceRecord.from_dict
        store: Optional graph store; defaults to the configured backend

    Returns:
        Populated, frozen CodeGraph with its BuildReport
    """
    records = list(records or ())
    log(f"[*] Building dependency graph from {len(records)} files...")
    graph = GraphBuilder(records, store=store).build()
    report = graph.report
    log(f"[INFO] Graph built with {graph.number_of_nodes()} nodes and "
        f"{graph.number_of_edges()} edges "
        f"({report.unresolved_imports} unresolved imports, "
        f"{report.unresolved_calls} unresolved calls)")
    return graph
