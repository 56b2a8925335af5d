"""
Source extraction records consumed by the graph builder.

A SourceRecord is the per-file result of parsing: the functions a file
declares, the modules it imports and the call sites observed in it.
Records are immutable once produced.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
from enum import Enum


class ImportKind(Enum):
    """How a dependency was declared."""
    IMPORT = "import"      # import x from './x'
    REQUIRE = "require"    # const x = require('./x')


ANONYMOUS = "anonymous"


def _coerce_line(value: Any) -> Optional[int]:
    # bool is an int subclass; a True line number is never meaningful
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _line_from(data: Dict[str, Any]) -> Optional[int]:
    line = _coerce_line(data.get("line"))
    if line is None:
        # tree-sitter style position, row is 0-based
        position = data.get("startPosition") or data.get("start_position")
        if isinstance(position, dict):
            row = _coerce_line(position.get("row"))
            if row is not None:
                line = row + 1
    return line


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


@dataclass(frozen=True)
class FunctionDecl:
    """A function declared in a file. `kind` is informational only."""
    name: str
    line: int
    kind: str = "function_declaration"

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "line": self.line, "kind": self.kind}


@dataclass(frozen=True)
class ImportRef:
    """A raw import/require specifier as written in the source."""
    specifier: str
    kind: ImportKind = ImportKind.IMPORT
    line: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"specifier": self.specifier, "kind": self.kind.value, "line": self.line}


@dataclass(frozen=True)
class CallSite:
    """An observed call, e.g. `helper()` or `api.fetch()`."""
    callee_name: str
    line: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"callee_name": self.callee_name, "line": self.line}


@dataclass(frozen=True)
class SourceRecord:
    """
    Extraction result for a single file.

    Attributes:
        path: Unique identity of the file within the project
        declared_functions: Functions in declaration order
        declared_imports: Imports in source order
        call_sites: Calls in source order
    """
    path: str
    declared_functions: Tuple[FunctionDecl, ...] = field(default_factory=tuple)
    declared_imports: Tuple[ImportRef, ...] = field(default_factory=tuple)
    call_sites: Tuple[CallSite, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not (self.declared_functions or self.declared_imports or self.call_sites)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "declared_functions": [f.to_dict() for f in self.declared_functions],
            "declared_imports": [i.to_dict() for i in self.declared_imports],
            "call_sites": [c.to_dict() for c in self.call_sites],
        }

    def sanitized(self) -> Optional["SourceRecord"]:
        """
        Copy of this record with unusable entries dropped.

        Applies the same rules as `from_dict` to a typed record that may
        have been built by hand: non-sequence fields become empty, a
        function without a usable name is anonymous and one without a line
        takes its position, imports and calls without a name are dropped.
        Returns None when the path is unusable.
        """
        if not isinstance(self.path, str) or not self.path:
            return None

        functions = []
        for index, decl in enumerate(_as_list(self.declared_functions)):
            if not isinstance(decl, FunctionDecl):
                continue
            name = decl.name if isinstance(decl.name, str) and decl.name else ANONYMOUS
            line = _coerce_line(decl.line)
            if line is None:
                line = index + 1
            functions.append(FunctionDecl(name=name, line=line, kind=str(decl.kind)))

        imports = []
        for imp in _as_list(self.declared_imports):
            if not isinstance(imp, ImportRef) or not isinstance(imp.specifier, str) or not imp.specifier:
                continue
            imports.append(ImportRef(
                specifier=imp.specifier,
                kind=imp.kind if isinstance(imp.kind, ImportKind) else ImportKind.IMPORT,
                line=_coerce_line(imp.line)
            ))

        calls = []
        for call in _as_list(self.call_sites):
            if not isinstance(call, CallSite) or not isinstance(call.callee_name, str) or not call.callee_name:
                continue
            calls.append(CallSite(callee_name=call.callee_name, line=_coerce_line(call.line)))

        return SourceRecord(
            path=self.path,
            declared_functions=tuple(functions),
            declared_imports=tuple(imports),
            call_sites=tuple(calls)
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["SourceRecord"]:
        """
        Build a record from loosely-shaped data.

        Accepts both the snake_case keys produced by `to_dict` and the
        camelCase keys of the browser parser (`filename`, `functions`,
        `imports[].source`, `functionCalls`). Anything unusable is dropped
        rather than raised. Returns None only when no path can be found.
        """
        if not isinstance(data, dict):
            return None

        path = data.get("path") or data.get("filename")
        if not isinstance(path, str) or not path:
            return None

        functions = []
        raw_functions = data.get("declared_functions", data.get("functions"))
        for index, raw in enumerate(_as_list(raw_functions)):
            if not isinstance(raw, dict):
                continue
            name = raw.get("name")
            if not isinstance(name, str) or not name:
                name = ANONYMOUS
            line = _line_from(raw)
            if line is None:
                line = index + 1
            kind = raw.get("kind") or raw.get("type") or "function_declaration"
            functions.append(FunctionDecl(name=name, line=line, kind=str(kind)))

        imports = []
        raw_imports = data.get("declared_imports", data.get("imports"))
        for raw in _as_list(raw_imports):
            if isinstance(raw, str):
                raw = {"specifier": raw}
            if not isinstance(raw, dict):
                continue
            specifier = raw.get("specifier") or raw.get("source")
            if not isinstance(specifier, str) or not specifier:
                continue
            kind = raw.get("kind") or raw.get("type")
            imports.append(ImportRef(
                specifier=specifier,
                kind=ImportKind.REQUIRE if kind == ImportKind.REQUIRE.value else ImportKind.IMPORT,
                line=_line_from(raw)
            ))

        calls = []
        raw_calls = data.get("call_sites", data.get("functionCalls"))
        for raw in _as_list(raw_calls):
            if not isinstance(raw, dict):
                continue
            callee = raw.get("callee_name") or raw.get("name")
            if not isinstance(callee, str) or not callee:
                continue
            calls.append(CallSite(callee_name=callee, line=_line_from(raw)))

        return cls(
            path=path,
            declared_functions=tuple(functions),
            declared_imports=tuple(imports),
            call_sites=tuple(calls)
        )
