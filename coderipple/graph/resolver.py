"""
Call resolution for linking call sites to function declarations.

Resolution is name based, not type checked:
- Local calls: a function with that name declared in the calling file
- Global calls: the first function with that name anywhere in the project
- Member calls (obj.method): optionally retried on the last segment of
  the name; off by default, so `console.log` never links to a project `log`

When several functions share a name the first one in a stable order
(sorted path, then declaration order) wins.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .nodes import NodeKey
from ..parsing.records import FunctionDecl, SourceRecord


@dataclass
class FunctionIndex:
    """
    Registry of all declared functions for resolution.

    Provides lookup of function nodes by name, globally or per file.
    """
    # Simple name -> keys in stable global order
    by_name: Dict[str, List[NodeKey]] = field(default_factory=dict)

    # File path -> name -> keys in declaration order
    by_file: Dict[str, Dict[str, List[NodeKey]]] = field(default_factory=dict)

    def register(self, path: str, decl: FunctionDecl) -> NodeKey:
        """Register a declaration and return its node key."""
        key = NodeKey.for_function(path, decl.name, decl.line)
        self.by_name.setdefault(decl.name, []).append(key)
        self.by_file.setdefault(path, {}).setdefault(decl.name, []).append(key)
        return key

    @classmethod
    def from_records(cls, records: Sequence[SourceRecord]) -> "FunctionIndex":
        index = cls()
        for record in sorted(records, key=lambda r: r.path):
            for decl in record.declared_functions:
                index.register(record.path, decl)
        return index

    def find_in_file(self, path: str, name: str) -> Optional[NodeKey]:
        """First function named `name` declared in `path`."""
        keys = self.by_file.get(path, {}).get(name)
        return keys[0] if keys else None

    def find_global(self, name: str) -> Optional[NodeKey]:
        """First function named `name` in any file."""
        keys = self.by_name.get(name)
        return keys[0] if keys else None

    def __len__(self) -> int:
        return sum(len(keys) for keys in self.by_name.values())


@dataclass
class ResolvedCall:
    """Result of resolving a call site."""
    original_call: str              # The callee text as extracted (e.g. "api.fetch")
    resolved_target: Optional[NodeKey]
    resolution_type: str            # "local", "global", "member_local", "member_global", "unresolved"

    @property
    def is_resolved(self) -> bool:
        return self.resolved_target is not None


class CallResolver:
    """
    Resolves callee names to function nodes.

    Prefers a same-file declaration over a global one, so local
    shadowing wins over global ambiguity.
    """

    def __init__(self, index: FunctionIndex, resolve_members: bool = False):
        self.index = index
        self.resolve_members = resolve_members

    def resolve(self, name: str, source_path: str) -> ResolvedCall:
        if not name:
            return ResolvedCall(name, None, "unresolved")

        target = self.index.find_in_file(source_path, name)
        if target:
            return ResolvedCall(name, target, "local")

        target = self.index.find_global(name)
        if target:
            return ResolvedCall(name, target, "global")

        if self.resolve_members and "." in name:
            member = name.rsplit(".", 1)[1]
            if member:
                target = self.index.find_in_file(source_path, member)
                if target:
                    return ResolvedCall(name, target, "member_local")
                target = self.index.find_global(member)
                if target:
                    return ResolvedCall(name, target, "member_global")

        return ResolvedCall(name, None, "unresolved")

    def resolve_callee(self, name: str, source_path: str) -> Optional[NodeKey]:
        """Function node called by `name` from `source_path`, or None."""
        return self.resolve(name, source_path).resolved_target


def find_containing_function(functions: Sequence[FunctionDecl],
                             line: Optional[int]) -> Optional[FunctionDecl]:
    """
    Find the declaration whose line range encloses `line`.

    A function's range runs from its declaration line up to (not
    including) the next declaration's line; the last one is open ended.
    If the call precedes every declaration, the last declared function
    is used. Returns None when there are no functions or no line.
    Declarations without an integer line are ignored.
    """
    if not isinstance(line, int) or not functions:
        return None

    ordered = sorted(
        (f for f in functions if isinstance(f.line, int)),
        key=lambda f: f.line
    )
    if not ordered:
        return None
    for i, func in enumerate(ordered):
        upper = ordered[i + 1].line if i + 1 < len(ordered) else float("inf")
        if func.line <= line < upper:
            return func

    return ordered[-1]
