"""
Node identities for the dependency graph.

A node is either a file or a function. Identity is a small value
object rather than a composite string, but it renders to (and parses
from) the familiar `file:<path>` / `func:<path>:<name>:<line>` form
used by the visualization layer.
"""

from dataclasses import dataclass
from typing import Optional
from enum import Enum


class NodeKind(Enum):
    FILE = "file"
    FUNCTION = "function"


_FILE_PREFIX = "file:"
_FUNC_PREFIX = "func:"


@dataclass(frozen=True)
class NodeKey:
    """
    Identity of a graph node.

    File nodes carry only a path. Function nodes also carry the function
    name and its declaration line, which tells apart same-named functions
    declared in the same file.
    """
    kind: NodeKind
    path: str
    name: Optional[str] = None
    line: Optional[int] = None

    @classmethod
    def for_file(cls, path: str) -> "NodeKey":
        return cls(NodeKind.FILE, path)

    @classmethod
    def for_function(cls, path: str, name: str, line: int) -> "NodeKey":
        return cls(NodeKind.FUNCTION, path, name, line)

    @property
    def is_file(self) -> bool:
        return self.kind is NodeKind.FILE

    @property
    def is_function(self) -> bool:
        return self.kind is NodeKind.FUNCTION

    @property
    def file_key(self) -> "NodeKey":
        """Key of the file node that owns this node."""
        return NodeKey.for_file(self.path)

    def __str__(self) -> str:
        if self.kind is NodeKind.FILE:
            return f"{_FILE_PREFIX}{self.path}"
        return f"{_FUNC_PREFIX}{self.path}:{self.name}:{self.line}"

    @classmethod
    def parse(cls, text: str) -> Optional["NodeKey"]:
        """
        Parse the string form back into a key.

        Paths may contain ':' so the name and line are split off from the
        right. Returns None for anything that is not a valid node id.
        """
        if not isinstance(text, str):
            return None
        if text.startswith(_FILE_PREFIX):
            path = text[len(_FILE_PREFIX):]
            return cls.for_file(path) if path else None
        if text.startswith(_FUNC_PREFIX):
            parts = text[len(_FUNC_PREFIX):].rsplit(":", 2)
            if len(parts) != 3:
                return None
            path, name, line = parts
            if not path or not name or not line.isdigit():
                return None
            return cls.for_function(path, name, int(line))
        return None
