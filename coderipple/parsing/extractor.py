"""
JavaScript / TypeScript source extraction using tree-sitter.

Produces the SourceRecord consumed by the graph builder:
- imports: `import ... from "x"` and `require("x")`
- functions: declarations, function expressions, arrow functions and
  class methods (expressions take the name of the variable they are
  assigned to, otherwise "anonymous")
- calls: every call whose callee is an identifier or member expression
"""

from typing import Dict, Iterable, List, Optional, Tuple, Union

from tree_sitter_language_pack import get_parser

from .records import (
    ANONYMOUS, CallSite, FunctionDecl, ImportKind, ImportRef, SourceRecord
)
from ..config import get_settings, log


# --- CONFIGURATION ---
SCRIPT_EXTENSIONS = ('.js', '.jsx', '.ts', '.tsx', '.mjs', '.cjs')

FUNCTION_NODE_TYPES = {
    "function_declaration": "function_declaration",
    "generator_function_declaration": "function_declaration",
    "function_expression": "function_expression",
    "function": "function_expression",  # older grammar name
    "generator_function": "function_expression",
    "arrow_function": "arrow_function",
    "method_definition": "method",
}

_PARSERS: Dict[str, object] = {}


def is_script_file(path: str) -> bool:
    return path.lower().endswith(SCRIPT_EXTENSIONS)


def _language_for(path: str) -> str:
    lowered = path.lower()
    if lowered.endswith(".tsx"):
        return "tsx"
    if lowered.endswith(".ts"):
        return "typescript"
    return "javascript"


def _get_parser(language: str):
    if language not in _PARSERS:
        _PARSERS[language] = get_parser(language)
    return _PARSERS[language]


def _text(node) -> str:
    return node.text.decode("utf8", errors="replace") if node is not None else ""


def _line(node) -> int:
    return node.start_point[0] + 1  # Convert to 1-indexed


def _string_value(node) -> Optional[str]:
    """Strip the quotes from a string literal node."""
    if node is None or node.type != "string":
        return None
    text = _text(node)
    return text[1:-1] if len(text) >= 2 else None


def _walk(root):
    """Pre-order traversal over named nodes, in source order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.named_children))


def _function_name(node) -> str:
    if node.type in ("function_declaration", "generator_function_declaration", "method_definition"):
        name_node = node.child_by_field_name("name")
        if name_node is not None:
            return _text(name_node)
        return ANONYMOUS

    parent = node.parent
    if parent is not None and parent.type == "variable_declarator":
        name_node = parent.child_by_field_name("name")
        if name_node is not None and name_node.type == "identifier":
            return _text(name_node)
    return ANONYMOUS


def _require_specifier(call_node) -> Optional[str]:
    args = call_node.child_by_field_name("arguments")
    if args is None or args.named_child_count == 0:
        return None
    return _string_value(args.named_children[0])


def extract_record(path: str, root) -> SourceRecord:
    """Collect imports, functions and calls from a parsed syntax tree."""
    imports: List[ImportRef] = []
    functions: List[FunctionDecl] = []
    calls: List[CallSite] = []

    for node in _walk(root):
        node_type = node.type

        if node_type == "import_statement":
            source = node.child_by_field_name("source")
            if source is None and node.named_child_count:
                source = node.named_children[-1]
            specifier = _string_value(source)
            if specifier:
                imports.append(ImportRef(specifier, ImportKind.IMPORT, _line(node)))

        elif node_type == "call_expression":
            callee = node.child_by_field_name("function")
            if callee is None:
                continue
            if callee.type == "identifier" and _text(callee) == "require":
                specifier = _require_specifier(node)
                if specifier:
                    imports.append(ImportRef(specifier, ImportKind.REQUIRE, _line(node)))
            elif callee.type in ("identifier", "member_expression"):
                calls.append(CallSite(_text(callee), _line(node)))

        elif node_type in FUNCTION_NODE_TYPES:
            functions.append(FunctionDecl(
                name=_function_name(node),
                line=_line(node),
                kind=FUNCTION_NODE_TYPES[node_type]
            ))

    return SourceRecord(
        path=path,
        declared_functions=tuple(functions),
        declared_imports=tuple(imports),
        call_sites=tuple(calls)
    )


def parse_source(path: str, source: Union[str, bytes]) -> SourceRecord:
    """
    Parse one file. A file that fails to parse yields an empty record
    so that one bad file never aborts a project.
    """
    data = source.encode("utf8") if isinstance(source, str) else source
    try:
        tree = _get_parser(_language_for(path)).parse(data)
        return extract_record(path, tree.root_node)
    except Exception as e:
        print(f"[WARN] Error parsing {path}: {e}")
        return SourceRecord(path=path)


def parse_files(files: Iterable[Tuple[str, Union[str, bytes]]],
                max_file_bytes: Optional[int] = None) -> List[SourceRecord]:
    """
    Parse (path, source) pairs, keeping only script files.

    Files larger than `max_file_bytes` (default: CODERIPPLE_MAX_FILE_BYTES)
    are skipped.
    """
    if max_file_bytes is None:
        max_file_bytes = get_settings().max_file_bytes

    records = []
    for path, source in files:
        if not is_script_file(path):
            continue
        size = len(source.encode("utf8")) if isinstance(source, str) else len(source)
        if size > max_file_bytes:
            log(f"[WARN] Skipping large file: {path} ({size} bytes)")
            continue
        records.append(parse_source(path, source))

    log(f"[*] Parsed {len(records)} script files")
    return records
