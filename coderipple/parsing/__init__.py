"""
Parsing module - Source extraction records and the tree-sitter extractor.
"""

from .records import (
    ImportKind,
    FunctionDecl,
    ImportRef,
    CallSite,
    SourceRecord,
    ANONYMOUS
)

from .extractor import (
    SCRIPT_EXTENSIONS,
    is_script_file,
    parse_source,
    parse_files
)

__all__ = [
    # Records
    "ImportKind",
    "FunctionDecl",
    "ImportRef",
    "CallSite",
    "SourceRecord",
    "ANONYMOUS",
    # Extractor
    "SCRIPT_EXTENSIONS",
    "is_script_file",
    "parse_source",
    "parse_files",
]
