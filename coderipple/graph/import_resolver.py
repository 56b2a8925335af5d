"""
Best-effort import path resolution.

Maps a raw `import`/`require` specifier to one of the uploaded files.
There is no build context (no tsconfig paths, no node_modules), so this
is a heuristic: it can miss, and among several candidates it always
picks the first one in the order the paths were supplied.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Set


# Probed in order against the normalized relative path
RELATIVE_SUFFIXES = ('', '.js', '.jsx', '.ts', '.tsx', '.json', '/index.js', '/index.ts')

FALLBACK_SUFFIX = '.js'


def is_relative_specifier(specifier: str) -> bool:
    return specifier.startswith('./') or specifier.startswith('../')


def normalize_relative(specifier: str, source_path: str) -> str:
    """Apply a relative specifier to the directory of `source_path`."""
    parts = source_path.split('/')[:-1]
    for segment in specifier.split('/'):
        if segment == '..':
            if parts:
                parts.pop()
        elif segment != '.':
            parts.append(segment)
    return '/'.join(parts)


def _matches_bare(specifier: str, path: str) -> bool:
    return (
        specifier in path or
        path.endswith(f'/{specifier}.js') or
        path.endswith(f'/{specifier}.ts') or
        path.endswith(f'/{specifier}/index.js') or
        path.endswith(f'/{specifier}/index.ts')
    )


def resolve_import_path(specifier: str, source_path: str,
                        all_paths: Sequence[str],
                        known: Optional[Set[str]] = None) -> Optional[str]:
    """
    Resolve an import specifier against the uploaded file paths.

    Args:
        specifier: The raw specifier, e.g. "./utils" or "lodash"
        source_path: Path of the importing file
        all_paths: Every file path, in a stable order
        known: Optional set view of `all_paths` for fast membership tests

    Returns:
        For relative specifiers, the first existing candidate or, failing
        that, the normalized path with ".js" appended (which may not exist).
        For bare specifiers, the first matching path or None.
    """
    if not specifier:
        return None
    if known is None:
        known = set(all_paths)

    if is_relative_specifier(specifier):
        resolved = normalize_relative(specifier, source_path)
        for suffix in RELATIVE_SUFFIXES:
            candidate = resolved + suffix
            if candidate in known:
                return candidate
        return resolved + FALLBACK_SUFFIX

    for path in all_paths:
        if _matches_bare(specifier, path):
            return path
    return None


@dataclass
class ImportResolution:
    specifier: str
    resolved_path: Optional[str]
    exists: bool


class ImportResolver:
    """
    Resolves import specifiers against a fixed set of project files.

    The paths are sorted once so that "first match" is reproducible
    regardless of the order records were supplied in.
    """

    def __init__(self, all_paths: Iterable[str]):
        self.all_paths = sorted(set(all_paths))
        self._known = set(self.all_paths)

    def resolve(self, specifier: str, source_path: str) -> ImportResolution:
        resolved = resolve_import_path(specifier, source_path, self.all_paths, self._known)
        return ImportResolution(
            specifier=specifier,
            resolved_path=resolved,
            exists=resolved is not None and resolved in self._known
        )
