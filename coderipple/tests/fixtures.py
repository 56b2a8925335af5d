"""Shared record builders for the graph tests."""

from coderipple.parsing.records import (
    CallSite, FunctionDecl, ImportKind, ImportRef, SourceRecord
)


def record(path, functions=(), imports=(), calls=()):
    """
    Shorthand record builder.

    functions: (name, line) pairs
    imports:   specifiers, or (specifier, kind) pairs
    calls:     (callee, line) pairs
    """
    imps = []
    for imp in imports:
        if isinstance(imp, tuple):
            imps.append(ImportRef(imp[0], imp[1]))
        else:
            imps.append(ImportRef(imp, ImportKind.IMPORT))
    return SourceRecord(
        path=path,
        declared_functions=tuple(FunctionDecl(n, l) for n, l in functions),
        declared_imports=tuple(imps),
        call_sites=tuple(CallSite(c, l) for c, l in calls)
    )


def scenario_a():
    """a.js imports ./b and defines foo; foo calls bar from b.js."""
    return [
        record("a.js", functions=[("foo", 3)], imports=["./b"], calls=[("bar", 4)]),
        record("b.js", functions=[("bar", 1)]),
    ]


def mutual_calls():
    """foo and bar call each other."""
    return [
        record("m.js",
               functions=[("foo", 1), ("bar", 10)],
               calls=[("bar", 2), ("foo", 11)]),
    ]
