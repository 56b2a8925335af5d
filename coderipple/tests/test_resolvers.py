import unittest

from coderipple.graph import (
    CallResolver,
    FunctionIndex,
    ImportResolver,
    NodeKey,
    find_containing_function,
    resolve_import_path,
)
from coderipple.graph.import_resolver import normalize_relative
from coderipple.parsing.records import FunctionDecl
from coderipple.tests.fixtures import record


PATHS = sorted([
    "src/app.js",
    "src/components/Button.jsx",
    "src/components/index.ts",
    "src/data.json",
    "src/lib/api.ts",
    "src/lib/http/index.js",
    "src/lib/util.js",
    "vendor/lodash.js",
])


class ImportResolverTests(unittest.TestCase):
    def test_normalize_relative_paths(self) -> None:
        self.assertEqual(normalize_relative("./util", "src/lib/api.ts"), "src/lib/util")
        self.assertEqual(normalize_relative("../app", "src/lib/api.ts"), "src/app")
        self.assertEqual(normalize_relative("./a/./b", "x.js"), "a/b")
        self.assertEqual(normalize_relative("../../../up", "src/a.js"), "up")
        # empty segments are kept, so a doubled slash survives normalization
        self.assertEqual(normalize_relative("./a//b", "src/x.js"), "src/a//b")
        self.assertFalse(ImportResolver(["src/a/b.js"]).resolve("./a//b", "src/x.js").exists)

    def test_relative_probes_suffixes_in_order(self) -> None:
        self.assertEqual(resolve_import_path("./lib/util", "src/app.js", PATHS), "src/lib/util.js")
        self.assertEqual(resolve_import_path("./lib/api", "src/app.js", PATHS), "src/lib/api.ts")
        self.assertEqual(resolve_import_path("./components/Button", "src/app.js", PATHS),
                         "src/components/Button.jsx")
        self.assertEqual(resolve_import_path("./data", "src/app.js", PATHS), "src/data.json")
        self.assertEqual(resolve_import_path("../app.js", "src/lib/api.ts", PATHS), "src/app.js")

    def test_relative_directory_index(self) -> None:
        self.assertEqual(resolve_import_path("./http", "src/lib/api.ts", PATHS), "src/lib/http/index.js")
        self.assertEqual(resolve_import_path("./components", "src/app.js", PATHS), "src/components/index.ts")

    def test_relative_miss_falls_back_to_js_guess(self) -> None:
        self.assertEqual(resolve_import_path("./missing", "src/app.js", PATHS), "src/missing.js")
        resolution = ImportResolver(PATHS).resolve("./missing", "src/app.js")
        self.assertFalse(resolution.exists)

    def test_bare_specifiers(self) -> None:
        self.assertEqual(resolve_import_path("lodash", "src/app.js", PATHS), "vendor/lodash.js")
        self.assertEqual(resolve_import_path("lib/http", "src/app.js", PATHS), "src/lib/http/index.js")
        self.assertIsNone(resolve_import_path("react", "src/app.js", PATHS))

    def test_bare_specifier_takes_first_in_order(self) -> None:
        paths = ["a/util.js", "b/util.js"]
        self.assertEqual(resolve_import_path("util", "x.js", paths), "a/util.js")
        self.assertEqual(resolve_import_path("util", "x.js", list(reversed(paths))), "b/util.js")
        # ImportResolver sorts, so input order does not matter
        self.assertEqual(ImportResolver(reversed(paths)).resolve("util", "x.js").resolved_path, "a/util.js")

    def test_empty_specifier(self) -> None:
        self.assertIsNone(resolve_import_path("", "src/app.js", PATHS))

    def test_resolution_is_deterministic(self) -> None:
        for spec in ("./lib/util", "../app", "lodash", "react", "./missing"):
            first = resolve_import_path(spec, "src/lib/api.ts", PATHS)
            second = resolve_import_path(spec, "src/lib/api.ts", PATHS)
            self.assertEqual(first, second)


class CallResolverTests(unittest.TestCase):
    def setUp(self) -> None:
        self.index = FunctionIndex.from_records([
            record("b.js", functions=[("shared", 5), ("fetch", 9)]),
            record("a.js", functions=[("shared", 1), ("helper", 4)]),
            record("c.js", functions=[("shared", 2)]),
        ])
        self.resolver = CallResolver(self.index)

    def test_local_match_wins(self) -> None:
        self.assertEqual(self.resolver.resolve_callee("shared", "c.js"),
                         NodeKey.for_function("c.js", "shared", 2))

    def test_global_match_is_first_in_path_order(self) -> None:
        result = self.resolver.resolve("shared", "other.js")
        self.assertEqual(result.resolved_target, NodeKey.for_function("a.js", "shared", 1))
        self.assertEqual(result.resolution_type, "global")

    def test_unresolved(self) -> None:
        result = self.resolver.resolve("nope", "a.js")
        self.assertFalse(result.is_resolved)
        self.assertEqual(result.resolution_type, "unresolved")
        self.assertIsNone(self.resolver.resolve_callee("", "a.js"))

    def test_member_call_uses_last_segment_when_enabled(self) -> None:
        loose = CallResolver(self.index, resolve_members=True)
        result = loose.resolve("api.fetch", "a.js")
        self.assertEqual(result.resolved_target, NodeKey.for_function("b.js", "fetch", 9))
        self.assertEqual(result.resolution_type, "member_global")
        self.assertEqual(loose.resolve("this.helper", "a.js").resolution_type, "member_local")

    def test_member_calls_need_exact_name_by_default(self) -> None:
        self.assertIsNone(self.resolver.resolve_callee("api.fetch", "a.js"))
        self.assertEqual(self.resolver.resolve("this.helper", "a.js").resolution_type, "unresolved")

    def test_index_length(self) -> None:
        self.assertEqual(len(self.index), 5)


class ContainingFunctionTests(unittest.TestCase):
    FUNCS = [FunctionDecl("bar", 10), FunctionDecl("foo", 1), FunctionDecl("baz", 20)]

    def test_bracketing_declaration(self) -> None:
        self.assertEqual(find_containing_function(self.FUNCS, 1).name, "foo")
        self.assertEqual(find_containing_function(self.FUNCS, 9).name, "foo")
        self.assertEqual(find_containing_function(self.FUNCS, 10).name, "bar")
        self.assertEqual(find_containing_function(self.FUNCS, 15).name, "bar")
        self.assertEqual(find_containing_function(self.FUNCS, 500).name, "baz")

    def test_line_before_every_declaration_uses_last(self) -> None:
        funcs = [FunctionDecl("a", 5), FunctionDecl("b", 8)]
        self.assertEqual(find_containing_function(funcs, 2).name, "b")

    def test_no_functions_or_no_line(self) -> None:
        self.assertIsNone(find_containing_function([], 3))
        self.assertIsNone(find_containing_function(self.FUNCS, None))

    def test_declarations_without_usable_line_are_ignored(self) -> None:
        funcs = [FunctionDecl("f", None), FunctionDecl("g", 3)]
        self.assertEqual(find_containing_function(funcs, 5).name, "g")
        self.assertIsNone(find_containing_function([FunctionDecl("f", None)], 5))
        self.assertIsNone(find_containing_function(self.FUNCS, "12"))

    def test_input_order_is_not_mutated(self) -> None:
        funcs = list(self.FUNCS)
        find_containing_function(funcs, 12)
        self.assertEqual([f.name for f in funcs], ["bar", "foo", "baz"])


if __name__ == "__main__":
    unittest.main()
