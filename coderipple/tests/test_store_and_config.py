import os
import unittest
from unittest import mock

from coderipple.config import DEFAULT_MAX_FILE_BYTES, Settings
from coderipple.graph.graph_store_factory import create_graph_store
from coderipple.graph.networkx_store import NetworkXStore
from coderipple.parsing.records import ImportKind, SourceRecord


class SettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()
        self.assertEqual(settings.graph_store_backend, "networkx")
        self.assertFalse(settings.quiet)
        self.assertEqual(settings.max_file_bytes, DEFAULT_MAX_FILE_BYTES)
        self.assertEqual(settings.cors_origins, ["*"])

    def test_overrides(self) -> None:
        env = {
            "GRAPH_STORE_BACKEND": " NetworkX ",
            "CODERIPPLE_QUIET": "yes",
            "CODERIPPLE_MAX_FILE_BYTES": "2048",
            "CODERIPPLE_CORS_ORIGINS": "http://localhost:5173, http://example.com",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()
        self.assertEqual(settings.graph_store_backend, "networkx")
        self.assertTrue(settings.quiet)
        self.assertEqual(settings.max_file_bytes, 2048)
        self.assertEqual(settings.cors_origins, ["http://localhost:5173", "http://example.com"])

    def test_bad_integer_falls_back(self) -> None:
        with mock.patch.dict(os.environ, {"CODERIPPLE_MAX_FILE_BYTES": "lots"}, clear=True):
            self.assertEqual(Settings.from_env().max_file_bytes, DEFAULT_MAX_FILE_BYTES)


class GraphStoreFactoryTests(unittest.TestCase):
    def test_networkx_backend(self) -> None:
        self.assertIsInstance(create_graph_store("networkx"), NetworkXStore)

    def test_unknown_backend(self) -> None:
        with self.assertRaises(ValueError):
            create_graph_store("neo4j")


class NetworkXStoreTests(unittest.TestCase):
    def test_keyed_edges(self) -> None:
        store = NetworkXStore()
        store.add_node("a")
        store.add_node("b")
        self.assertTrue(store.add_edge("a", "b", "imports", specifier="./b"))
        self.assertFalse(store.add_edge("a", "b", "imports", specifier="./b.js"))
        self.assertTrue(store.add_edge("a", "b", "calls"))

        self.assertEqual(store.number_of_edges(), 2)
        self.assertEqual(store.get_edge_data("a", "b")["imports"], {"specifier": "./b"})
        self.assertTrue(store.has_edge("a", "b", "calls"))
        self.assertFalse(store.has_edge("b", "a"))
        self.assertEqual(store.successors("a"), ["b"])

    def test_missing_nodes(self) -> None:
        store = NetworkXStore()
        self.assertEqual(store.successors("x"), [])
        self.assertEqual(store.predecessors("x"), [])
        self.assertEqual(store.get_node_data("x"), {})
        self.assertEqual(store.get_edge_data("x", "y"), {})
        self.assertFalse(store.has_node(["unhashable"]))


class SourceRecordTests(unittest.TestCase):
    def test_round_trip_through_dict(self) -> None:
        data = {
            "path": "a.js",
            "declared_functions": [{"name": "foo", "line": 3, "kind": "arrow_function"}],
            "declared_imports": [{"specifier": "./b", "kind": "require", "line": 1}],
            "call_sites": [{"callee_name": "bar", "line": 4}],
        }
        record = SourceRecord.from_dict(data)
        self.assertEqual(record.to_dict(), data)
        self.assertEqual(record.declared_imports[0].kind, ImportKind.REQUIRE)

    def test_positions_and_missing_lines(self) -> None:
        record = SourceRecord.from_dict({
            "filename": "a.js",
            "functions": [{"name": "first"}, {"name": "", "startPosition": {"row": 6, "column": 0}}],
            "imports": ["./b"],
            "functionCalls": [{"name": "x", "line": "7"}],
        })
        self.assertEqual([(f.name, f.line) for f in record.declared_functions],
                         [("first", 1), ("anonymous", 7)])
        self.assertEqual(record.declared_imports[0].specifier, "./b")
        self.assertEqual(record.call_sites[0].line, 7)
        self.assertFalse(record.is_empty)

    def test_no_path(self) -> None:
        self.assertIsNone(SourceRecord.from_dict({"functions": []}))
        self.assertIsNone(SourceRecord.from_dict(["a.js"]))
        self.assertTrue(SourceRecord.from_dict({"path": "a.js"}).is_empty)


if __name__ == "__main__":
    unittest.main()
