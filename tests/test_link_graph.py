"""
Tests for link graph access and metadata resolution.

Uses a real DuckDB file in a temporary directory.
"""

import shutil
import tempfile
import unittest
from pathlib import Path

from tiddlyroam.database import RoamDatabase
from tiddlyroam.exporters.metadata import MetadataResolver
from tiddlyroam.models import LinkGraphRecord
from tests.test_history import CannedHistoryResolver, JAN_2021, FEB_2021


class GraphTestCase(unittest.TestCase):
    """Base class opening a fresh link graph per test."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.db_path = Path(self.temp_dir) / "graph.db"
        self.db = RoamDatabase(str(self.db_path))
        self.db.connect()
        self.db.initialize_database()

        self.db.add_node("x", "/notes/x.org", "Manifolds")
        self.db.add_node("a", "/notes/a.org", "Graph Theory")
        self.db.add_node("b", "/notes/b.org", "Topology")

    def tearDown(self):
        self.db.disconnect()
        shutil.rmtree(self.temp_dir)

    def link(self, source, dest):
        self.db.add_link(LinkGraphRecord(source=source, dest=dest))


class TestRoamDatabase(GraphTestCase):
    """Test the link graph queries."""

    def test_identity_for_path(self):
        self.assertEqual(self.db.identity_for_path("/notes/a.org"), "a")
        self.assertIsNone(self.db.identity_for_path("/notes/missing.org"))

    def test_file_level_note_comes_first(self):
        self.db.add_node("a-heading", "/notes/c.org", "Heading", level=1)
        self.db.add_node("c", "/notes/c.org", "Whole file", level=0)

        self.assertEqual(self.db.identity_for_path("/notes/c.org"), "c")

    def test_title_for_identity(self):
        self.assertEqual(self.db.title_for_identity("b"), "Topology")
        self.assertIsNone(self.db.title_for_identity("missing"))

    def test_sources_keep_duplicates(self):
        self.link("a", "x")
        self.link("b", "x")
        self.link("a", "x")

        self.assertEqual(sorted(self.db.sources_linking_to("x")), ["a", "a", "b"])
        self.assertEqual(self.db.sources_linking_to("a"), [])

    def test_duplicate_node_rejected(self):
        self.assertFalse(self.db.add_node("a", "/notes/other.org", "Other"))

    def test_requires_connection(self):
        db = RoamDatabase(str(Path(self.temp_dir) / "other.db"))
        with self.assertRaises(RuntimeError):
            db.title_for_identity("a")

    def test_context_manager(self):
        self.db.disconnect()
        with RoamDatabase(str(self.db_path)) as db:
            self.assertEqual(db.title_for_identity("a"), "Graph Theory")
        self.assertIsNone(db.connection)


    def test_read_only_queries(self):
        self.link("a", "x")
        self.db.disconnect()

        with RoamDatabase(str(self.db_path), read_only=True) as db:
            self.assertEqual(db.identity_for_path("/notes/x.org"), "x")
            self.assertEqual(db.sources_linking_to("x"), ["a"])


class TestMetadataResolver(GraphTestCase):
    """Test title, timestamp and backlink resolution."""

    def setUp(self):
        super().setUp()
        self.history = CannedHistoryResolver(earliest=JAN_2021 * 1000, latest=FEB_2021 * 1000)
        self.resolver = MetadataResolver(self.db, self.history)

    def test_backlinks_deduplicated(self):
        self.link("a", "x")
        self.link("b", "x")
        self.link("a", "x")

        titles = self.resolver.backlink_titles("x")

        self.assertEqual(sorted(titles), ["Graph Theory", "Topology"])

    def test_backlink_display(self):
        """Multi-word titles are bracketed, single words stay bare."""
        self.link("a", "x")
        self.link("b", "x")

        text = self.resolver.backlinks("x")

        self.assertIn("[[Graph Theory]]", text)
        self.assertIn("Topology", text)
        self.assertNotIn("[[Topology]]", text)
        self.assertEqual(len(text), len("[[Graph Theory]] Topology"))

    def test_no_backlinks(self):
        self.assertEqual(self.resolver.backlinks("x"), "")

    def test_untitled_source_skipped(self):
        self.db.add_node("u", "/notes/u.org", None)
        self.link("u", "x")
        self.link("b", "x")

        self.assertEqual(self.resolver.backlinks("x"), "Topology")

    def test_resolve(self):
        self.link("a", "x")
        metadata = self.resolver.resolve("/notes/x.org", tags=["math"], references="cite:x")

        self.assertEqual(metadata.title, "Manifolds")
        self.assertEqual(metadata.tags, ["math"])
        self.assertEqual(metadata.references, "cite:x")
        self.assertEqual(metadata.created, "20210101000000000")
        self.assertEqual(metadata.modified, "20210201000000000")
        self.assertEqual(metadata.backlinks, "[[Graph Theory]]")

    def test_tag_string_kept(self):
        metadata = self.resolver.resolve("/notes/x.org", tags="math [[graph theory]]")
        self.assertEqual(metadata.tags, "math [[graph theory]]")

    def test_supplied_title_wins(self):
        metadata = self.resolver.resolve("/notes/x.org", title="Given")
        self.assertEqual(metadata.title, "Given")

    def test_unknown_document_degrades(self):
        """A document missing from the graph still gets metadata."""
        metadata = self.resolver.resolve("/notes/new-note.org")

        self.assertEqual(metadata.title, "new-note")
        self.assertEqual(metadata.backlinks, "")
        self.assertEqual(metadata.created, "20210101000000000")


if __name__ == '__main__':
    unittest.main(verbosity=2)
