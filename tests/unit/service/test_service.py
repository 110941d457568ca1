"""Query surface tests over an owned snapshot cache."""

from __future__ import annotations

import unittest

from llindex.index import SnapshotCache, Span, SymbolKind
from llindex.service import SymbolService
from support import load_fixture

DOC = "file:///loop.ll"


class SymbolServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.text = load_fixture("loop.ll")
        self.cache = SnapshotCache()
        self.service = SymbolService(self.cache)

    def test_queries_share_one_snapshot(self) -> None:
        first = self.service.index(DOC, self.text, 1)
        self.service.outline(DOC, self.text, 1)
        self.service.hover(DOC, self.text, 1, 14, 15)
        self.assertIs(self.service.index(DOC, self.text, 1), first)

    def test_definition_and_references(self) -> None:
        definition = self.service.definition(DOC, self.text, 1, 14, 15)
        self.assertEqual(definition.kind, SymbolKind.LABEL)
        self.assertEqual(
            self.service.references(DOC, self.text, 1, 16, 0),
            [Span.on_line(14, 12, 20), Span.on_line(30, 12, 20)],
        )

    def test_blank_position_answers_nothing(self) -> None:
        self.assertIsNone(self.service.definition(DOC, self.text, 1, 2, 0))
        self.assertEqual(self.service.references(DOC, self.text, 1, 2, 0), [])
        self.assertIsNone(self.service.hover(DOC, self.text, 1, 2, 0))

    def test_outline_uses_detail_width(self) -> None:
        service = SymbolService(self.cache, detail_width=6)
        self.assertEqual(service.outline(DOC, self.text, 1)[0].detail, "define")

    def test_change_close_and_shutdown_invalidate(self) -> None:
        self.service.index(DOC, self.text, 1)
        self.service.index("other.ll", "", 1)
        self.service.did_change(DOC)
        self.assertNotIn(DOC, self.cache)
        self.service.index(DOC, self.text, 2)
        self.service.did_close("other.ll")
        self.assertEqual(self.cache.versions(), {DOC: 2})
        self.service.shutdown()
        self.assertEqual(len(self.cache), 0)


if __name__ == "__main__":
    unittest.main()
