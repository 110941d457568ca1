"""Cursor-to-occurrence resolution tests."""

from __future__ import annotations

import unittest

from llindex.index import Occurrence, Span, SymbolKind, build_index, resolve_occurrence_at
from support import line_col_for, load_fixture


class PositionResolverTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.text = load_fixture("loop.ll")
        cls.index = build_index(cls.text, 3)

    def test_global_occurrence_has_no_function_tag(self) -> None:
        line, column = line_col_for(self.text, "@printf(ptr noundef @.str")
        occurrence = resolve_occurrence_at(self.index, line, column + 3)
        self.assertEqual(
            occurrence,
            Occurrence("@printf", SymbolKind.GLOBAL_VALUE, Span.on_line(line, column, column + 7)),
        )

    def test_local_occurrence_is_tagged_with_enclosing_function(self) -> None:
        occurrence = resolve_occurrence_at(self.index, 14, 15)
        self.assertEqual(occurrence.name, "%for.cond")
        self.assertEqual(occurrence.kind, SymbolKind.LOCAL_VALUE)
        self.assertEqual(occurrence.function_name, "@main")
        self.assertEqual(occurrence.range, Span.on_line(14, 11, 20))

    def test_token_end_is_inclusive(self) -> None:
        occurrence = resolve_occurrence_at(self.index, 14, 20)
        self.assertIsNotNone(occurrence)
        self.assertEqual(occurrence.name, "%for.cond")

    def test_label_at_line_start(self) -> None:
        occurrence = resolve_occurrence_at(self.index, 16, 3)
        self.assertEqual(occurrence, Occurrence("for.cond", SymbolKind.LABEL, Span.on_line(16, 0, 8), "@main"))

    def test_locals_in_comments_still_resolve(self) -> None:
        line, column = line_col_for(self.text, "%for.inc, %entry")
        occurrence = resolve_occurrence_at(self.index, line, column + 1)
        self.assertEqual(occurrence.name, "%for.inc")

    def test_metadata_attribute_and_comdat_families(self) -> None:
        line, column = line_col_for(self.text, "!6\n")
        self.assertEqual(resolve_occurrence_at(self.index, line, column).kind, SymbolKind.METADATA)
        self.assertEqual(resolve_occurrence_at(self.index, 8, 20).name, "#0")

        comdat_text = "$c = comdat any\n@v = global i32 0, comdat($c)\n"
        occurrence = resolve_occurrence_at(comdat_text, 1, 27)
        self.assertEqual(occurrence, Occurrence("$c", SymbolKind.COMDAT, Span.on_line(1, 26, 28)))

    def test_whitespace_and_out_of_range_positions_resolve_to_nothing(self) -> None:
        self.assertIsNone(resolve_occurrence_at(self.index, 33, 0))
        self.assertIsNone(resolve_occurrence_at(self.index, 10_000, 0))
        self.assertIsNone(resolve_occurrence_at(self.index, -1, 0))
        self.assertIsNone(resolve_occurrence_at(self.index, 14, -1))

    def test_text_source_builds_an_index_on_the_fly(self) -> None:
        occurrence = resolve_occurrence_at(self.text, 16, 0)
        self.assertEqual(occurrence.kind, SymbolKind.LABEL)


if __name__ == "__main__":
    unittest.main()
