"""Outline listing tests: grouping, exclusions, and details."""

from __future__ import annotations

import unittest

from llindex.index import SymbolKind, build_index, list_outline_symbols
from llindex.index.outline import is_numbered_metadata
from support import load_fixture


class OutlineTests(unittest.TestCase):
    def test_numbered_metadata_is_left_out(self) -> None:
        index = build_index(
            "%T = type { i8 }\n"
            "@g = global i32 0\n"
            "define void @f() {\n"
            "  ret void\n"
            "}\n"
            "!llvm.module.flags = !{!0}\n"
            "!0 = !{i32 1}\n"
        )
        symbols = list_outline_symbols(index)
        self.assertEqual(
            [(symbol.name, symbol.kind) for symbol in symbols],
            [
                ("@f", SymbolKind.FUNCTION),
                ("@g", SymbolKind.GLOBAL_VALUE),
                ("%T", SymbolKind.NAMED_TYPE),
                ("!llvm.module.flags", SymbolKind.METADATA),
            ],
        )

    def test_fixture_groups_and_details(self) -> None:
        symbols = list_outline_symbols(build_index(load_fixture("loop.ll")))
        self.assertEqual(
            [(symbol.name, symbol.detail) for symbol in symbols],
            [
                ("@main", "define i32 @main() #0 {"),
                ("@helper", "define void @helper(i32 noundef %x, ptr %p) #0 {"),
                ("@printf", "declare i32 @printf(ptr noundef, ...) #1"),
                ("@counter", "global"),
                ("@.str", "global"),
                ("%struct.Point", "type"),
                ("!llvm.module.flags", "metadata"),
                ("!llvm.ident", "metadata"),
                ("#0", "attributes"),
                ("#1", "attributes"),
            ],
        )

    def test_function_listed_once_with_body_range(self) -> None:
        symbols = list_outline_symbols(build_index(load_fixture("loop.ll")))
        main = [symbol for symbol in symbols if symbol.name == "@main"]
        self.assertEqual(len(main), 1)
        self.assertEqual((main[0].range.start_line, main[0].range.end_line), (8, 34))
        self.assertEqual(main[0].category, "function")

    def test_function_detail_is_truncated_to_width(self) -> None:
        index = build_index("declare void @a_rather_long_function_name(i32, i32, i32, i32, i32)\n")
        (symbol,) = list_outline_symbols(index)
        self.assertEqual(len(symbol.detail), 50)
        self.assertEqual(list_outline_symbols(index, detail_width=7)[0].detail, "declare")

    def test_locals_and_labels_never_appear(self) -> None:
        kinds = {symbol.kind for symbol in list_outline_symbols(build_index(load_fixture("loop.ll")))}
        self.assertNotIn(SymbolKind.LOCAL_VALUE, kinds)
        self.assertNotIn(SymbolKind.LABEL, kinds)

    def test_is_numbered_metadata(self) -> None:
        self.assertTrue(is_numbered_metadata("!0"))
        self.assertTrue(is_numbered_metadata("!42"))
        self.assertFalse(is_numbered_metadata("!"))
        self.assertFalse(is_numbered_metadata("!llvm.ident"))


if __name__ == "__main__":
    unittest.main()
