"""Hover description tests."""

from __future__ import annotations

import unittest

from llindex.index import Span, build_index, hover_at
from support import line_col_for, load_fixture


class HoverTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.text = load_fixture("loop.ll")
        cls.index = build_index(cls.text)

    def test_branch_target_describes_label(self) -> None:
        info = hover_at(self.index, 14, 15)
        self.assertEqual(info.kind_label, "Label")
        self.assertEqual(info.code, "label for.cond")
        self.assertEqual(info.definition_line, 17)
        self.assertEqual(info.function_name, "@main")
        self.assertEqual(info.range, Span.on_line(14, 11, 20))
        self.assertEqual(info.location_text(), "Defined at line 17 in @main")

    def test_call_site_describes_declared_function(self) -> None:
        line, column = line_col_for(self.text, "@printf")
        info = hover_at(self.index, line, column)
        self.assertEqual(info.kind_label, "Function")
        self.assertEqual(info.code, "declare i32 @printf(ptr noundef, ...) #1")
        self.assertEqual(info.definition_line, 47)
        self.assertIsNone(info.function_name)
        self.assertEqual(info.location_text(), "Defined at line 47")

    def test_parameter_use_describes_parameter(self) -> None:
        info = hover_at(self.index, 39, 12)
        self.assertEqual(info.kind_label, "Local Value")
        self.assertEqual(info.code, "parameter %x")
        self.assertEqual(info.definition_line, 37)

    def test_named_type_and_metadata(self) -> None:
        self.assertEqual(hover_at(self.index, 3, 2).kind_label, "Type Definition")
        line, column = line_col_for(self.text, "!6\n")
        self.assertEqual(hover_at(self.index, line, column).code, "!6 = distinct !{!6, !7}")

    def test_nothing_to_describe(self) -> None:
        self.assertIsNone(hover_at(self.index, 33, 0))
        self.assertIsNone(hover_at(self.index, 500, 0))
        unresolved = build_index("define void @f() {\n  call void @missing()\n  ret void\n}\n")
        self.assertIsNone(hover_at(unresolved, 1, 13))


if __name__ == "__main__":
    unittest.main()
