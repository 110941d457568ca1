"""Tests for text sanitization, source loading, and IR colorization."""

from __future__ import annotations

import re
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from llindex.highlight import colorize_ir, normalize_style, read_text, sanitize_terminal_text

ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


class HighlightTests(unittest.TestCase):
    def test_sanitize_terminal_text_escapes_control_bytes_but_keeps_common_whitespace(self) -> None:
        sanitized = sanitize_terminal_text("a\tb\nc\rd\x07e\x1bf")
        self.assertEqual(sanitized, "a\tb\nc\rd\\x07e\\x1bf")

    def test_no_color_returns_plain_text(self) -> None:
        source = "define i32 @main() #0 {"
        self.assertEqual(colorize_ir(source, no_color=True), source)

    def test_colorized_output_strips_back_to_source(self) -> None:
        source = "%0 = load i32, ptr %i, align 4"
        rendered = colorize_ir(source, "monokai")
        self.assertIn("\x1b[", rendered)
        self.assertEqual(ANSI_RE.sub("", rendered), source)

    def test_highlight_failure_falls_back_to_plain_text(self) -> None:
        with mock.patch("llindex.highlight.pygments_highlight", side_effect=RuntimeError("boom")):
            self.assertEqual(colorize_ir("ret void"), "ret void")

    def test_unknown_style_falls_back_to_default(self) -> None:
        self.assertEqual(normalize_style("no-such-style"), "monokai")
        self.assertEqual(normalize_style("default"), "default")

    def test_read_text_falls_back_to_latin1(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bytes.ll"
            path.write_bytes(b"; caf\xe9\n")
            self.assertEqual(read_text(path), "; café\n")


if __name__ == "__main__":
    unittest.main()
