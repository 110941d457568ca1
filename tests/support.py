"""Shared helpers for index tests: fixture loading and position lookup."""

from __future__ import annotations

from pathlib import Path

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


def load_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


def line_col_for(text: str, token: str, occurrence: int = 0) -> tuple[int, int]:
    """Return 0-based ``(line, column)`` of the ``occurrence``-th ``token``."""
    start = -1
    for _ in range(occurrence + 1):
        start = text.index(token, start + 1)
    line = text.count("\n", 0, start)
    line_start = text.rfind("\n", 0, start)
    column = start if line_start < 0 else start - line_start - 1
    return line, column


def line_of(text: str, needle: str) -> int:
    return line_col_for(text, needle)[0]
