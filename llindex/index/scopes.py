"""Function scope detection via brace counting."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .grammar import code_part, function_header, is_blank_or_comment
from .types import FunctionScope


def detect_function_scopes(lines: Sequence[str]) -> list[FunctionScope]:
    """Return one scope per ``define ... @name(`` header outside an open body.

    Depth counts every ``{``/``}`` from the header line on. A scope closes on
    the line where depth returns to zero after the body opened. Headers seen
    while a body is open are ignored. A body still open at end of input is
    closed there with ``closed=False``.
    """
    scopes: list[FunctionScope] = []
    current: str | None = None
    start_line = -1
    depth = 0
    opened = False

    for line_idx, line in enumerate(lines):
        if current is None:
            if is_blank_or_comment(line):
                continue
            header = function_header(code_part(line), "define")
            if header is None:
                continue
            current = header.text
            start_line = line_idx
            depth = 0
            opened = False

        for ch in line:
            if ch == "{":
                depth += 1
                opened = True
            elif ch == "}" and opened:
                depth -= 1

        if opened and depth <= 0:
            scopes.append(FunctionScope(current, start_line, line_idx))
            current = None

    if current is not None:
        scopes.append(FunctionScope(current, start_line, max(start_line, len(lines) - 1), closed=False))

    return scopes


def function_at(scopes: Iterable[FunctionScope], line: int) -> str | None:
    """Name of the first scope containing ``line``."""
    for scope in scopes:
        if scope.contains(line):
            return scope.name
    return None


def scope_starting_at(scopes: Iterable[FunctionScope], line: int) -> FunctionScope | None:
    for scope in scopes:
        if scope.start_line == line:
            return scope
    return None
