"""Shared symbol datatypes for the LLVM IR index.

Everything here is immutable once built. ``function_name`` is only
meaningful for ``LOCAL_VALUE`` and ``LABEL`` records, ``function_range`` only
for ``FUNCTION`` definitions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class SymbolKind(Enum):
    """Closed set of symbol families in LLVM IR."""

    LOCAL_VALUE = "local"
    GLOBAL_VALUE = "global"
    LABEL = "label"
    NAMED_TYPE = "type"
    METADATA = "metadata"
    ATTRIBUTE_GROUP = "attributes"
    FUNCTION = "function"
    COMDAT = "comdat"


FUNCTION_SCOPED_KINDS = frozenset({SymbolKind.LOCAL_VALUE, SymbolKind.LABEL})

SymbolKey = tuple[object, ...]


def symbol_key(kind: SymbolKind, name: str, function_name: str | None = None) -> SymbolKey:
    """Build the definition-table key.

    Local values and labels are qualified by their enclosing function when one
    is given; every other kind is keyed module-wide.
    """
    if function_name and kind in FUNCTION_SCOPED_KINDS:
        return (kind, function_name, name)
    return (kind, name)


@dataclass(frozen=True)
class Span:
    """Zero-based, end-exclusive text range."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int

    @classmethod
    def on_line(cls, line: int, start: int, end: int) -> Span:
        return cls(line, start, line, end)


@dataclass(frozen=True)
class FunctionScope:
    """Line range of one ``define`` body, inclusive on both ends.

    ``closed`` is ``False`` when braces never balanced and end of input closed
    the scope implicitly.
    """

    name: str
    start_line: int
    end_line: int
    closed: bool = True

    def contains(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line


@dataclass(frozen=True)
class SymbolDefinition:
    name: str
    kind: SymbolKind
    range: Span
    selection_range: Span
    detail: str | None = None
    function_name: str | None = None
    function_range: Span | None = None


@dataclass(frozen=True)
class SymbolReference:
    name: str
    kind: SymbolKind
    range: Span
    function_name: str | None = None


@dataclass(frozen=True)
class Occurrence:
    """Symbol occurrence found under a cursor position."""

    name: str
    kind: SymbolKind
    range: Span
    function_name: str | None = None


@dataclass(frozen=True)
class SymbolIndex:
    """Definitions, references, and function scopes of one document snapshot.

    ``definitions`` is a read-only view; the index is superseded, never
    mutated, when the document changes.
    """

    version: int
    lines: tuple[str, ...]
    definitions: Mapping[SymbolKey, SymbolDefinition]
    references: tuple[SymbolReference, ...]
    function_scopes: tuple[FunctionScope, ...]

    @classmethod
    def create(
        cls,
        version: int,
        lines: list[str],
        definitions: dict[SymbolKey, SymbolDefinition],
        references: list[SymbolReference],
        function_scopes: list[FunctionScope],
    ) -> SymbolIndex:
        return cls(
            version=version,
            lines=tuple(lines),
            definitions=MappingProxyType(dict(definitions)),
            references=tuple(references),
            function_scopes=tuple(function_scopes),
        )

    @property
    def unclosed_scopes(self) -> int:
        return sum(1 for scope in self.function_scopes if not scope.closed)

    def lookup(self, key: SymbolKey) -> SymbolDefinition | None:
        return self.definitions.get(key)

    def content(self) -> tuple:
        """Comparable snapshot of the index payload."""
        return (
            self.version,
            self.lines,
            tuple(self.definitions.items()),
            self.references,
            self.function_scopes,
        )
