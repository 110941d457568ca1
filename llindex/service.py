"""Editor-facing query surface.

Owns one :class:`SnapshotCache` for its lifetime and answers definition,
reference, outline, and hover queries by document identity. Integrations
forward change/close notifications to ``did_change``/``did_close`` and call
``shutdown`` when they stop.
"""

from __future__ import annotations

from collections.abc import Hashable

from .index import (
    HoverInfo,
    OutlineSymbol,
    SnapshotCache,
    Span,
    SymbolDefinition,
    SymbolIndex,
    find_definition,
    find_references,
    hover_at,
    list_outline_symbols,
    resolve_occurrence_at,
)
from .index.outline import DEFAULT_DETAIL_WIDTH


class SymbolService:
    def __init__(self, cache: SnapshotCache | None = None, detail_width: int = DEFAULT_DETAIL_WIDTH) -> None:
        self.cache = cache if cache is not None else SnapshotCache()
        self.detail_width = detail_width

    def index(self, document_id: Hashable, text: str, version: int) -> SymbolIndex:
        return self.cache.get_or_build(document_id, text, version)

    def definition(
        self, document_id: Hashable, text: str, version: int, line: int, column: int
    ) -> SymbolDefinition | None:
        index = self.index(document_id, text, version)
        occurrence = resolve_occurrence_at(index, line, column)
        if occurrence is None:
            return None
        return find_definition(index, occurrence)

    def references(
        self,
        document_id: Hashable,
        text: str,
        version: int,
        line: int,
        column: int,
        include_declaration: bool = False,
    ) -> list[Span]:
        index = self.index(document_id, text, version)
        occurrence = resolve_occurrence_at(index, line, column)
        if occurrence is None:
            return []
        return find_references(index, occurrence, include_declaration)

    def outline(self, document_id: Hashable, text: str, version: int) -> list[OutlineSymbol]:
        return list_outline_symbols(self.index(document_id, text, version), self.detail_width)

    def hover(self, document_id: Hashable, text: str, version: int, line: int, column: int) -> HoverInfo | None:
        return hover_at(self.index(document_id, text, version), line, column)

    def did_change(self, document_id: Hashable) -> None:
        self.cache.invalidate(document_id)

    def did_close(self, document_id: Hashable) -> None:
        self.cache.invalidate(document_id)

    def shutdown(self) -> None:
        self.cache.invalidate_all()
