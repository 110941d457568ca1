"""Hover descriptions for resolved occurrences."""

from __future__ import annotations

from dataclasses import dataclass

from .position import resolve_occurrence_at
from .resolve import find_definition
from .types import Span, SymbolIndex, SymbolKind

KIND_LABELS: dict[SymbolKind, str] = {
    SymbolKind.FUNCTION: "Function",
    SymbolKind.GLOBAL_VALUE: "Global Variable",
    SymbolKind.LOCAL_VALUE: "Local Value",
    SymbolKind.NAMED_TYPE: "Type Definition",
    SymbolKind.LABEL: "Label",
    SymbolKind.METADATA: "Metadata",
    SymbolKind.ATTRIBUTE_GROUP: "Attribute Group",
    SymbolKind.COMDAT: "Comdat",
}


@dataclass(frozen=True)
class HoverInfo:
    """What to show for a hovered symbol; rendering is up to the caller."""

    kind_label: str
    code: str
    definition_line: int
    function_name: str | None
    range: Span

    def location_text(self) -> str:
        text = f"Defined at line {self.definition_line}"
        if self.function_name:
            text += f" in {self.function_name}"
        return text


def hover_at(index: SymbolIndex, line: int, column: int) -> HoverInfo | None:
    occurrence = resolve_occurrence_at(index, line, column)
    if occurrence is None:
        return None
    definition = find_definition(index, occurrence)
    if definition is None:
        return None
    return HoverInfo(
        kind_label=KIND_LABELS[definition.kind],
        code=definition.detail or definition.name,
        definition_line=definition.selection_range.start_line + 1,
        function_name=definition.function_name,
        range=occurrence.range,
    )
