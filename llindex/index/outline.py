"""Document outline listing."""

from __future__ import annotations

from dataclasses import dataclass

from .types import Span, SymbolIndex, SymbolKind, symbol_key

DEFAULT_DETAIL_WIDTH = 50

# Category names for consumers that render outlines as editor symbol kinds.
OUTLINE_CATEGORY: dict[SymbolKind, str] = {
    SymbolKind.FUNCTION: "function",
    SymbolKind.GLOBAL_VALUE: "variable",
    SymbolKind.LOCAL_VALUE: "variable",
    SymbolKind.NAMED_TYPE: "struct",
    SymbolKind.LABEL: "key",
    SymbolKind.METADATA: "property",
    SymbolKind.ATTRIBUTE_GROUP: "constant",
    SymbolKind.COMDAT: "module",
}

_OUTLINE_GROUPS = (
    SymbolKind.FUNCTION,
    SymbolKind.GLOBAL_VALUE,
    SymbolKind.NAMED_TYPE,
    SymbolKind.METADATA,
    SymbolKind.ATTRIBUTE_GROUP,
)


@dataclass(frozen=True)
class OutlineSymbol:
    name: str
    kind: SymbolKind
    range: Span
    selection_range: Span
    detail: str = ""

    @property
    def category(self) -> str:
        return OUTLINE_CATEGORY[self.kind]


def is_numbered_metadata(name: str) -> bool:
    """True for ``!<digits>`` names."""
    return len(name) > 1 and name.startswith("!") and name[1:].isdigit()


def _detail_for(kind: SymbolKind, detail: str | None, width: int) -> str:
    if kind is SymbolKind.FUNCTION:
        return (detail or "")[:width]
    if kind is SymbolKind.GLOBAL_VALUE:
        return "global"
    if kind is SymbolKind.NAMED_TYPE:
        return "type"
    if kind is SymbolKind.METADATA:
        return "metadata"
    return "attributes"


def list_outline_symbols(index: SymbolIndex, detail_width: int = DEFAULT_DETAIL_WIDTH) -> list[OutlineSymbol]:
    """List module-level symbols grouped by kind.

    Groups come in the order functions, globals, named types, named metadata,
    attribute groups; each keeps definition order. Globals that are also
    functions, numbered metadata, local values and labels are left out.
    """
    grouped: dict[SymbolKind, list[OutlineSymbol]] = {kind: [] for kind in _OUTLINE_GROUPS}
    for key, definition in index.definitions.items():
        kind = key[0]
        if kind not in grouped:
            continue
        if kind is SymbolKind.GLOBAL_VALUE and symbol_key(SymbolKind.FUNCTION, definition.name) in index.definitions:
            continue
        if kind is SymbolKind.METADATA and is_numbered_metadata(definition.name):
            continue
        grouped[kind].append(
            OutlineSymbol(
                name=definition.name,
                kind=kind,
                range=definition.range,
                selection_range=definition.selection_range,
                detail=_detail_for(kind, definition.detail, detail_width),
            )
        )
    return [symbol for kind in _OUTLINE_GROUPS for symbol in grouped[kind]]
