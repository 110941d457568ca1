"""LLVM IR symbol index: scanning, resolution, and snapshot caching."""

from __future__ import annotations

from .build import build_index
from .cache import SnapshotCache
from .hover import HoverInfo, hover_at
from .outline import OutlineSymbol, list_outline_symbols
from .position import resolve_occurrence_at
from .resolve import DEFINITION_LOOKUP_ORDER, find_definition, find_references, resolve_symbol
from .scopes import function_at
from .types import (
    FunctionScope,
    Occurrence,
    Span,
    SymbolDefinition,
    SymbolIndex,
    SymbolKind,
    SymbolReference,
    symbol_key,
)

__all__ = [
    "DEFINITION_LOOKUP_ORDER",
    "FunctionScope",
    "HoverInfo",
    "Occurrence",
    "OutlineSymbol",
    "SnapshotCache",
    "Span",
    "SymbolDefinition",
    "SymbolIndex",
    "SymbolKind",
    "SymbolReference",
    "build_index",
    "find_definition",
    "find_references",
    "function_at",
    "hover_at",
    "list_outline_symbols",
    "resolve_occurrence_at",
    "resolve_symbol",
    "symbol_key",
]
