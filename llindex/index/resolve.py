"""Definition and reference resolution over a built index.

A ``%name`` token is lexically ambiguous: it may be a local value, a named
type, or a label target written through ``label %name``. Definition lookup
walks ``DEFINITION_LOOKUP_ORDER`` and stops at the first hit.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .grammar import LOCAL_SIGIL
from .types import (
    FUNCTION_SCOPED_KINDS,
    Occurrence,
    Span,
    SymbolDefinition,
    SymbolIndex,
    SymbolKind,
    SymbolKey,
    symbol_key,
)


@dataclass(frozen=True)
class Candidate:
    """Key to try, and the kind/name the occurrence means if it hits."""

    key: SymbolKey
    kind: SymbolKind
    name: str


@dataclass(frozen=True)
class LookupStrategy:
    name: str
    candidate: Callable[[Occurrence], Candidate | None]


def _scoped_exact(occ: Occurrence) -> Candidate | None:
    if occ.kind in FUNCTION_SCOPED_KINDS and occ.function_name:
        return Candidate(symbol_key(occ.kind, occ.name, occ.function_name), occ.kind, occ.name)
    return None


def _unscoped_exact(occ: Occurrence) -> Candidate | None:
    return Candidate(symbol_key(occ.kind, occ.name), occ.kind, occ.name)


def _local_as_named_type(occ: Occurrence) -> Candidate | None:
    if occ.kind is SymbolKind.LOCAL_VALUE and occ.name.startswith(LOCAL_SIGIL):
        return Candidate(symbol_key(SymbolKind.NAMED_TYPE, occ.name), SymbolKind.NAMED_TYPE, occ.name)
    return None


def _local_as_label(occ: Occurrence) -> Candidate | None:
    if occ.kind is SymbolKind.LOCAL_VALUE and occ.name.startswith(LOCAL_SIGIL) and occ.function_name:
        bare = occ.name[len(LOCAL_SIGIL) :]
        return Candidate(symbol_key(SymbolKind.LABEL, bare, occ.function_name), SymbolKind.LABEL, bare)
    return None


def _global_as_function(occ: Occurrence) -> Candidate | None:
    if occ.kind is SymbolKind.GLOBAL_VALUE:
        return Candidate(symbol_key(SymbolKind.FUNCTION, occ.name), SymbolKind.FUNCTION, occ.name)
    return None


DEFINITION_LOOKUP_ORDER: tuple[LookupStrategy, ...] = (
    LookupStrategy("scoped-exact", _scoped_exact),
    LookupStrategy("unscoped-exact", _unscoped_exact),
    LookupStrategy("local-as-named-type", _local_as_named_type),
    LookupStrategy("local-as-label", _local_as_label),
    LookupStrategy("global-as-function", _global_as_function),
)


@dataclass(frozen=True)
class Resolution:
    """Outcome of a lookup; ``definition`` is ``None`` when nothing matched."""

    definition: SymbolDefinition | None
    kind: SymbolKind
    name: str
    strategy: str | None = None


def resolve_symbol(index: SymbolIndex, occurrence: Occurrence) -> Resolution:
    for strategy in DEFINITION_LOOKUP_ORDER:
        candidate = strategy.candidate(occurrence)
        if candidate is None:
            continue
        definition = index.lookup(candidate.key)
        if definition is not None:
            return Resolution(definition, candidate.kind, candidate.name, strategy.name)
    return Resolution(None, occurrence.kind, occurrence.name)


def find_definition(index: SymbolIndex, occurrence: Occurrence) -> SymbolDefinition | None:
    return resolve_symbol(index, occurrence).definition


# Definition kinds that are addressed through another reference kind.
_REFERENCE_KIND_FOR = {
    SymbolKind.FUNCTION: SymbolKind.GLOBAL_VALUE,
    SymbolKind.NAMED_TYPE: SymbolKind.LOCAL_VALUE,
}


def find_references(index: SymbolIndex, occurrence: Occurrence, include_declaration: bool = False) -> list[Span]:
    """Return spans of every reference to the symbol behind ``occurrence``.

    Local values and labels only match references tagged with the same
    function. For labels, ``%name`` local references count too, except where
    the same text was already reported through ``label %name``.
    """
    resolution = resolve_symbol(index, occurrence)
    definition = resolution.definition
    actual_kind = resolution.kind
    actual_name = resolution.name
    ref_kind = _REFERENCE_KIND_FOR.get(actual_kind, actual_kind)
    scoped = actual_kind in FUNCTION_SCOPED_KINDS
    own_span = definition.selection_range if definition is not None else None

    spans: list[Span] = []
    if include_declaration and definition is not None:
        spans.append(definition.selection_range)

    label_spans: set[Span] = set()
    local_candidates: list[Span] = []
    for ref in index.references:
        if scoped and ref.function_name != occurrence.function_name:
            continue
        if ref.range == own_span:
            continue
        if ref.kind is ref_kind and ref.name == actual_name:
            spans.append(ref.range)
            if ref.kind is SymbolKind.LABEL:
                label_spans.add(ref.range)
        elif actual_kind is SymbolKind.LABEL and ref.kind is SymbolKind.LOCAL_VALUE:
            if ref.name.removeprefix(LOCAL_SIGIL) == actual_name:
                spans.append(ref.range)
                local_candidates.append(ref.range)

    if not local_candidates:
        return spans
    duplicates = {
        span
        for span in local_candidates
        if Span(span.start_line, span.start_column + 1, span.end_line, span.end_column) in label_spans
    }
    return [span for span in spans if span not in duplicates]
