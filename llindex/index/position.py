"""Map a cursor position to the symbol occurrence under it."""

from __future__ import annotations

from .build import build_index
from .grammar import (
    ATTRIBUTE_SIGIL,
    COMDAT_SIGIL,
    GLOBAL_SIGIL,
    LOCAL_SIGIL,
    METADATA_SIGIL,
    Token,
    leading_label,
    tokenize_sigils,
)
from .scopes import function_at
from .types import Occurrence, Span, SymbolIndex, SymbolKind

# Families checked in order; the label family sits between locals and metadata.
_SIGIL_FAMILIES_BEFORE_LABEL = (
    (GLOBAL_SIGIL, SymbolKind.GLOBAL_VALUE),
    (LOCAL_SIGIL, SymbolKind.LOCAL_VALUE),
)
_SIGIL_FAMILIES_AFTER_LABEL = (
    (METADATA_SIGIL, SymbolKind.METADATA),
    (ATTRIBUTE_SIGIL, SymbolKind.ATTRIBUTE_GROUP),
    (COMDAT_SIGIL, SymbolKind.COMDAT),
)


def _token_at(tokens: list[Token], sigil: str, column: int) -> Token | None:
    for token in tokens:
        if token.sigil == sigil and token.start <= column <= token.end:
            return token
    return None


def resolve_occurrence_at(source: str | SymbolIndex, line: int, column: int) -> Occurrence | None:
    """Return the occurrence covering ``(line, column)``, or ``None``.

    ``source`` is document text or an already built index. Token ends are
    inclusive so a cursor resting just after a name still hits it.
    """
    index = build_index(source) if isinstance(source, str) else source
    if line < 0 or line >= len(index.lines) or column < 0:
        return None

    text = index.lines[line]
    tokens = tokenize_sigils(text)
    function_name = function_at(index.function_scopes, line)

    for sigil, kind in _SIGIL_FAMILIES_BEFORE_LABEL:
        token = _token_at(tokens, sigil, column)
        if token is not None:
            scoped = function_name if kind is SymbolKind.LOCAL_VALUE else None
            return Occurrence(token.text, kind, Span.on_line(line, token.start, token.end), scoped)

    label = leading_label(text)
    if label is not None and column <= len(label):
        return Occurrence(label, SymbolKind.LABEL, Span.on_line(line, 0, len(label)), function_name)

    for sigil, kind in _SIGIL_FAMILIES_AFTER_LABEL:
        token = _token_at(tokens, sigil, column)
        if token is not None:
            return Occurrence(token.text, kind, Span.on_line(line, token.start, token.end))

    return None
