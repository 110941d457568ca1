"""Per-line reference extraction.

Families are emitted in a fixed order per line: globals, locals, label
targets, metadata, attribute groups, comdats. A ``label %x`` occurrence is
emitted twice, once as a local ``%x`` and once as the label ``x``.
"""

from __future__ import annotations

from .grammar import (
    ATTRIBUTE_SIGIL,
    COMDAT_SIGIL,
    GLOBAL_SIGIL,
    LOCAL_SIGIL,
    METADATA_SIGIL,
    Token,
    char_at,
    code_part,
    follows_keyword,
    preceded_by_word,
    skip_spaces,
    tokenize_sigils,
)
from .types import Span, SymbolKind, SymbolReference


def _is_metadata_definition_site(code: str, token: Token) -> bool:
    return char_at(code, skip_spaces(code, token.end)) == "="


def _is_comdat_argument(code: str, token: Token) -> bool:
    """True for ``comdat($name)``, the name being the whole argument."""
    if char_at(code, token.end) != ")" or char_at(code, token.start - 1) != "(":
        return False
    return preceded_by_word(code, token.start - 1, "comdat")


def extract_references(line: str, line_idx: int, current_function: str | None) -> list[SymbolReference]:
    """Scan the code part of ``line`` for symbol occurrences."""
    code = code_part(line)
    tokens = tokenize_sigils(code)
    by_sigil: dict[str, list[Token]] = {}
    for token in tokens:
        by_sigil.setdefault(token.sigil, []).append(token)

    refs: list[SymbolReference] = []

    def emit(name: str, kind: SymbolKind, start: int, end: int, function_name: str | None = None) -> None:
        refs.append(SymbolReference(name, kind, Span.on_line(line_idx, start, end), function_name))

    for token in by_sigil.get(GLOBAL_SIGIL, ()):
        emit(token.text, SymbolKind.GLOBAL_VALUE, token.start, token.end)

    locals_ = by_sigil.get(LOCAL_SIGIL, ())
    for token in locals_:
        emit(token.text, SymbolKind.LOCAL_VALUE, token.start, token.end, current_function)

    for token in locals_:
        if follows_keyword(code, token.start, "label"):
            emit(token.bare, SymbolKind.LABEL, token.start + 1, token.end, current_function)

    for token in by_sigil.get(METADATA_SIGIL, ()):
        if not _is_metadata_definition_site(code, token):
            emit(token.text, SymbolKind.METADATA, token.start, token.end)

    for token in by_sigil.get(ATTRIBUTE_SIGIL, ()):
        emit(token.text, SymbolKind.ATTRIBUTE_GROUP, token.start, token.end)

    for token in by_sigil.get(COMDAT_SIGIL, ()):
        if _is_comdat_argument(code, token):
            emit(token.text, SymbolKind.COMDAT, token.start, token.end)

    return refs
