"""Per-line definition extraction.

Patterns are tried in a fixed order; a named type ends the line, the other
patterns are independent and may all register from one line.
"""

from __future__ import annotations

from collections.abc import Sequence

from .grammar import (
    ATTRIBUTE_SIGIL,
    COMDAT_SIGIL,
    GLOBAL_SIGIL,
    LOCAL_SIGIL,
    METADATA_SIGIL,
    QUOTE_CHAR,
    Token,
    char_at,
    code_part,
    function_header,
    has_word,
    label_definition,
    leading_assignment,
    match_word,
    matching_paren,
    scan_digits,
    skip_spaces,
    starts_with_keyword,
    tokenize_sigils,
)
from .scopes import scope_starting_at
from .types import FunctionScope, Span, SymbolDefinition, SymbolKey, SymbolKind, symbol_key

_OPENERS = "([{<"
_CLOSERS = ")]}>"


def split_parameters(text: str) -> list[tuple[int, str]]:
    """Split a parameter list on top-level commas, keeping segment offsets."""
    segments: list[tuple[int, str]] = []
    depth = 0
    seg_start = 0
    pos = 0
    while pos < len(text):
        ch = text[pos]
        if ch == QUOTE_CHAR:
            close = text.find(QUOTE_CHAR, pos + 1)
            pos = len(text) if close < 0 else close + 1
            continue
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth = max(0, depth - 1)
        elif ch == "," and depth == 0:
            segments.append((seg_start, text[seg_start:pos]))
            seg_start = pos + 1
        pos += 1
    segments.append((seg_start, text[seg_start:]))
    return segments


def parameter_name(segment: str) -> Token | None:
    """Return the trailing ``%name`` of one parameter, if it is named.

    ``i32 %x`` is named; ``%struct.S`` alone or ``%struct.S*`` is a type.
    """
    tokens = [token for token in tokenize_sigils(segment) if token.sigil == LOCAL_SIGIL]
    if not tokens:
        return None
    last = tokens[-1]
    if segment[last.end :].strip():
        return None
    if not segment[: last.start].strip():
        return None
    return last


class DefinitionExtractor:
    """Registers definitions line by line into a caller-owned table."""

    def __init__(self, lines: Sequence[str], scopes: Sequence[FunctionScope]) -> None:
        self.lines = lines
        self.scopes = scopes

    def _line_span(self, line_idx: int) -> Span:
        return Span.on_line(line_idx, 0, len(self.lines[line_idx]))

    def _put(
        self,
        definitions: dict[SymbolKey, SymbolDefinition],
        definition: SymbolDefinition,
        *keys: SymbolKind,
    ) -> None:
        for kind in keys or (definition.kind,):
            definitions[symbol_key(kind, definition.name, definition.function_name)] = definition

    def _simple(
        self, line_idx: int, token: Token, kind: SymbolKind, detail: str, function_name: str | None = None
    ) -> SymbolDefinition:
        return SymbolDefinition(
            name=token.text,
            kind=kind,
            range=self._line_span(line_idx),
            selection_range=Span.on_line(line_idx, token.start, token.end),
            detail=detail,
            function_name=function_name,
        )

    def extract(
        self,
        line_idx: int,
        current_function: str | None,
        definitions: dict[SymbolKey, SymbolDefinition],
    ) -> None:
        line = self.lines[line_idx]
        code = code_part(line)
        detail = line.strip()

        local = leading_assignment(code, LOCAL_SIGIL)
        if local is not None and match_word(code, local.value_start, "type") is not None:
            self._put(definitions, self._simple(line_idx, local.token, SymbolKind.NAMED_TYPE, detail))
            return

        global_var = leading_assignment(code, GLOBAL_SIGIL)
        if global_var is not None:
            value = code[global_var.value_start :]
            if has_word(value, "alias"):
                global_detail = f"alias: {detail}"
            elif has_word(value, "ifunc"):
                global_detail = f"ifunc: {detail}"
            else:
                global_detail = detail
            self._put(definitions, self._simple(line_idx, global_var.token, SymbolKind.GLOBAL_VALUE, global_detail))

        header = function_header(code, "define")
        if header is not None:
            self._function_definition(line_idx, header, detail, definitions)

        declared = function_header(code, "declare")
        if declared is not None:
            definition = self._simple(line_idx, declared, SymbolKind.FUNCTION, detail)
            self._put(definitions, definition, SymbolKind.FUNCTION, SymbolKind.GLOBAL_VALUE)

        if current_function is not None:
            if local is not None:
                self._put(
                    definitions,
                    self._simple(line_idx, local.token, SymbolKind.LOCAL_VALUE, detail, current_function),
                )
            label = label_definition(line)
            if label is not None:
                self._put(
                    definitions,
                    SymbolDefinition(
                        name=label,
                        kind=SymbolKind.LABEL,
                        range=self._line_span(line_idx),
                        selection_range=Span.on_line(line_idx, 0, len(label)),
                        detail=f"label {label}",
                        function_name=current_function,
                    ),
                )

        metadata = leading_assignment(code, METADATA_SIGIL)
        if metadata is not None:
            self._put(definitions, self._simple(line_idx, metadata.token, SymbolKind.METADATA, detail))

        attributes = self._attribute_group(code)
        if attributes is not None:
            self._put(definitions, self._simple(line_idx, attributes, SymbolKind.ATTRIBUTE_GROUP, detail))

        comdat = leading_assignment(code, COMDAT_SIGIL)
        if comdat is not None and match_word(code, comdat.value_start, "comdat") is not None:
            self._put(definitions, self._simple(line_idx, comdat.token, SymbolKind.COMDAT, detail))

    def _function_definition(
        self,
        line_idx: int,
        header: Token,
        detail: str,
        definitions: dict[SymbolKey, SymbolDefinition],
    ) -> None:
        scope = scope_starting_at(self.scopes, line_idx)
        end_line = scope.end_line if scope is not None and scope.name == header.text else line_idx
        body = Span(line_idx, 0, end_line, len(self.lines[end_line]))
        definition = SymbolDefinition(
            name=header.text,
            kind=SymbolKind.FUNCTION,
            range=body,
            selection_range=Span.on_line(line_idx, header.start, header.end),
            detail=detail,
            function_range=body,
        )
        self._put(definitions, definition, SymbolKind.FUNCTION, SymbolKind.GLOBAL_VALUE)

        line = self.lines[line_idx]
        open_pos = skip_spaces(line, header.end)
        close_pos = matching_paren(line, open_pos)
        params_start = open_pos + 1
        for offset, segment in split_parameters(line[params_start:close_pos]):
            param = parameter_name(segment)
            if param is None:
                continue
            start = params_start + offset + param.start
            self._put(
                definitions,
                SymbolDefinition(
                    name=param.text,
                    kind=SymbolKind.LOCAL_VALUE,
                    range=self._line_span(line_idx),
                    selection_range=Span.on_line(line_idx, start, start + len(param.text)),
                    detail=f"parameter {param.text}",
                    function_name=header.text,
                ),
            )

    @staticmethod
    def _attribute_group(code: str) -> Token | None:
        pos = starts_with_keyword(code, "attributes")
        if pos is None or char_at(code, pos) != ATTRIBUTE_SIGIL:
            return None
        end = scan_digits(code, pos + 1)
        if end is None or char_at(code, skip_spaces(code, end)) != "=":
            return None
        return Token(ATTRIBUTE_SIGIL, code[pos:end], pos, end)

