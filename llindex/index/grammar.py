"""Identifier grammar and line lexer shared by every scanner.

Sigil-prefixed names follow one grammar: ``[-a-zA-Z$._][-a-zA-Z$._0-9]*``,
a non-empty double-quoted form, or a bare decimal number. Metadata drops the
quoted form (``!"..."`` is a string literal) and attribute groups are numeric
only. Definition and reference scanning both go through this module so they
always agree on what an identifier is.

Scanning is plain character-class walking; nothing here backtracks.
"""

from __future__ import annotations

import string
from collections.abc import Callable, Iterator
from dataclasses import dataclass

DIGITS = frozenset(string.digits)
NAME_START = frozenset(string.ascii_letters + "-$._")
NAME_CHARS = NAME_START | DIGITS
WORD_CHARS = frozenset(string.ascii_letters + string.digits + "_")
SPACE_CHARS = frozenset(" \t\r\f\v")

LOCAL_SIGIL = "%"
GLOBAL_SIGIL = "@"
METADATA_SIGIL = "!"
ATTRIBUTE_SIGIL = "#"
COMDAT_SIGIL = "$"
COMMENT_CHAR = ";"
QUOTE_CHAR = '"'


def _scan_run(line: str, pos: int, chars: frozenset[str]) -> int:
    end = pos
    while end < len(line) and line[end] in chars:
        end += 1
    return end


def scan_digits(line: str, pos: int) -> int | None:
    """Return end of a decimal number starting at ``pos``."""
    end = _scan_run(line, pos, DIGITS)
    return end if end > pos else None


def scan_quoted(line: str, pos: int) -> int | None:
    """Return end (past the closing quote) of a non-empty quoted name."""
    if pos >= len(line) or line[pos] != QUOTE_CHAR:
        return None
    close = line.find(QUOTE_CHAR, pos + 1)
    if close <= pos + 1:
        return None
    return close + 1


def scan_identifier(line: str, pos: int) -> int | None:
    """Return end of a name, quoted name, or number starting at ``pos``."""
    if pos >= len(line):
        return None
    ch = line[pos]
    if ch in NAME_START:
        return _scan_run(line, pos + 1, NAME_CHARS)
    if ch == QUOTE_CHAR:
        return scan_quoted(line, pos)
    return scan_digits(line, pos)


def scan_metadata_name(line: str, pos: int) -> int | None:
    if pos >= len(line):
        return None
    if line[pos] in NAME_START:
        return _scan_run(line, pos + 1, NAME_CHARS)
    return scan_digits(line, pos)


SIGIL_SCANNERS: dict[str, Callable[[str, int], int | None]] = {
    GLOBAL_SIGIL: scan_identifier,
    LOCAL_SIGIL: scan_identifier,
    COMDAT_SIGIL: scan_identifier,
    METADATA_SIGIL: scan_metadata_name,
    ATTRIBUTE_SIGIL: scan_digits,
}


@dataclass(frozen=True)
class Token:
    """One sigil-prefixed identifier; ``text`` includes the sigil."""

    sigil: str
    text: str
    start: int
    end: int

    @property
    def bare(self) -> str:
        return self.text[1:]


def tokenize_sigils(line: str) -> list[Token]:
    """Scan ``line`` left to right for sigil-prefixed identifiers.

    Double-quoted text that does not directly follow a sigil is a string
    literal and is skipped whole.
    """
    tokens: list[Token] = []
    pos = 0
    length = len(line)
    while pos < length:
        ch = line[pos]
        scanner = SIGIL_SCANNERS.get(ch)
        if scanner is not None:
            end = scanner(line, pos + 1)
            if end is not None:
                tokens.append(Token(ch, line[pos:end], pos, end))
                pos = end
                continue
        if ch == QUOTE_CHAR:
            close = line.find(QUOTE_CHAR, pos + 1)
            pos = length if close < 0 else close + 1
            continue
        pos += 1
    return tokens


def code_part(line: str) -> str:
    """Return the text before the first ``;`` that is not inside a string."""
    in_string = False
    for idx, ch in enumerate(line):
        if ch == QUOTE_CHAR:
            in_string = not in_string
        elif ch == COMMENT_CHAR and not in_string:
            return line[:idx]
    return line


def is_blank_or_comment(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith(COMMENT_CHAR)


def skip_spaces(line: str, pos: int) -> int:
    return _scan_run(line, pos, SPACE_CHARS)


def char_at(line: str, pos: int) -> str:
    return line[pos] if 0 <= pos < len(line) else ""


def match_word(line: str, pos: int, word: str) -> int | None:
    """Return the end of ``word`` at ``pos`` when it stands as a whole word."""
    if not line.startswith(word, pos):
        return None
    if char_at(line, pos - 1) in WORD_CHARS:
        return None
    end = pos + len(word)
    if char_at(line, end) in WORD_CHARS:
        return None
    return end


def iter_words(line: str) -> Iterator[tuple[int, int]]:
    """Yield ``(start, end)`` of word-character runs outside string literals."""
    pos = 0
    length = len(line)
    while pos < length:
        ch = line[pos]
        if ch == QUOTE_CHAR:
            close = line.find(QUOTE_CHAR, pos + 1)
            pos = length if close < 0 else close + 1
            continue
        if ch in WORD_CHARS:
            end = _scan_run(line, pos, WORD_CHARS)
            yield pos, end
            pos = end
            continue
        pos += 1


def has_word(line: str, word: str) -> bool:
    return any(line[s:e] == word for s, e in iter_words(line))


def starts_with_keyword(line: str, keyword: str) -> int | None:
    """Match ``^\\s*keyword\\s+`` and return the position after the spaces."""
    pos = skip_spaces(line, 0)
    end = match_word(line, pos, keyword)
    if end is None:
        return None
    after = skip_spaces(line, end)
    return after if after > end else None


def preceded_by_word(line: str, pos: int, word: str, min_spaces: int = 0) -> bool:
    """True when ``word`` then at least ``min_spaces`` spaces end at ``pos``."""
    cursor = pos
    while cursor > 0 and line[cursor - 1] in SPACE_CHARS:
        cursor -= 1
    if pos - cursor < min_spaces:
        return False
    start = cursor - len(word)
    return start >= 0 and match_word(line, start, word) == cursor


def follows_keyword(line: str, pos: int, keyword: str) -> bool:
    """True when ``keyword`` and at least one space precede ``pos``."""
    return preceded_by_word(line, pos, keyword, min_spaces=1)


@dataclass(frozen=True)
class Assignment:
    """``^\\s*<sigil><name>\\s*=`` head of a line."""

    token: Token
    value_start: int


def leading_assignment(line: str, sigil: str) -> Assignment | None:
    """Match a line that assigns to a ``sigil``-prefixed name."""
    pos = skip_spaces(line, 0)
    if char_at(line, pos) != sigil:
        return None
    end = SIGIL_SCANNERS[sigil](line, pos + 1)
    if end is None:
        return None
    eq = skip_spaces(line, end)
    if char_at(line, eq) != "=":
        return None
    return Assignment(Token(sigil, line[pos:end], pos, end), skip_spaces(line, eq + 1))


def leading_label(line: str) -> str | None:
    """Return the label name when ``line`` starts with ``name:`` at column 0."""
    end = scan_identifier(line, 0)
    if end is None or char_at(line, end) != ":":
        return None
    return line[:end]


def label_definition(line: str) -> str | None:
    """Match a label line: ``name:`` followed only by spaces or a comment."""
    name = leading_label(line)
    if name is None:
        return None
    rest = skip_spaces(line, len(name) + 1)
    if rest < len(line) and line[rest] != COMMENT_CHAR:
        return None
    return name


def function_header(line: str, keyword: str) -> Token | None:
    """Match ``keyword ... @name(`` and return the ``@name`` token.

    The first global token directly followed by ``(`` names the function.
    """
    start = starts_with_keyword(line, keyword)
    if start is None:
        return None
    for token in tokenize_sigils(line[start:]):
        if token.sigil != GLOBAL_SIGIL:
            continue
        if char_at(line, skip_spaces(line, start + token.end)) == "(":
            return Token(token.sigil, token.text, start + token.start, start + token.end)
    return None


def matching_paren(line: str, open_pos: int) -> int:
    """Return index of the ``)`` closing ``line[open_pos]``, or ``len(line)``."""
    depth = 0
    pos = open_pos
    while pos < len(line):
        ch = line[pos]
        if ch == QUOTE_CHAR:
            close = line.find(QUOTE_CHAR, pos + 1)
            if close < 0:
                return len(line)
            pos = close + 1
            continue
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return pos
        pos += 1
    return len(line)
