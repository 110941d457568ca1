"""Two-pass index construction over one document snapshot.

Pass one finds function scopes; pass two extracts definitions and references
with the enclosing function of each line known up front.
"""

from __future__ import annotations

import logging

from .definitions import DefinitionExtractor
from .grammar import is_blank_or_comment
from .references import extract_references
from .scopes import detect_function_scopes, function_at
from .types import SymbolDefinition, SymbolIndex, SymbolKey, SymbolReference

logger = logging.getLogger(__name__)


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, dropping a trailing ``\\r`` from each line."""
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


def build_index(text: str, version: int = 0) -> SymbolIndex:
    """Build a fresh :class:`SymbolIndex` for ``text``.

    Pure over its inputs. Malformed lines contribute nothing; nothing raises.
    """
    lines = split_lines(text)
    scopes = detect_function_scopes(lines)
    extractor = DefinitionExtractor(lines, scopes)
    definitions: dict[SymbolKey, SymbolDefinition] = {}
    references: list[SymbolReference] = []

    for line_idx, line in enumerate(lines):
        if is_blank_or_comment(line):
            continue
        current_function = function_at(scopes, line_idx)
        extractor.extract(line_idx, current_function, definitions)
        references.extend(extract_references(line, line_idx, current_function))

    index = SymbolIndex.create(version, lines, definitions, references, scopes)
    if index.unclosed_scopes:
        logger.debug(f"{index.unclosed_scopes} function body(ies) left open at end of input (version {version})")
    logger.debug(
        f"Indexed version {version}: {len(scopes)} scopes, "
        f"{len(definitions)} definitions, {len(references)} references"
    )
    return index
