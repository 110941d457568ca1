"""Public package surface for llindex.

Exports ``main`` for programmatic CLI invocation and the index entry points.
Most implementation lives under ``llindex.index``.
"""

from __future__ import annotations

from .index import (
    SnapshotCache,
    build_index,
    find_definition,
    find_references,
    list_outline_symbols,
    resolve_occurrence_at,
)


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = [
    "SnapshotCache",
    "build_index",
    "find_definition",
    "find_references",
    "list_outline_symbols",
    "main",
    "resolve_occurrence_at",
]
