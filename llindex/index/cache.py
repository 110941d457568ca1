"""Per-document snapshot cache of built indexes.

Owned by whoever integrates with the editor; nothing in the index core
reaches for a process-wide instance. Entries are replaced with fully built
indexes only, so a reader sees either the old or the new snapshot.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Callable, Hashable

from .build import build_index
from .types import SymbolIndex

logger = logging.getLogger(__name__)

DEFAULT_CACHE_MAX_ENTRIES = 64


class SnapshotCache:
    """Maps document identity to ``(version, index)``.

    A matching version returns the cached index; any other version rebuilds
    and replaces it. ``max_entries`` bounds the cache, evicting the least
    recently used document; ``None`` means unbounded.
    """

    def __init__(
        self,
        max_entries: int | None = DEFAULT_CACHE_MAX_ENTRIES,
        builder: Callable[[str, int], SymbolIndex] = build_index,
    ) -> None:
        self.max_entries = None if max_entries is None else max(1, int(max_entries))
        self._builder = builder
        self._entries: OrderedDict[Hashable, tuple[int, SymbolIndex]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, document_id: Hashable) -> bool:
        return document_id in self._entries

    def get(self, document_id: Hashable) -> SymbolIndex | None:
        """Return the cached index for ``document_id`` without building."""
        entry = self._entries.get(document_id)
        return None if entry is None else entry[1]

    def versions(self) -> dict[Hashable, int]:
        return {document_id: version for document_id, (version, _index) in self._entries.items()}

    def get_or_build(self, document_id: Hashable, text: str, version: int) -> SymbolIndex:
        cached = self._entries.get(document_id)
        if cached is not None and cached[0] == version:
            self._entries.move_to_end(document_id)
            logger.debug(f"Snapshot cache hit for {document_id!r} at version {version}")
            return cached[1]

        index = self._builder(text, version)
        self._entries[document_id] = (version, index)
        self._entries.move_to_end(document_id)
        logger.debug(f"Rebuilt index for {document_id!r} at version {version}")
        if self.max_entries is not None:
            while len(self._entries) > self.max_entries:
                evicted, _entry = self._entries.popitem(last=False)
                logger.debug(f"Evicted index for {evicted!r}")
        return index

    def invalidate(self, document_id: Hashable) -> None:
        if self._entries.pop(document_id, None) is not None:
            logger.debug(f"Invalidated index for {document_id!r}")

    def invalidate_all(self) -> None:
        self._entries.clear()
        logger.debug("Cleared all cached indexes")
