"""Per-instance in-memory cache of transform results."""

from __future__ import annotations

from collections.abc import Iterator

from refract.model import CacheEntry


class MemoryCache:
    """Source-relative path to :class:`CacheEntry`, valid across builds of one engine.

    Entries reference files in the current scratch cache directory, so the
    cache is cleared whenever that directory is released.
    """

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}

    def get(self, relative_path: str) -> CacheEntry | None:
        return self._entries.get(relative_path)

    def put(self, relative_path: str, entry: CacheEntry) -> None:
        self._entries[relative_path] = entry

    def discard(self, relative_path: str) -> None:
        self._entries.pop(relative_path, None)

    def items(self) -> Iterator[tuple[str, CacheEntry]]:
        return iter(list(self._entries.items()))

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, relative_path: object) -> bool:
        return relative_path in self._entries
