"""Memoized content digests keyed by file path and modification time."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from refract.io import file_sha256

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DigestRecord:
    """Digest of a file as of one ``(mtime_ns, size)`` observation."""

    path: str
    mtime_ns: int
    size: int
    digest: str


class DigestCache:
    """Avoid rehashing files whose modification time has not moved.

    Records not consulted since the last :meth:`prune` are dropped by it, so
    paths from earlier input snapshots do not accumulate.
    """

    def __init__(self) -> None:
        self._records: dict[str, DigestRecord] = {}
        self._consulted: set[str] = set()

    def digest(self, path: Path, stat: os.stat_result | None = None) -> str:
        """Return the SHA-256 of *path*, reading the file only when it changed."""
        key = os.fspath(path)
        if stat is None:
            stat = path.stat()
        self._consulted.add(key)
        record = self._records.get(key)
        if record is not None and record.mtime_ns == stat.st_mtime_ns and record.size == stat.st_size:
            return record.digest

        digest = file_sha256(path)
        self._records[key] = DigestRecord(path=key, mtime_ns=stat.st_mtime_ns, size=stat.st_size, digest=digest)
        logger.debug("Hashed content of %s", key)
        return digest

    def prune(self) -> int:
        """Drop records not consulted since the previous prune and return how many went."""
        stale = self._records.keys() - self._consulted
        for key in stale:
            del self._records[key]
        self._consulted.clear()
        if stale:
            logger.debug("Pruned %d digest records", len(stale))
        return len(stale)

    def clear(self) -> None:
        self._records.clear()
        self._consulted.clear()

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, (str, os.PathLike)) and os.fspath(path) in self._records
