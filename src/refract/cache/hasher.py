"""Cache keys for entries, by file identity or by content digest."""

from __future__ import annotations

import hashlib
import stat as stat_module
from pathlib import Path

from refract.cache.digest import DigestCache
from refract.constants.cache import KEY_SEPARATOR, MISSING_INPUT_IDENTITY
from refract.model import CacheEntry


class EntryHasher:
    """Compute the key of a cache entry over its declared input files.

    In the default mode each input contributes a hash of its relative path,
    size and ``mtime_ns``; no file content is read. With ``hash_content``
    each input contributes the SHA-256 of its bytes, memoized in a
    :class:`DigestCache` while its mtime is unchanged.

    Per-input identities are comma-joined in ``input_files`` order, so the
    order is part of the key.
    """

    def __init__(self, *, hash_content: bool = False, digest_cache: DigestCache | None = None) -> None:
        self.hash_content = hash_content
        self.digest_cache = digest_cache if digest_cache is not None else DigestCache()

    def compute_key(self, src_dir: Path, entry: CacheEntry) -> str:
        return KEY_SEPARATOR.join(self.identity(src_dir, relative_path) for relative_path in entry.input_files)

    def identity(self, src_dir: Path, relative_path: str) -> str:
        """Return the identity of one input, recursing into directories."""
        path = src_dir / relative_path
        try:
            stat = path.stat()
        except FileNotFoundError:
            return MISSING_INPUT_IDENTITY

        if stat_module.S_ISDIR(stat.st_mode):
            children = sorted(child.name for child in path.iterdir())
            parts = [self.identity(src_dir, f"{relative_path.rstrip('/')}/{name}") for name in children]
            return _sha256_text("\0".join([relative_path, *parts]))

        if self.hash_content:
            return self.digest_cache.digest(path, stat)
        return _sha256_text("\0".join([relative_path, str(stat.st_size), str(stat.st_mtime_ns)]))


def _sha256_text(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8", errors="surrogateescape")).hexdigest()
