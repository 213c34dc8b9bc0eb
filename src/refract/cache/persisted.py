"""Cross-invocation cache backed by a manifest and durable output copies."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from refract.cache.materializer import durable_promote
from refract.cache.memory import MemoryCache
from refract.constants.cache import MANIFEST_FILENAME, MANIFEST_VERSION, PERSISTED_CACHE_DIRNAME
from refract.exceptions import CacheIOError
from refract.io import read_manifest, write_manifest
from refract.model import CacheEntry
from refract.types import ManifestPayload
from refract.utils import cache_dir_name

logger = logging.getLogger(__name__)


class PersistedCache:
    """Durable mapping of source-relative path to :class:`CacheEntry`.

    Every entry's ``output_files`` exist as real files under ``cache_dir``,
    so hits stay valid after a session's scratch directories are removed.
    The map only changes through :meth:`merge`, which runs at teardown.
    """

    def __init__(self, cache_dir: Path, *, cache_id: str, config_fingerprint: str) -> None:
        self.cache_dir = cache_dir
        self.cache_id = cache_id
        self.config_fingerprint = config_fingerprint
        self._entries: dict[str, CacheEntry] = {}
        self._loaded = False

    @property
    def manifest_path(self) -> Path:
        return self.cache_dir / MANIFEST_FILENAME

    @property
    def loaded(self) -> bool:
        return self._loaded

    def load(self) -> None:
        """Prepare the cache directory and read the manifest.

        A missing manifest means an empty cache. An unreadable directory or
        manifest raises :class:`CacheIOError`.
        """
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CacheIOError(f"Cannot prepare persisted cache directory {self.cache_dir}: {exc}") from exc

        self._entries = self._read_manifest()
        self._loaded = True
        logger.info("Loaded %d persisted cache entries from %s", len(self._entries), self.cache_dir)

    def ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def get(self, relative_path: str) -> CacheEntry | None:
        return self._entries.get(relative_path)

    def items(self) -> Iterator[tuple[str, CacheEntry]]:
        return iter(list(self._entries.items()))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, relative_path: object) -> bool:
        return relative_path in self._entries

    def merge(self, memory: MemoryCache, scratch_dir: Path) -> int:
        """Absorb new or changed in-memory entries and rewrite the manifest.

        Entries whose hash already matches are skipped without copying.
        Returns the number of entries replaced.
        """
        self.ensure_loaded()
        changed = 0
        for relative_path, entry in memory.items():
            current = self._entries.get(relative_path)
            if current is not None and current.hash == entry.hash:
                continue
            durable_promote(scratch_dir, entry, self.cache_dir)
            self._entries[relative_path] = entry
            if current is not None:
                self._remove_dropped_outputs(current, entry)
            changed += 1

        if changed:
            self.save()
        logger.info("Merged %d of %d in-memory entries into %s", changed, len(memory), self.cache_dir)
        return changed

    def save(self) -> None:
        """Serialize the full map to the manifest file."""
        write_manifest(self.manifest_path, self.to_payload())

    def to_payload(self) -> ManifestPayload:
        return {
            "version": MANIFEST_VERSION,
            "cache_id": self.cache_id,
            "config_fingerprint": self.config_fingerprint,
            "entries": {path: entry.to_dict() for path, entry in sorted(self._entries.items())},
        }

    def _remove_dropped_outputs(self, previous: CacheEntry, replacement: CacheEntry) -> None:
        dropped = set(previous.output_files) - set(replacement.output_files)
        if not dropped:
            return
        # Another entry may have claimed the same output name since.
        dropped -= {name for entry in self._entries.values() for name in entry.output_files}
        for name in sorted(dropped):
            (self.cache_dir / name).unlink(missing_ok=True)
            logger.debug("Removed stale persisted output %s", name)

    def _read_manifest(self) -> dict[str, CacheEntry]:
        try:
            payload = read_manifest(self.manifest_path)
        except FileNotFoundError:
            return {}
        except ValueError as exc:
            logger.warning("Ignoring unreadable cache manifest %s: %s", self.manifest_path, exc)
            return {}
        except OSError as exc:
            raise CacheIOError(f"Cannot read cache manifest {self.manifest_path}: {exc}") from exc

        if not isinstance(payload, dict) or payload.get("version") != MANIFEST_VERSION:
            logger.warning("Ignoring cache manifest %s with unsupported format", self.manifest_path)
            return {}
        if payload.get("config_fingerprint") != self.config_fingerprint:
            logger.info("Filter config changed since %s was written; starting a fresh cache", self.manifest_path)
            return {}
        return self._normalize_entries(payload.get("entries"))

    def _normalize_entries(self, raw_entries: object) -> dict[str, CacheEntry]:
        if not isinstance(raw_entries, dict):
            return {}

        entries: dict[str, CacheEntry] = {}
        for key, value in raw_entries.items():
            entry = _parse_entry(value)
            if not isinstance(key, str) or entry is None:
                logger.warning("Dropping malformed cache manifest row %r", key)
                continue
            missing = [name for name in entry.output_files if not (self.cache_dir / name).is_file()]
            if missing:
                logger.warning("Dropping cache entry %s with missing outputs: %s", key, ", ".join(missing))
                continue
            entries[key] = entry
        return entries


def _parse_entry(value: object) -> CacheEntry | None:
    if not isinstance(value, dict):
        return None

    input_files = value.get("input_files")
    output_files = value.get("output_files")
    hash_value = value.get("hash")

    if not isinstance(hash_value, str):
        return None
    if not _is_string_list(input_files) or not _is_string_list(output_files):
        return None

    return CacheEntry(input_files=tuple(input_files), output_files=tuple(output_files), hash=hash_value)


def _is_string_list(value: object) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def persisted_cache_dir(cache_root: Path, cache_id: str) -> Path:
    """Return the deterministic persisted cache directory for *cache_id*."""
    return cache_root / PERSISTED_CACHE_DIRNAME / cache_dir_name(cache_id)
