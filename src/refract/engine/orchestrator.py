"""Build orchestration for a caching file filter.

A :class:`Filter` is constructed once per transform step and serves many
builds. Each build walks the whole input tree, one file at a time:

* directories are mirrored into the output and scratch cache trees;
* processable files are resolved against the in-memory cache, then the
  persisted cache, and transformed only on a miss;
* everything else is linked or copied through unchanged.

Teardown merges the in-memory cache into the persisted cache before the
scratch directories are removed.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import time
from dataclasses import replace
from pathlib import Path, PurePosixPath
from types import TracebackType

from refract.cache import EntryHasher, MemoryCache, PersistedCache, persisted_cache_dir, promote
from refract.config import FilterConfig, config_fingerprint, validate_config
from refract.constants.cache import CACHE_SOURCE_MEMORY, CACHE_SOURCE_PERSISTED
from refract.constants.tempdirs import OUTPUT_DIR_PREFIX, OUTPUT_TEMP_SUFFIX, SCRATCH_CACHE_DIR_PREFIX
from refract.engine.discovery import walk_tree
from refract.engine.hooks import FilterHooks, call_transform
from refract.exceptions import CacheIOError, ConfigurationError, TransformError
from refract.io import link_or_copy, write_bytes_replacing
from refract.io.tempdirs import find_base_temp_dir, make_or_remake, make_or_reuse, remove
from refract.model import BuildStats, CacheEntry, CacheHit, TransformResult
from refract.types import TransformFn, TransformOutput

logger = logging.getLogger(__name__)


class Filter:
    """Incremental, cached per-file transform over a directory tree."""

    def __init__(
        self,
        config: FilterConfig,
        hooks: FilterHooks | TransformFn,
        *,
        base_temp_dir: Path | None = None,
    ) -> None:
        validate_config(config)
        assert config.cache_id is not None
        if not isinstance(hooks, FilterHooks):
            hooks = FilterHooks(transform=hooks)

        self.config = config
        self.hooks = hooks
        self.hasher = EntryHasher(hash_content=config.cache_by_content)
        self.memory_cache = MemoryCache()
        self.persisted_cache: PersistedCache | None = None

        self.input_path: Path | None = None
        self.output_path: Path | None = None
        self.cache_path: Path | None = None
        self.last_stats: BuildStats | None = None

        self._base_temp_dir = base_temp_dir
        self._output_counter = itertools.count()
        self._needs_cleanup = False

    def initialize(self) -> None:
        """Prepare fresh output and reusable scratch directories, then load the persisted cache."""
        base = self._resolve_base_temp_dir()
        previous_cache_path = self.cache_path
        try:
            self.output_path = make_or_remake(OUTPUT_DIR_PREFIX, self.output_path, base=base)
            self.cache_path = make_or_reuse(SCRATCH_CACHE_DIR_PREFIX, self.cache_path, base=base)
        except OSError as exc:
            raise CacheIOError(f"Cannot prepare scratch directories under {base}: {exc}") from exc

        if self.cache_path != previous_cache_path and len(self.memory_cache):
            logger.debug("Scratch cache directory changed; dropping %d in-memory entries", len(self.memory_cache))
            self.memory_cache.clear()

        if self.config.persist:
            self._persisted().ensure_loaded()
        self._needs_cleanup = True

    def run(self, input_path: Path) -> Path:
        """Run one full build against *input_path* and return the output directory."""
        return asyncio.run(self.build(input_path))

    async def build(self, input_path: Path) -> Path:
        """Async form of :meth:`run` for callers that already own an event loop."""
        input_path = input_path.resolve()
        if not input_path.is_dir():
            raise ConfigurationError(f"Input path does not exist or is not a directory: {input_path}")

        self.initialize()
        self.input_path = input_path
        await self.rebuild()
        assert self.output_path is not None
        return self.output_path

    def teardown(self) -> None:
        """Merge new in-memory entries into the persisted cache and release scratch directories."""
        if not self._needs_cleanup:
            return
        try:
            if self.persisted_cache is not None and len(self.memory_cache) and self.cache_path is not None:
                self.persisted_cache.merge(self.memory_cache, self.cache_path)
        finally:
            self.memory_cache.clear()
            remove(self.output_path)
            remove(self.cache_path)
            self.output_path = None
            self.cache_path = None
            self._needs_cleanup = False

    def __enter__(self) -> Filter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.teardown()

    async def rebuild(self) -> BuildStats:
        """Walk the input tree once, strictly sequentially."""
        input_path, output_path, cache_path = self._session_paths()
        stats = BuildStats()
        self.last_stats = stats
        started_at = time.perf_counter()
        try:
            for relative_path in walk_tree(input_path):
                if relative_path.endswith("/"):
                    (output_path / relative_path).mkdir(parents=True, exist_ok=True)
                    (cache_path / relative_path).mkdir(parents=True, exist_ok=True)
                    stats.directories += 1
                elif self.can_process_file(relative_path):
                    await self.process_and_cache_file(relative_path, stats)
                else:
                    link_or_copy(input_path / relative_path, output_path / relative_path)
                    stats.passed_through += 1
        finally:
            stats.duration_seconds = time.perf_counter() - started_at
        self.hasher.digest_cache.prune()

        logger.info(
            "Build of %s: %d memory hits, %d persisted hits, %d transformed, %d passed through",
            input_path,
            stats.memory_hits,
            stats.persisted_hits,
            stats.misses,
            stats.passed_through,
        )
        return stats

    def can_process_file(self, relative_path: str) -> bool:
        return self.dest_file_path(relative_path) is not None

    def dest_file_path(self, relative_path: str) -> str | None:
        if self.hooks.dest_file_path is not None:
            return self.hooks.dest_file_path(relative_path)
        return self.config.dest_file_path(relative_path)

    def hash_entry(self, entry: CacheEntry) -> str:
        """Compute the current key of *entry* against the input tree."""
        input_path, _, _ = self._session_paths()
        if self.hooks.hash_entry is not None:
            return self.hooks.hash_entry(input_path, entry, self.hasher.compute_key)
        return self.hasher.compute_key(input_path, entry)

    def resolve(self, relative_path: str) -> CacheHit | None:
        """Return a validated hit for *relative_path*, in-memory tier first."""
        entry = self.memory_cache.get(relative_path)
        if entry is not None and entry.hash == self.hash_entry(entry):
            return CacheHit(source=CACHE_SOURCE_MEMORY, entry=entry)

        if self.persisted_cache is not None:
            entry = self.persisted_cache.get(relative_path)
            if entry is not None and entry.hash == self.hash_entry(entry):
                return CacheHit(source=CACHE_SOURCE_PERSISTED, entry=entry)
        return None

    async def process_and_cache_file(self, relative_path: str, stats: BuildStats) -> None:
        _, output_path, cache_path = self._session_paths()

        hit = self.resolve(relative_path)
        if hit is not None:
            if hit.source == CACHE_SOURCE_PERSISTED:
                assert self.persisted_cache is not None
                promote(self.persisted_cache.cache_dir, hit.entry, cache_path)
                self.memory_cache.put(relative_path, hit.entry)
                stats.persisted_hits += 1
            else:
                stats.memory_hits += 1
            logger.debug("Cache hit (%s) for %s", hit.source, relative_path)
            promote(cache_path, hit.entry, output_path)
            return

        logger.debug("Cache miss for %s", relative_path)
        stats.misses += 1
        # The scratch outputs of a previous entry are about to be overwritten.
        self.memory_cache.discard(relative_path)
        entry = await self.process_file(relative_path)
        promote(cache_path, entry, output_path)
        entry = replace(entry, hash=self.hash_entry(entry))
        self.memory_cache.put(relative_path, entry)
        stats.processed.append(relative_path)

    async def process_file(self, relative_path: str) -> CacheEntry:
        """Transform one file into the scratch cache and describe what it produced.

        Output is never written to the output directory here. Failures raise
        :class:`TransformError` naming the absolute source path.
        """
        input_path, _, _ = self._session_paths()
        source = input_path / relative_path
        raw = source.read_bytes()

        try:
            content = raw.decode(self.config.input_encoding)
            result = await call_transform(self.hooks.transform, content, relative_path)
        except Exception as exc:
            raise TransformError.from_exception(exc, file=source) from exc

        input_files, outputs = self._normalize_result(relative_path, result, source)
        try:
            encoded = {name: text.encode(self.config.output_encoding) for name, text in outputs.items()}
        except UnicodeEncodeError as exc:
            raise TransformError.from_exception(exc, file=source) from exc

        for output_file, data in encoded.items():
            self._write_output(output_file, data)
        return CacheEntry(input_files=input_files, output_files=tuple(encoded))

    def _normalize_result(
        self,
        relative_path: str,
        result: TransformOutput,
        source: Path,
    ) -> tuple[tuple[str, ...], dict[str, str]]:
        if isinstance(result, str):
            dest = self.dest_file_path(relative_path)
            assert dest is not None
            return (relative_path,), {dest: result}

        if not isinstance(result, TransformResult):
            raise TransformError(
                f"Transform returned {type(result).__name__}, expected str or TransformResult",
                file=source,
            )

        outputs = dict(result.outputs)
        for output_file, text in outputs.items():
            if not _is_contained(output_file):
                raise TransformError(f"Output path escapes the output tree: {output_file!r}", file=source)
            if not isinstance(text, str):
                raise TransformError(
                    f"Output {output_file!r} is {type(text).__name__}, expected str",
                    file=source,
                )
        input_files = tuple(result.input_files) or (relative_path,)
        return input_files, outputs

    def _write_output(self, output_file: str, data: bytes) -> None:
        _, _, cache_path = self._session_paths()
        destination = cache_path / output_file
        temp_path = destination.with_name(f"{destination.name}.{next(self._output_counter)}{OUTPUT_TEMP_SUFFIX}")
        write_bytes_replacing(destination, data, temp_path=temp_path)

    def _persisted(self) -> PersistedCache:
        if self.persisted_cache is None:
            assert self.config.cache_id is not None
            cache_root = self.config.cache_root or self._resolve_base_temp_dir()
            self.persisted_cache = PersistedCache(
                persisted_cache_dir(cache_root, self.config.cache_id),
                cache_id=self.config.cache_id,
                config_fingerprint=config_fingerprint(self.config),
            )
        return self.persisted_cache

    def _resolve_base_temp_dir(self) -> Path:
        if self._base_temp_dir is None:
            try:
                self._base_temp_dir = find_base_temp_dir()
            except OSError as exc:
                raise CacheIOError(f"Cannot prepare base temp directory: {exc}") from exc
        return self._base_temp_dir

    def _session_paths(self) -> tuple[Path, Path, Path]:
        if self.input_path is None or self.output_path is None or self.cache_path is None:
            raise RuntimeError("Filter has no active build session; call run() first")
        return self.input_path, self.output_path, self.cache_path


def _is_contained(relative_path: str) -> bool:
    path = PurePosixPath(relative_path)
    return bool(relative_path) and not path.is_absolute() and ".." not in path.parts
