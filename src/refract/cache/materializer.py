"""Turn cache entries into files under a target directory."""

from __future__ import annotations

from pathlib import Path

from refract.io import dereferenced_copy, link_or_copy
from refract.model import CacheEntry


def promote(cache_dir: Path, entry: CacheEntry, output_dir: Path) -> None:
    """Link each of the entry's outputs from *cache_dir* into *output_dir*.

    Falls back to a byte copy where the filesystem refuses the link.
    """
    for relative_path in entry.output_files:
        destination = output_dir / relative_path
        destination.parent.mkdir(parents=True, exist_ok=True)
        link_or_copy(cache_dir / relative_path, destination)


def durable_promote(cache_dir: Path, entry: CacheEntry, persist_dir: Path) -> None:
    """Copy the real bytes of each output into *persist_dir*, replacing stale files."""
    for relative_path in entry.output_files:
        destination = persist_dir / relative_path
        destination.parent.mkdir(parents=True, exist_ok=True)
        dereferenced_copy(cache_dir / relative_path, destination)
