"""File-level helpers for hashing and output writes."""

from __future__ import annotations

import hashlib
import os
from contextlib import suppress
from pathlib import Path

from refract.constants.cache import FILE_HASH_CHUNK_SIZE


def file_sha256(path: Path) -> str:
    """Return SHA-256 hex digest for a file."""
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(FILE_HASH_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def write_bytes_replacing(path: Path, data: bytes, *, temp_path: Path) -> None:
    """Write *data* through *temp_path* and rename it over *path*.

    An existing file or link at *path* is replaced, never written through.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        temp_path.write_bytes(data)
    except OSError:
        with suppress(FileNotFoundError):
            temp_path.unlink()
        raise
    os.replace(temp_path, path)
