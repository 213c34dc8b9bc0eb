"""Reading and atomically replacing persisted cache manifests."""

from __future__ import annotations

import json
import os
import tempfile
from contextlib import suppress
from pathlib import Path

from refract.constants.cache import MANIFEST_TEMP_PREFIX, MANIFEST_TEMP_SUFFIX
from refract.constants.config import DEFAULT_ENCODING
from refract.types import ManifestPayload


def read_manifest(path: Path) -> object:
    """Parse the manifest at *path*; shape checks are left to the caller."""
    return json.loads(path.read_bytes().decode(DEFAULT_ENCODING))


def write_manifest(path: Path, payload: ManifestPayload) -> None:
    """Replace the manifest at *path* without exposing a partial file.

    The payload is rendered before any file is created, so an unserializable
    payload leaves the directory untouched.
    """
    rendered = (json.dumps(payload, indent=2, sort_keys=True) + "\n").encode(DEFAULT_ENCODING)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, temp_name = tempfile.mkstemp(prefix=MANIFEST_TEMP_PREFIX, suffix=MANIFEST_TEMP_SUFFIX, dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(rendered)
        os.replace(temp_name, path)
    except OSError:
        with suppress(FileNotFoundError):
            os.unlink(temp_name)
        raise
