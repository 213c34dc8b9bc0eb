"""Scratch directory allocation for build sessions."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path

from refract.constants.tempdirs import BASE_TEMP_DIRNAME


def find_base_temp_dir(cwd: Path | None = None) -> Path:
    """Return the resolved ``tmp`` directory under *cwd*, creating it when missing."""
    base = (cwd or Path.cwd()) / BASE_TEMP_DIRNAME
    if base.exists() and not base.is_dir():
        raise NotADirectoryError(f"Base temp path is not a directory: {base}")
    base.mkdir(exist_ok=True)
    return base.resolve()


def make_or_remake(prefix: str, current: Path | None, *, base: Path) -> Path:
    """Return a fresh empty directory, removing *current* first."""
    if current is not None:
        remove(current)
    return Path(tempfile.mkdtemp(prefix=prefix, dir=base))


def make_or_reuse(prefix: str, current: Path | None, *, base: Path) -> Path:
    """Return *current* when it still exists, otherwise a new directory."""
    if current is not None and current.is_dir():
        return current
    return Path(tempfile.mkdtemp(prefix=prefix, dir=base))


def remove(path: Path | None) -> None:
    """Delete a scratch directory tree if present."""
    if path is None or not path.exists():
        return
    shutil.rmtree(path)
