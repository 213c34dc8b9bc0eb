"""Directory tree enumeration for builds."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def walk_tree(root: Path) -> list[str]:
    """Return every entry under *root* as a sorted relative POSIX path.

    Directories end with ``/`` and precede their contents. Dangling
    symlinks are skipped.
    """
    entries: list[str] = []
    _walk(root, "", entries)
    return entries


def _walk(directory: Path, prefix: str, entries: list[str]) -> None:
    for child in sorted(directory.iterdir(), key=lambda path: path.name):
        relative = f"{prefix}{child.name}"
        if child.is_dir():
            entries.append(f"{relative}/")
            _walk(child, f"{relative}/", entries)
        elif child.exists():
            entries.append(relative)
        else:
            logger.warning("Skipping dangling symlink: %s", child)
