"""Link-or-copy primitives used to materialize files.

Links always point at the fully resolved source, so a hard link or a link
chain through a symlinked directory is never created.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def link_or_copy(src: Path, dst: Path) -> None:
    """Symlink *dst* to the real path of *src*, copying bytes when linking fails."""
    real_src = src.resolve(strict=True)
    _clear_destination(dst)
    try:
        os.symlink(real_src, dst)
    except OSError as exc:
        logger.debug("Symlink %s -> %s failed (%s); copying instead", dst, real_src, exc)
        shutil.copy2(real_src, dst)


def dereferenced_copy(src: Path, dst: Path) -> None:
    """Copy the real bytes behind *src* to *dst*, never producing a link."""
    real_src = src.resolve(strict=True)
    if dst.is_file() and not dst.is_symlink() and dst.resolve() == real_src:
        return
    _clear_destination(dst)
    shutil.copy2(real_src, dst, follow_symlinks=True)


def _clear_destination(dst: Path) -> None:
    if dst.is_symlink() or dst.is_file():
        dst.unlink()
