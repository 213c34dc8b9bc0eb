"""Shared pytest fixtures for filter builds."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from refract.config import FilterConfig
from refract.engine.hooks import FilterHooks
from refract.engine.orchestrator import Filter

FIXED_MTIME_NS = 1_399_424_542_459_000_000


class RecordingTransform:
    """Transform that records every call and delegates to *fn* (identity by default)."""

    def __init__(self, fn: Callable[[str, str], Any] | None = None) -> None:
        self.fn = fn
        self.calls: list[str] = []

    def __call__(self, content: str, relative_path: str) -> Any:
        self.calls.append(relative_path)
        if self.fn is None:
            return content
        return self.fn(content, relative_path)

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture()
def recording_transform() -> type[RecordingTransform]:
    """Return the factory for transforms that record each relative path they see."""
    return RecordingTransform


@pytest.fixture()
def set_mtime() -> Callable[..., None]:
    """Return a helper pinning a file's mtime to a fixed instant plus ``offset_ns``."""

    def pin(path: Path, offset_ns: int = 0) -> None:
        mtime_ns = FIXED_MTIME_NS + offset_ns
        os.utime(path, ns=(mtime_ns, mtime_ns))

    return pin


@pytest.fixture()
def temp_base(tmp_path: Path) -> Path:
    """Return the base directory for scratch and persisted caches."""
    base = tmp_path / "tmp"
    base.mkdir()
    return base


@pytest.fixture()
def make_filter(temp_base: Path) -> Iterator[Callable[..., Filter]]:
    """Build filters rooted in ``temp_base`` and tear them all down afterwards."""
    created: list[Filter] = []

    def factory(hooks: FilterHooks | Callable[[str, str], Any], **config_kwargs: Any) -> Filter:
        config_kwargs.setdefault("cache_id", "test-filter")
        config_kwargs.setdefault("extensions", ("js",))
        build_filter = Filter(FilterConfig(**config_kwargs), hooks, base_temp_dir=temp_base)
        created.append(build_filter)
        return build_filter

    yield factory
    for build_filter in created:
        build_filter.teardown()
