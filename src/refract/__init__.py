"""Incremental, content-addressed caching for per-file tree transforms.

The usual entry points are re-exported here::

    from refract import Filter, FilterConfig

    with Filter(FilterConfig(cache_id="minify", extensions=("js",)), minify) as build_filter:
        output_dir = build_filter.run(source_dir)
"""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version
from typing import Any

__all__ = ["Filter", "FilterConfig", "FilterHooks", "TransformResult", "__version__"]

try:
    __version__ = version("refract")
except PackageNotFoundError:
    __version__ = "0.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())


def __getattr__(name: str) -> Any:
    """Resolve the public API on first access so submodules import without the engine."""
    if name in {"Filter", "FilterHooks"}:
        from refract import engine

        return getattr(engine, name)
    if name == "FilterConfig":
        from refract.config import FilterConfig

        return FilterConfig
    if name == "TransformResult":
        from refract.model import TransformResult

        return TransformResult
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
