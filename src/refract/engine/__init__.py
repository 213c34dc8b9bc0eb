"""Build orchestration package."""

from __future__ import annotations

from typing import Any

__all__ = ["Filter", "FilterHooks", "load_transform", "walk_tree"]


def __getattr__(name: str) -> Any:
    """Lazily expose engine APIs to avoid import cycles at package import time."""
    if name == "Filter":
        from .orchestrator import Filter

        return Filter
    if name in {"FilterHooks", "load_transform"}:
        from . import hooks

        return getattr(hooks, name)
    if name == "walk_tree":
        from .discovery import walk_tree

        return walk_tree
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
