"""Utility helpers."""

from .naming import cache_dir_name, sanitize_slug

__all__ = ["cache_dir_name", "sanitize_slug"]
