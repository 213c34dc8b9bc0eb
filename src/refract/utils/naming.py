"""String normalization helpers for cache directory names."""

from __future__ import annotations

import hashlib

from refract.constants.cache import CACHE_ID_HASH_LENGTH
from refract.constants.naming import COLLAPSE_DASH_PATTERN, NON_SLUG_PATTERN, SLUG_FALLBACK


def sanitize_slug(raw_name: str) -> str:
    """Normalize names for stable directory paths."""
    normalized = raw_name.strip().lower()
    normalized = NON_SLUG_PATTERN.sub("-", normalized)
    normalized = COLLAPSE_DASH_PATTERN.sub("-", normalized)
    normalized = normalized.strip("-._")
    return normalized or SLUG_FALLBACK


def cache_dir_name(cache_id: str) -> str:
    """Return a deterministic directory name for a cache identifier.

    The hash suffix keeps identifiers that sanitize to the same slug apart.
    """
    suffix = hashlib.sha256(cache_id.encode("utf-8")).hexdigest()[:CACHE_ID_HASH_LENGTH]
    return f"{sanitize_slug(cache_id)}-{suffix}"
