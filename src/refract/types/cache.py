"""Typed manifest payload structures."""

from __future__ import annotations

from typing import TypedDict


class ManifestEntry(TypedDict):
    """Serialized cache entry for one source-relative path."""

    input_files: list[str]
    output_files: list[str]
    hash: str


class ManifestPayload(TypedDict):
    """Top-level persisted cache manifest."""

    version: int
    cache_id: str
    config_fingerprint: str
    entries: dict[str, ManifestEntry]
