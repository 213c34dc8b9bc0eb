"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = "refract.yaml"
DEFAULT_ENCODING: str = "utf-8"

CONFIG_ALLOWED_KEYS: frozenset[str] = frozenset(
    {
        "extensions",
        "target_extension",
        "input_encoding",
        "output_encoding",
        "cache_by_content",
        "cache_id",
        "persist",
        "cache_root",
    }
)
