"""Config fingerprinting for cache invalidation."""

from __future__ import annotations

import hashlib
import json

from refract.config.model import FilterConfig


def config_fingerprint(config: FilterConfig) -> str:
    """Return a stable hash of the config fields that shape transform output."""
    payload = {
        "extensions": list(config.extensions),
        "target_extension": config.target_extension,
        "input_encoding": config.input_encoding,
        "output_encoding": config.output_encoding,
        "cache_by_content": config.cache_by_content,
    }
    blob = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
    return hashlib.sha256(blob).hexdigest()
