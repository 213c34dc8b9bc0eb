"""Configuration loading, validation, and fingerprinting for filters."""

from __future__ import annotations

from refract.config.fingerprint import config_fingerprint
from refract.config.loader import load_config
from refract.config.model import FilterConfig, validate_config

__all__ = [
    "FilterConfig",
    "config_fingerprint",
    "load_config",
    "validate_config",
]
