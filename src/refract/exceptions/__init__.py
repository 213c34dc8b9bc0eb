"""Shared exception hierarchy for Refract."""

from __future__ import annotations

from .base import RefractError
from .cache import CacheIOError
from .config import ConfigurationError
from .transform import TransformError

__all__ = [
    "CacheIOError",
    "ConfigurationError",
    "RefractError",
    "TransformError",
]
