"""Core data models for Refract."""

from .entities import BuildStats, CacheEntry, CacheHit, TransformResult

__all__ = [
    "BuildStats",
    "CacheEntry",
    "CacheHit",
    "TransformResult",
]
