"""Shared type aliases for Refract."""

from .cache import ManifestEntry, ManifestPayload
from .common import JsonObject, JsonScalar, JsonValue
from .hooks import CacheSource, DestPathFn, HashEntryFn, KeyFn, TransformFn, TransformOutput

__all__ = [
    "CacheSource",
    "DestPathFn",
    "HashEntryFn",
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "KeyFn",
    "ManifestEntry",
    "ManifestPayload",
    "TransformFn",
    "TransformOutput",
]
