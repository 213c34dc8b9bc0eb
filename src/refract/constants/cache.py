"""Constants used by the persisted cache and hashing."""

from __future__ import annotations

MANIFEST_VERSION: int = 1
MANIFEST_FILENAME: str = "manifest.json"
MANIFEST_TEMP_PREFIX: str = ".manifest-"
MANIFEST_TEMP_SUFFIX: str = ".tmp"
PERSISTED_CACHE_DIRNAME: str = "refract-cache"
CACHE_ID_HASH_LENGTH: int = 12
FILE_HASH_CHUNK_SIZE: int = 65536

# Identity recorded for an input file that no longer exists.
MISSING_INPUT_IDENTITY: str = "missing"
KEY_SEPARATOR: str = ","

CACHE_SOURCE_MEMORY: str = "memory"
CACHE_SOURCE_PERSISTED: str = "persisted"
