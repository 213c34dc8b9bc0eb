"""Scratch directory constants."""

from __future__ import annotations

BASE_TEMP_DIRNAME: str = "tmp"
OUTPUT_DIR_PREFIX: str = "refract-output-"
SCRATCH_CACHE_DIR_PREFIX: str = "refract-cache-"
OUTPUT_TEMP_SUFFIX: str = ".refract-tmp"
