"""Regex constants for name sanitisation."""

from __future__ import annotations

import re

NON_SLUG_PATTERN: re.Pattern[str] = re.compile(r"[^a-z0-9._-]+")
COLLAPSE_DASH_PATTERN: re.Pattern[str] = re.compile(r"-+")
SLUG_FALLBACK: str = "cache"
