"""Branding constants for terminal output."""

from __future__ import annotations

BRAND_NAME: str = "refract"
CLI_DESCRIPTION: str = f"{BRAND_NAME}: incremental, content-addressed file transforms"
