"""Configuration-related exceptions."""

from __future__ import annotations

from refract.exceptions.base import RefractError


class ConfigurationError(RefractError, ValueError):
    """Raised when filter configuration is missing or invalid."""
