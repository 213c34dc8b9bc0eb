"""Base exception for Refract."""

from __future__ import annotations


class RefractError(Exception):
    """Base class for all Refract errors."""
