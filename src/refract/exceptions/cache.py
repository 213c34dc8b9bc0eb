"""Cache filesystem exceptions."""

from __future__ import annotations

from refract.exceptions.base import RefractError


class CacheIOError(RefractError, OSError):
    """Raised when cache directories or the manifest cannot be read or prepared."""
