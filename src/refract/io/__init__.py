"""Shared file I/O helpers."""

from .files import file_sha256, write_bytes_replacing
from .links import dereferenced_copy, link_or_copy
from .manifest import read_manifest, write_manifest

__all__ = [
    "dereferenced_copy",
    "file_sha256",
    "link_or_copy",
    "read_manifest",
    "write_bytes_replacing",
    "write_manifest",
]
