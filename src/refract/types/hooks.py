"""Callable shapes for injected filter capabilities."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

if TYPE_CHECKING:
    from refract.model import CacheEntry, TransformResult

CacheSource: TypeAlias = Literal["memory", "persisted"]
TransformOutput: TypeAlias = "str | TransformResult"
TransformFn: TypeAlias = "Callable[[str, str], TransformOutput | Awaitable[TransformOutput]]"
KeyFn: TypeAlias = "Callable[[Path, CacheEntry], str]"
HashEntryFn: TypeAlias = "Callable[[Path, CacheEntry, KeyFn], str]"
DestPathFn: TypeAlias = Callable[[str], str | None]
