"""Domain entities shared by the cache and the build orchestrator."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from refract.types import CacheSource, ManifestEntry


@dataclass(frozen=True)
class CacheEntry:
    """Inputs and outputs of one transform run plus the key that validates them.

    The entry is a hit while recomputing the key over ``input_files``
    against the current source tree yields ``hash``.
    """

    input_files: tuple[str, ...]
    output_files: tuple[str, ...]
    hash: str = ""

    def to_dict(self) -> ManifestEntry:
        """Serialize for the persisted manifest."""
        return {
            "input_files": list(self.input_files),
            "output_files": list(self.output_files),
            "hash": self.hash,
        }


@dataclass(frozen=True)
class TransformResult:
    """Structured transform result for one-to-many or many-to-one transforms.

    ``outputs`` maps destination-relative paths to their text in write order.
    An empty ``input_files`` means the processed file alone.
    """

    outputs: Mapping[str, str]
    input_files: tuple[str, ...] = ()


@dataclass(frozen=True)
class CacheHit:
    """A validated cache entry and the tier that held it."""

    source: CacheSource
    entry: CacheEntry


@dataclass
class BuildStats:
    """Per-build counters."""

    memory_hits: int = 0
    persisted_hits: int = 0
    misses: int = 0
    passed_through: int = 0
    directories: int = 0
    duration_seconds: float = 0.0
    processed: list[str] = field(default_factory=list)

    @property
    def hits(self) -> int:
        return self.memory_hits + self.persisted_hits
