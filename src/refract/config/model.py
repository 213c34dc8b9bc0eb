"""Config data model for filters."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from refract.constants.config import DEFAULT_ENCODING
from refract.exceptions import ConfigurationError


@dataclass(frozen=True)
class FilterConfig:
    """Resolved filter config, immutable for the life of an engine instance."""

    cache_id: str | None = None
    extensions: tuple[str, ...] = ()
    target_extension: str | None = None
    input_encoding: str = DEFAULT_ENCODING
    output_encoding: str = DEFAULT_ENCODING
    cache_by_content: bool = False
    persist: bool = True
    cache_root: Path | None = None

    def dest_file_path(self, relative_path: str) -> str | None:
        """Map a source path to its output path, or None when it is not processable."""
        for extension in self.extensions:
            suffix = f".{extension}"
            if relative_path.endswith(suffix):
                if self.target_extension is not None:
                    return f"{relative_path[: -len(extension)]}{self.target_extension}"
                return relative_path
        return None


def validate_config(config: FilterConfig) -> None:
    """Raise ConfigurationError when *config* cannot drive a filter."""
    if not config.cache_id or not config.cache_id.strip():
        raise ConfigurationError("cache_id is required to namespace the persisted cache")
    for extension in config.extensions:
        if not extension or extension.startswith("."):
            raise ConfigurationError(f"extensions must be non-empty and given without a dot, got {extension!r}")
    if config.target_extension is not None and (
        not config.target_extension or config.target_extension.startswith(".")
    ):
        raise ConfigurationError(
            f"target_extension must be non-empty and given without a dot, got {config.target_extension!r}"
        )
    for key in ("input_encoding", "output_encoding"):
        encoding = getattr(config, key)
        try:
            "".encode(encoding)
        except LookupError as exc:
            raise ConfigurationError(f"{key} is not a known encoding: {encoding!r}") from exc
