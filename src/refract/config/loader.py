"""Config loading and normalization for filters."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from refract.config.model import FilterConfig
from refract.constants.config import CONFIG_ALLOWED_KEYS, CONFIG_FILENAME, DEFAULT_ENCODING
from refract.exceptions import ConfigurationError


def load_config(root: Path, config_path: Path | None = None) -> FilterConfig:
    """Load filter config from ``refract.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigurationError(f"Config file not found: {path}")
        return FilterConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config file at {path} must be a YAML mapping")

    unknown_keys = sorted(str(key) for key in raw if key not in CONFIG_ALLOWED_KEYS)
    if unknown_keys:
        raise ConfigurationError(f"Unknown config key(s) in {path}: {', '.join(unknown_keys)}")

    cache_by_content = raw.get("cache_by_content", False)
    if not isinstance(cache_by_content, bool):
        raise ConfigurationError("cache_by_content must be a boolean")

    persist = raw.get("persist", True)
    if not isinstance(persist, bool):
        raise ConfigurationError("persist must be a boolean")

    cache_root_raw = _optional_string(raw.get("cache_root"), "cache_root")
    cache_root = None
    if cache_root_raw is not None:
        cache_root = Path(cache_root_raw)
        if not cache_root.is_absolute():
            cache_root = path.parent / cache_root

    return FilterConfig(
        cache_id=_optional_string(raw.get("cache_id"), "cache_id"),
        extensions=tuple(ext.strip().lstrip(".") for ext in _ensure_string_list(raw.get("extensions"), "extensions")),
        target_extension=_normalize_extension(_optional_string(raw.get("target_extension"), "target_extension")),
        input_encoding=_optional_string(raw.get("input_encoding"), "input_encoding") or DEFAULT_ENCODING,
        output_encoding=_optional_string(raw.get("output_encoding"), "output_encoding") or DEFAULT_ENCODING,
        cache_by_content=cache_by_content,
        persist=persist,
        cache_root=cache_root,
    )


def _ensure_string_list(value: Any, key_name: str) -> list[str]:
    """Coerce a value to a list of strings, raising ConfigurationError on type mismatch."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigurationError(f"{key_name} must be a list of strings")
    return list(value)


def _optional_string(value: Any, key_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{key_name} must be a string")
    return value


def _normalize_extension(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip().lstrip(".")
