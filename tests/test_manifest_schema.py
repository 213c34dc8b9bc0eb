"""Tests for JSON Schema validation of the persisted manifest."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import pytest

from refract.cache import MemoryCache, PersistedCache
from refract.config import FilterConfig, config_fingerprint
from refract.model import CacheEntry

SCHEMAS_DIR: Path = Path(__file__).resolve().parents[1] / "schemas"
MANIFEST_SCHEMA_PATH: Path = SCHEMAS_DIR / "manifest.schema.json"


@pytest.fixture()
def manifest_schema() -> dict[str, Any]:
    """Load the manifest JSON Schema."""
    return json.loads(MANIFEST_SCHEMA_PATH.read_text(encoding="utf-8"))


def test_manifest_schema_is_valid_json_schema(manifest_schema: dict[str, Any]) -> None:
    jsonschema.Draft202012Validator.check_schema(manifest_schema)


def test_written_manifest_validates(tmp_path: Path, manifest_schema: dict[str, Any]) -> None:
    scratch = tmp_path / "scratch"
    scratch.mkdir()
    (scratch / "a.js").write_text("a", encoding="utf-8")
    (scratch / "a.js.map").write_text("{}", encoding="utf-8")
    memory = MemoryCache()
    memory.put("a.js", CacheEntry(input_files=("a.js",), output_files=("a.js", "a.js.map"), hash="k"))
    config = FilterConfig(cache_id="schema", extensions=("js",))
    cache = PersistedCache(tmp_path / "persisted", cache_id="schema", config_fingerprint=config_fingerprint(config))

    cache.merge(memory, scratch)

    payload = json.loads(cache.manifest_path.read_text(encoding="utf-8"))
    jsonschema.validate(instance=payload, schema=manifest_schema)
