"""Injected capabilities that customize a filter."""

from __future__ import annotations

import importlib
import inspect
from dataclasses import dataclass

from refract.exceptions import ConfigurationError
from refract.types import DestPathFn, HashEntryFn, TransformFn, TransformOutput


@dataclass(frozen=True)
class FilterHooks:
    """Transform plus optional overrides of hashing and destination paths.

    ``hash_entry`` receives the default key function as its third argument
    so an override can delegate to it. ``dest_file_path`` returning None
    marks a file as not processable.
    """

    transform: TransformFn
    hash_entry: HashEntryFn | None = None
    dest_file_path: DestPathFn | None = None


async def call_transform(transform: TransformFn, content: str, relative_path: str) -> TransformOutput:
    """Invoke *transform*, awaiting its result when it is awaitable."""
    result = transform(content, relative_path)
    if inspect.isawaitable(result):
        return await result
    return result


def load_transform(reference: str) -> TransformFn:
    """Import a transform callable from a ``module:attribute`` path."""
    module_name, sep, attribute = reference.partition(":")
    if not sep or not module_name or not attribute:
        raise ConfigurationError(f"Transform must be given as module:callable, got {reference!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(f"Cannot import transform module {module_name!r}: {exc}") from exc

    target: object = module
    for part in attribute.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ConfigurationError(f"Transform {reference!r} not found: {exc}") from exc

    if not callable(target):
        raise ConfigurationError(f"Transform {reference!r} is not callable")
    return target
