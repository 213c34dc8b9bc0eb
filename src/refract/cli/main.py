"""CLI entrypoint for Refract."""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from dataclasses import replace
from pathlib import Path

from refract import __version__
from refract.cache import persisted_cache_dir
from refract.config import FilterConfig, load_config
from refract.constants.branding import CLI_DESCRIPTION
from refract.engine.hooks import load_transform
from refract.engine.orchestrator import Filter
from refract.exceptions import ConfigurationError, RefractError
from refract.io.tempdirs import find_base_temp_dir, remove


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="refract",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Transform a source tree into an output directory")
    build.add_argument("-i", "--input", type=Path, required=True, help="Source tree root")
    build.add_argument("-o", "--output", type=Path, required=True, help="Destination directory (replaced)")
    build.add_argument(
        "-t",
        "--transform",
        required=True,
        help="Transform callable as module:attribute, called with (content, relative_path)",
    )
    build.add_argument("-c", "--config", type=Path, help="Explicit config file")
    build.add_argument(
        "-e",
        "--extension",
        action="append",
        default=None,
        help="Recognized source extension without the dot (repeat for multiple values)",
    )
    build.add_argument("--target-extension", default=None, help="Rewrite processed files to this extension")
    build.add_argument("--cache-id", default=None, help="Identifier namespacing the persisted cache")
    build.add_argument(
        "--cache-by-content",
        action="store_true",
        default=None,
        help="Key the cache on content digests instead of size and mtime",
    )
    build.add_argument("--no-persist", action="store_true", help="Disable persisted cache reads/writes")
    build.add_argument("--cache-root", type=Path, default=None, help="Base directory for persisted caches")
    build.add_argument("-v", "--verbose", action="store_true", help="Show per-file cache decisions")

    clean = subparsers.add_parser("clean", help="Delete the persisted cache for an identifier")
    clean.add_argument("--cache-id", required=True, help="Identifier of the persisted cache")
    clean.add_argument("--cache-root", type=Path, default=None, help="Base directory for persisted caches")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if getattr(args, "verbose", False) else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(message)s")

    try:
        if args.command == "clean":
            return _handle_clean(args)
        if args.command == "build":
            return _handle_build(args)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except RefractError as exc:
        print(f"Build error: {exc}", file=sys.stderr)
        return 1

    parser.error(f"Unsupported command: {args.command}")
    return 2


def resolve_build_config(args: argparse.Namespace) -> FilterConfig:
    """Load the config file, then apply CLI overrides."""
    config = load_config(Path.cwd(), args.config)
    overrides: dict[str, object] = {}
    if args.extension:
        overrides["extensions"] = tuple(ext.strip().lstrip(".") for ext in args.extension)
    if args.target_extension is not None:
        overrides["target_extension"] = args.target_extension.lstrip(".")
    if args.cache_id is not None:
        overrides["cache_id"] = args.cache_id
    if args.cache_by_content:
        overrides["cache_by_content"] = True
    if args.no_persist:
        overrides["persist"] = False
    if args.cache_root is not None:
        overrides["cache_root"] = args.cache_root.resolve()
    return replace(config, **overrides)


def _handle_build(args: argparse.Namespace) -> int:
    config = resolve_build_config(args)
    transform = load_transform(args.transform)
    destination = args.output.resolve()

    with Filter(config, transform) as build_filter:
        output_path = build_filter.run(args.input)
        if destination.exists():
            shutil.rmtree(destination)
        shutil.copytree(output_path, destination, symlinks=False)
        stats = build_filter.last_stats

    assert stats is not None
    print(
        f"Built {destination}: {stats.misses} transformed, {stats.hits} cached, "
        f"{stats.passed_through} passed through in {stats.duration_seconds:.2f}s"
    )
    return 0


def _handle_clean(args: argparse.Namespace) -> int:
    cache_root = args.cache_root.resolve() if args.cache_root is not None else find_base_temp_dir()
    target = persisted_cache_dir(cache_root, args.cache_id)
    if not target.exists():
        print(f"No persisted cache at {target}")
        return 0
    remove(target)
    print(f"Removed {target}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
