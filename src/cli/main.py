"""DMFR catalog CLI entry points.

This module exposes build and lookup commands over the registry.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from core.config import CatalogConfig, parse_optional_sources
from core.constants import REGISTRY_SOURCES
from core.errors import CatalogError
from core.logging_config import configure_logging
from core.types import BuildOptions, CatalogSnapshot
from ingest.pipeline import build_catalog
from store.catalog_export import write_catalog_export


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="dmfr-catalog",
        description="Build a cross-referenced feed/operator catalog from a DMFR registry",
    )
    parser.add_argument("--registry-root", help="Override DMFR_REGISTRY_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_build_command(subparsers)
    _add_feed_command(subparsers)
    _add_operator_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the catalog CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args.registry_root)
        configure_logging(config.log_level)
        if args.command == "build":
            return _run_build_command(config, args)
        if args.command == "feed":
            return _run_feed_command(config, args)
        if args.command == "operator":
            return _run_operator_command(config, args)
    except CatalogError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(registry_root: str | None) -> CatalogConfig:
    """Build config with optional registry-root override.

    Args:
        registry_root: Optional override path.

    Returns:
        Validated runtime config.
    """
    config = CatalogConfig.from_env()
    if registry_root:
        config = replace(config, registry_root=Path(registry_root).expanduser().resolve())
    return config


def _build_snapshot(config: CatalogConfig, optional_sources: tuple[str, ...]) -> CatalogSnapshot:
    options = BuildOptions(
        registry_root=str(config.registry_root),
        optional_sources=optional_sources or config.optional_sources,
    )
    return build_catalog(options)


def _run_build_command(config: CatalogConfig, args: argparse.Namespace) -> int:
    """Handle build command.

    Args:
        config: Runtime config.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    optional_sources = parse_optional_sources(",".join(args.optional_source or ()))
    snapshot = _build_snapshot(config, optional_sources)
    output_dir = config.output_dir
    if args.output_dir:
        output_dir = Path(args.output_dir).expanduser().resolve()
    result = write_catalog_export(snapshot, output_dir, str(config.registry_root))
    print(f"{len(snapshot.feeds)} feeds across {len(snapshot.operators)} operators")
    print(f"catalog_id={result.catalog_id}")
    print(f"manifest_path={result.manifest_path}")
    return 0


def _run_feed_command(config: CatalogConfig, args: argparse.Namespace) -> int:
    """Handle feed lookup command.

    Args:
        config: Runtime config.
        args: Parsed CLI args.

    Returns:
        Exit code, 1 when the feed is not in the catalog.
    """
    snapshot = _build_snapshot(config, ())
    if args.feed_id not in snapshot.feeds and not snapshot.operators_for_feed(args.feed_id):
        print(f"error: feed '{args.feed_id}' not found in catalog", file=sys.stderr)
        return 1
    for pair in snapshot.operators_for_feed(args.feed_id):
        print(f"{pair.operator_id}\t{pair.agency_id or '-'}")
    return 0


def _run_operator_command(config: CatalogConfig, args: argparse.Namespace) -> int:
    """Handle operator lookup command.

    Args:
        config: Runtime config.
        args: Parsed CLI args.

    Returns:
        Exit code, 1 when the operator is not in the catalog.
    """
    snapshot = _build_snapshot(config, ())
    if args.operator_id not in snapshot.operators:
        print(f"error: operator '{args.operator_id}' not found in catalog", file=sys.stderr)
        return 1
    for pair in snapshot.feeds_for_operator(args.operator_id):
        print(f"{pair.feed_id}\t{pair.agency_id or '-'}")
    return 0


def _add_build_command(subparsers: Any) -> None:
    """Register build subcommand."""
    parser = subparsers.add_parser("build", help="Build and export the catalog")
    parser.add_argument("--output-dir", help="Override DMFR_OUTPUT_DIR for this command")
    parser.add_argument(
        "--optional-source",
        action="append",
        choices=REGISTRY_SOURCES,
        help="Registry source allowed to be missing (repeatable)",
    )


def _add_feed_command(subparsers: Any) -> None:
    """Register feed lookup subcommand."""
    parser = subparsers.add_parser("feed", help="List operators attached to a feed")
    parser.add_argument("feed_id", help="Feed onestop id, e.g. f-9q5-metro~losangeles")


def _add_operator_command(subparsers: Any) -> None:
    """Register operator lookup subcommand."""
    parser = subparsers.add_parser("operator", help="List feeds attached to an operator")
    parser.add_argument("operator_id", help="Operator onestop id, e.g. o-9q5-metro~losangeles")
