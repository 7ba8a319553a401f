"""Catalog build orchestration.

This module wires the registry record source into the catalog builder
and folds the source's skip counters into the finished snapshot.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from core.logging_config import get_logger
from core.types import BuildOptions, CatalogSnapshot
from ingest.catalog_builder import CatalogBuilder
from ingest.record_source import RegistryRecordSource

_LOGGER = get_logger(__name__)


def build_catalog(options: BuildOptions) -> CatalogSnapshot:
    """Read the registry and build the feed/operator catalog.

    Args:
        options: Build options naming the registry root.

    Returns:
        Immutable catalog snapshot.

    Raises:
        CatalogSourceError: If a required source directory is unavailable.
        CatalogConfigError: If an optional source name is unknown.
    """
    registry_root = Path(options.registry_root).expanduser()
    source = RegistryRecordSource(registry_root, options.optional_sources)
    builder = CatalogBuilder()
    builder.ingest_documents(source.documents())
    snapshot = builder.finalize()
    stats = replace(
        snapshot.stats,
        documents_unreadable=source.unreadable_count,
        documents_malformed=source.malformed_count,
    )
    snapshot = replace(snapshot, stats=stats)
    _log_build_completion(options, snapshot)
    return snapshot


def _log_build_completion(options: BuildOptions, snapshot: CatalogSnapshot) -> None:
    """Log build completion with contextual counters."""
    stats = snapshot.stats
    _LOGGER.info(
        "catalog_built",
        registry_root=options.registry_root,
        feed_count=len(snapshot.feeds),
        operator_count=len(snapshot.operators),
        operator_to_feeds_count=len(snapshot.operator_to_feeds),
        feed_to_operators_count=len(snapshot.feed_to_operators),
        documents_ingested=stats.documents_ingested,
        documents_unreadable=stats.documents_unreadable,
        documents_malformed=stats.documents_malformed,
        unresolved_references=stats.unresolved_references,
        duplicate_feeds=stats.duplicate_feeds,
        duplicate_operators=stats.duplicate_operators,
    )
