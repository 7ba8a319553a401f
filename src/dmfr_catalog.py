"""Public SDK surface for the DMFR catalog.

This module provides a stable import path for library users.
It re-exports the build entry points and typed models.
"""

from __future__ import annotations

from core.config import CatalogConfig
from core.errors import (
    CatalogConfigError,
    CatalogError,
    CatalogSourceError,
    CatalogStateError,
    CatalogStoreError,
    DmfrDecodeError,
)
from core.types import (
    AssociatedFeedReference,
    BuildOptions,
    BuildStats,
    CatalogExportResult,
    CatalogSnapshot,
    Feed,
    FeedPairInfo,
    Operator,
    OperatorPairInfo,
    RegistryDocument,
)
from ingest.catalog_builder import CatalogBuilder, build_catalog_from_documents
from ingest.pipeline import build_catalog
from ingest.record_source import RegistryRecordSource
from store.catalog_export import write_catalog_export

__all__ = [
    "AssociatedFeedReference",
    "BuildOptions",
    "BuildStats",
    "CatalogBuilder",
    "CatalogConfig",
    "CatalogConfigError",
    "CatalogError",
    "CatalogExportResult",
    "CatalogSnapshot",
    "CatalogSourceError",
    "CatalogStateError",
    "CatalogStoreError",
    "DmfrDecodeError",
    "Feed",
    "FeedPairInfo",
    "Operator",
    "OperatorPairInfo",
    "RegistryDocument",
    "RegistryRecordSource",
    "build_catalog",
    "build_catalog_from_documents",
    "write_catalog_export",
]
