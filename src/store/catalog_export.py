"""Catalog export persistence.

This module writes a finished catalog snapshot as JSON files.
Map files use sorted keys so identical snapshots export identically.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from core.constants import (
    FEED_TO_OPERATORS_FILE_NAME,
    FEEDS_FILE_NAME,
    HASH_ALGORITHM,
    MANIFEST_FILE_NAME,
    OPERATOR_TO_FEEDS_FILE_NAME,
    OPERATORS_FILE_NAME,
)
from core.errors import CatalogStoreError
from core.logging_config import get_logger
from core.types import CatalogExportResult, CatalogSnapshot
from ingest.dmfr_decoder import feed_to_payload, operator_to_payload

_LOGGER = get_logger(__name__)


def write_catalog_export(
    snapshot: CatalogSnapshot,
    output_dir: Path,
    registry_root: str,
) -> CatalogExportResult:
    """Write the four catalog maps and a manifest to a directory.

    Args:
        snapshot: Finished catalog snapshot.
        output_dir: Destination directory, created when missing.
        registry_root: Registry root recorded in the manifest.

    Returns:
        Export result with catalog id and manifest path.

    Raises:
        CatalogStoreError: If files cannot be written.
    """
    documents = build_export_documents(snapshot)
    serialized = {file_name: _dump_json(payload) for file_name, payload in documents.items()}
    catalog_id = build_catalog_id(serialized)
    manifest = _build_manifest(snapshot, catalog_id, registry_root)
    serialized[MANIFEST_FILE_NAME] = _dump_json(manifest)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        for file_name, text in serialized.items():
            (output_dir / file_name).write_text(text, encoding="utf-8")
    except OSError as error:
        raise CatalogStoreError(
            f"Failed to write catalog export to {output_dir}: {error.strerror or error}. "
            "Choose a writable output directory."
        ) from error
    manifest_path = output_dir / MANIFEST_FILE_NAME
    _LOGGER.info(
        "catalog_exported",
        catalog_id=catalog_id,
        output_dir=str(output_dir),
        feed_count=len(snapshot.feeds),
        operator_count=len(snapshot.operators),
    )
    return CatalogExportResult(
        catalog_id=catalog_id,
        output_dir=str(output_dir),
        manifest_path=str(manifest_path),
    )


def build_export_documents(snapshot: CatalogSnapshot) -> dict[str, dict[str, Any]]:
    """Build JSON-safe payloads for the four catalog map files.

    Args:
        snapshot: Catalog snapshot.

    Returns:
        Payloads keyed by export file name.
    """
    return {
        FEEDS_FILE_NAME: {
            feed_id: feed_to_payload(feed) for feed_id, feed in snapshot.feeds.items()
        },
        OPERATORS_FILE_NAME: {
            operator_id: operator_to_payload(operator)
            for operator_id, operator in snapshot.operators.items()
        },
        OPERATOR_TO_FEEDS_FILE_NAME: {
            operator_id: [
                {"feed_onestop_id": pair.feed_id, "gtfs_agency_id": pair.agency_id}
                for pair in pairs
            ]
            for operator_id, pairs in snapshot.operator_to_feeds.items()
        },
        FEED_TO_OPERATORS_FILE_NAME: {
            feed_id: [
                {"operator_onestop_id": pair.operator_id, "gtfs_agency_id": pair.agency_id}
                for pair in pairs
            ]
            for feed_id, pairs in snapshot.feed_to_operators.items()
        },
    }


def build_catalog_id(serialized: dict[str, str]) -> str:
    """Build a deterministic digest over serialized map files.

    Args:
        serialized: Serialized file contents keyed by file name.

    Returns:
        Short hex digest.
    """
    hasher = hashlib.new(HASH_ALGORITHM)
    for file_name in sorted(serialized):
        hasher.update(file_name.encode("utf-8"))
        hasher.update(serialized[file_name].encode("utf-8"))
    return hasher.hexdigest()[:16]


def _build_manifest(
    snapshot: CatalogSnapshot,
    catalog_id: str,
    registry_root: str,
) -> dict[str, Any]:
    return {
        "catalog_id": catalog_id,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "registry_root": registry_root,
        "feed_count": len(snapshot.feeds),
        "operator_count": len(snapshot.operators),
        "stats": asdict(snapshot.stats),
    }


def _dump_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, sort_keys=True) + "\n"
