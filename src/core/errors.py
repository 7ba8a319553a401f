"""Catalog exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base exception for all catalog failures."""


class CatalogConfigError(CatalogError):
    """Raised for invalid runtime configuration."""


class CatalogSourceError(CatalogError):
    """Raised when a registry source directory is missing or unreadable."""


class DmfrDecodeError(CatalogError):
    """Raised when a document does not decode into the DMFR schema."""


class CatalogStateError(CatalogError):
    """Raised when the catalog builder is used after finalization."""


class CatalogStoreError(CatalogError):
    """Raised for catalog export and persistence failures."""
