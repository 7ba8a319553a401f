"""Unit tests for the public SDK surface."""

from __future__ import annotations

import dmfr_catalog
from tests.fixture_paths import fixture_path


def test_public_api_builds_catalog() -> None:
    """The SDK module should expose a working build entry point."""
    options = dmfr_catalog.BuildOptions(registry_root=str(fixture_path("atlas")))

    snapshot = dmfr_catalog.build_catalog(options)

    assert isinstance(snapshot, dmfr_catalog.CatalogSnapshot)
    assert "o-u0-sbb" in snapshot.operators
    assert set(dmfr_catalog.__all__) <= set(dir(dmfr_catalog))
