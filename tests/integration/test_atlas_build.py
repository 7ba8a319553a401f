"""Integration tests for building and exporting the fixture atlas."""

from __future__ import annotations

import json
from pathlib import Path

from core.types import BuildOptions, FeedPairInfo, OperatorPairInfo
from ingest.pipeline import build_catalog
from store.catalog_export import write_catalog_export
from tests.fixture_paths import fixture_path


def test_atlas_build_cross_references_feeds_and_operators(tmp_path: Path) -> None:
    """End-to-end build should resolve every kind of feed reference."""
    snapshot = build_catalog(BuildOptions(registry_root=str(fixture_path("atlas"))))

    assert sorted(snapshot.feeds) == [
        "f-c2k-spokanetransitauthority",
        "f-spokanetransitauthority~rt",
        "f-ucla~bruinbus",
        "f-ucla~bruinbus~rt",
    ]
    assert snapshot.feeds["f-ucla~bruinbus~rt"].name is None
    assert snapshot.feeds_for_operator("o-9q5c-bruinbus") == (
        FeedPairInfo(feed_id="f-ucla~bruinbus", agency_id="BB"),
        FeedPairInfo(feed_id="f-ucla~bruinbus~rt", agency_id=None),
    )
    assert snapshot.operators_for_feed("f-spokanetransitauthority~rt") == (
        OperatorPairInfo(operator_id="o-c2k-spokanetransitauthority", agency_id=None),
    )
    assert snapshot.operators_for_feed("f-u0-switzerland") == (
        OperatorPairInfo(operator_id="o-u0-sbb", agency_id=None),
    )

    result = write_catalog_export(snapshot, tmp_path, str(fixture_path("atlas")))
    feeds = json.loads((tmp_path / "feeds.json").read_text(encoding="utf-8"))

    assert feeds["f-ucla~bruinbus"]["operators"][0]["onestop_id"] == "o-9q5c-bruinbus"
    assert Path(result.manifest_path).name == "manifest.json"
