"""Unit tests for DMFR document decoding."""

from __future__ import annotations

import json

import pytest

from core.errors import DmfrDecodeError
from core.types import AssociatedFeedReference
from ingest.dmfr_decoder import (
    decode_operator_document,
    decode_registry_document,
    feed_to_payload,
    operator_to_payload,
)
from tests.fixture_paths import fixture_path


def test_decode_registry_document_reads_feeds_and_embedded_operators() -> None:
    """Registry documents decode feeds with their inline operators."""
    path = fixture_path("atlas/feeds/bruinbus.dmfr.json")

    document = decode_registry_document(path.read_text(encoding="utf-8"), str(path), "feeds")

    assert [feed.feed_id for feed in document.feeds] == ["f-ucla~bruinbus", "f-ucla~bruinbus~rt"]
    embedded = document.feeds[0].operators[0]
    assert embedded.operator_id == "o-9q5c-bruinbus"
    assert embedded.associated_feeds == (
        AssociatedFeedReference(feed_id=None, agency_id="BB"),
        AssociatedFeedReference(feed_id="f-ucla~bruinbus~rt", agency_id=None),
    )
    assert document.operators == ()


def test_decode_registry_document_keeps_unknown_fields_as_attributes() -> None:
    """Fields without a typed attribute are preserved opaquely."""
    path = fixture_path("atlas/feeds/bruinbus.dmfr.json")

    document = decode_registry_document(path.read_text(encoding="utf-8"), str(path), "feeds")

    assert document.feeds[0].attributes == {"license": {"use_without_attribution": "yes"}}


def test_decode_registry_document_defaults_missing_arrays() -> None:
    """A document without feeds or operators decodes as empty."""
    document = decode_registry_document("{}", "empty.json", "feeds")

    assert document.feeds == () and document.operators == ()


def test_decode_registry_document_raises_for_truncated_json() -> None:
    """Invalid JSON surfaces as a decode error."""
    path = fixture_path("atlas/feeds/zz-truncated.dmfr.json")

    with pytest.raises(DmfrDecodeError):
        decode_registry_document(path.read_text(encoding="utf-8"), str(path), "feeds")


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"feeds": {"id": "f-a"}},
        {"feeds": [{"spec": "gtfs"}]},
        {"feeds": [{"id": "f-a", "operators": [{"name": "no id"}]}]},
        {"operators": [{"onestop_id": "o-a", "associated_feeds": [{"feed_onestop_id": 7}]}]},
        {"feeds": [{"id": "f-a", "urls": ["https://example.org"]}]},
    ],
)
def test_decode_registry_document_rejects_schema_violations(payload: object) -> None:
    """Structural violations anywhere in the document are rejected."""
    with pytest.raises(DmfrDecodeError):
        decode_registry_document(json.dumps(payload), "bad.json", "feeds")


def test_decode_operator_document_wraps_single_operator() -> None:
    """Standalone operator files become one-operator documents."""
    path = fixture_path("atlas/operators/o-9q5-metro~losangeles.json")

    document = decode_operator_document(path.read_text(encoding="utf-8"), str(path), "operators")

    assert len(document.operators) == 1
    operator = document.operators[0]
    assert operator.operator_id == "o-9q5-metro~losangeles"
    assert operator.short_name == "Metro"
    assert operator.associated_feeds[0].agency_id == "42"


def test_decode_operator_document_requires_onestop_id() -> None:
    """Operator files without an id are malformed."""
    path = fixture_path("atlas/operators/o-missing-id.json")

    with pytest.raises(DmfrDecodeError):
        decode_operator_document(path.read_text(encoding="utf-8"), str(path), "operators")


def test_payload_encoding_restores_dmfr_field_names() -> None:
    """Encoded payloads use registry field names and drop empty values."""
    path = fixture_path("atlas/feeds/bruinbus.dmfr.json")
    document = decode_registry_document(path.read_text(encoding="utf-8"), str(path), "feeds")

    feed_payload = feed_to_payload(document.feeds[0])
    operator_payload = operator_to_payload(document.feeds[0].operators[0])

    assert feed_payload["id"] == "f-ucla~bruinbus"
    assert feed_payload["license"] == {"use_without_attribution": "yes"}
    assert operator_payload["associated_feeds"] == [
        {"gtfs_agency_id": "BB"},
        {"feed_onestop_id": "f-ucla~bruinbus~rt"},
    ]
    assert "short_name" not in operator_payload


def test_decoded_nested_fields_are_read_only() -> None:
    """Opaque fields cannot be mutated through a decoded record."""
    payload = {"id": "f-a", "urls": {"static_current": "u"}, "tags": {"codes": ["a", "b"]}}
    document = decode_registry_document(json.dumps({"feeds": [payload]}), "f.json", "feeds")
    feed = document.feeds[0]

    with pytest.raises(TypeError):
        feed.urls["static_current"] = "changed"  # type: ignore[index]
    with pytest.raises(TypeError):
        feed.attributes["tags"]["codes"] = ()  # type: ignore[index]
    assert feed.attributes["tags"]["codes"] == ("a", "b")
    assert feed_to_payload(feed)["tags"] == {"codes": ["a", "b"]}


@pytest.mark.parametrize("text", ['{"x": ' + "9" * 5000 + "}", "[" * 100000 + "]" * 100000])
def test_decode_registry_document_wraps_parser_limits(text: str) -> None:
    """Parser limit failures surface as decode errors."""
    with pytest.raises(DmfrDecodeError):
        decode_registry_document(text, "limits.json", "feeds")
