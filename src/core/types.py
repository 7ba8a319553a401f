"""Shared typed models.

This module defines immutable data models used by the decoder,
catalog builder, export, and CLI layers to keep interfaces explicit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

FeedId = str
OperatorId = str


@dataclass(frozen=True)
class AssociatedFeedReference:
    """An operator's declared link to a feed.

    Attributes:
        feed_id: Referenced feed id; the enclosing feed when omitted.
        agency_id: Operator agency id inside that feed's GTFS data.
    """

    feed_id: FeedId | None = None
    agency_id: str | None = None


@dataclass(frozen=True)
class Operator:
    """Transit agency record from the registry.

    Attributes:
        operator_id: Globally unique onestop id.
        name: Optional display name.
        short_name: Optional abbreviated name.
        website: Optional agency website.
        associated_feeds: Declared feed references.
        attributes: Remaining registry fields, kept opaque and read-only.
    """

    operator_id: OperatorId
    name: str | None = None
    short_name: str | None = None
    website: str | None = None
    associated_feeds: tuple[AssociatedFeedReference, ...] = ()
    attributes: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Feed:
    """Published transit data source from the registry.

    Attributes:
        feed_id: Globally unique feed onestop id.
        spec: Data format, e.g. ``gtfs`` or ``gtfs-rt``.
        name: Optional display name.
        urls: Fetch URLs keyed by purpose.
        operators: Operators embedded in the feed record.
        attributes: Remaining registry fields, kept opaque and read-only.
    """

    feed_id: FeedId
    spec: str | None = None
    name: str | None = None
    urls: Mapping[str, Any] = field(default_factory=dict)
    operators: tuple[Operator, ...] = ()
    attributes: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RegistryDocument:
    """One decoded registry file.

    Attributes:
        source_path: File path the document was read from.
        origin: Registry source name the file belongs to.
        feeds: Feed records, ingested first.
        operators: Top-level operators without a parent feed.
    """

    source_path: str
    origin: str
    feeds: tuple[Feed, ...] = ()
    operators: tuple[Operator, ...] = ()


@dataclass(frozen=True)
class FeedPairInfo:
    """Operator→Feeds index entry."""

    feed_id: FeedId
    agency_id: str | None = None


@dataclass(frozen=True)
class OperatorPairInfo:
    """Feed→Operators index entry."""

    operator_id: OperatorId
    agency_id: str | None = None


@dataclass(frozen=True)
class BuildStats:
    """Counters collected during one catalog build.

    Attributes:
        documents_ingested: Documents handed to the builder.
        documents_unreadable: Files skipped because they could not be read.
        documents_malformed: Files skipped because they failed to decode.
        unresolved_references: Feed references skipped for lack of a feed id.
        duplicate_feeds: Feed records discarded by first-write-wins.
        duplicate_operators: Operator records discarded by first-write-wins.
    """

    documents_ingested: int = 0
    documents_unreadable: int = 0
    documents_malformed: int = 0
    unresolved_references: int = 0
    duplicate_feeds: int = 0
    duplicate_operators: int = 0


@dataclass(frozen=True)
class CatalogSnapshot:
    """Read-only result of a finished catalog build.

    Attributes:
        feeds: Feed records keyed by feed id.
        operators: Operator records keyed by operator id.
        operator_to_feeds: Feed pairs keyed by operator id.
        feed_to_operators: Operator pairs keyed by feed id.
        stats: Build counters.
    """

    feeds: Mapping[FeedId, Feed]
    operators: Mapping[OperatorId, Operator]
    operator_to_feeds: Mapping[OperatorId, tuple[FeedPairInfo, ...]]
    feed_to_operators: Mapping[FeedId, tuple[OperatorPairInfo, ...]]
    stats: BuildStats = field(default_factory=BuildStats)

    def feeds_for_operator(self, operator_id: OperatorId) -> tuple[FeedPairInfo, ...]:
        """Return feed pairs for an operator, empty when unknown."""
        return self.operator_to_feeds.get(operator_id, ())

    def operators_for_feed(self, feed_id: FeedId) -> tuple[OperatorPairInfo, ...]:
        """Return operator pairs for a feed, empty when unknown."""
        return self.feed_to_operators.get(feed_id, ())


@dataclass(frozen=True)
class BuildOptions:
    """Catalog build options.

    Attributes:
        registry_root: Root directory of the registry checkout.
        optional_sources: Source names allowed to be missing.
    """

    registry_root: str
    optional_sources: tuple[str, ...] = ()


@dataclass(frozen=True)
class CatalogExportResult:
    """Files written by a catalog export.

    Attributes:
        catalog_id: Deterministic digest of the exported maps.
        output_dir: Export directory.
        manifest_path: Written manifest file path.
    """

    catalog_id: str
    output_dir: str
    manifest_path: str
