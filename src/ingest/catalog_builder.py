"""Catalog builder for feeds and operators.

This module aggregates Feed and Operator records into the entity tables
and resolves each operator's feed references into relationship pairs.
Entity tables keep the first record seen for an id.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable

from core.errors import CatalogStateError
from core.logging_config import get_logger
from core.types import (
    BuildStats,
    CatalogSnapshot,
    Feed,
    FeedId,
    Operator,
    OperatorId,
    RegistryDocument,
)
from ingest.relationship_index import RelationshipIndex

_LOGGER = get_logger(__name__)


class BuilderState(str, Enum):
    """Lifecycle of a catalog builder."""

    EMPTY = "empty"
    ACCUMULATING = "accumulating"
    FINALIZED = "finalized"


@dataclass
class _BuildCounters:
    documents_ingested: int = 0
    unresolved_references: int = 0
    duplicate_feeds: int = 0
    duplicate_operators: int = 0


class CatalogBuilder:
    """Single-writer aggregator for one catalog build."""

    def __init__(self) -> None:
        self._feeds: dict[FeedId, Feed] = {}
        self._operators: dict[OperatorId, Operator] = {}
        self._relationships = RelationshipIndex()
        self._counters = _BuildCounters()
        self._state = BuilderState.EMPTY

    @property
    def state(self) -> BuilderState:
        """Current lifecycle state."""
        return self._state

    def ingest_documents(self, documents: Iterable[RegistryDocument]) -> None:
        """Ingest documents in iteration order."""
        for document in documents:
            self.ingest_document(document)

    def ingest_document(self, document: RegistryDocument) -> None:
        """Ingest every feed of a document, then its top-level operators.

        Args:
            document: Decoded registry document.

        Raises:
            CatalogStateError: If the builder was already finalized.
        """
        self._begin_write()
        self._counters.documents_ingested += 1
        for feed in document.feeds:
            self.ingest_feed(feed)
        for operator in document.operators:
            self.ingest_operator(operator, parent_feed_id=None)

    def ingest_feed(self, feed: Feed) -> None:
        """Register a feed and the operators embedded in it.

        Embedded operators resolve implicit references against this feed and
        are always paired with it, even when the feed id was seen before.

        Args:
            feed: Feed record.

        Raises:
            CatalogStateError: If the builder was already finalized.
        """
        self._begin_write()
        if feed.feed_id in self._feeds:
            self._counters.duplicate_feeds += 1
            _LOGGER.debug("duplicate_feed_ignored", feed_id=feed.feed_id)
        else:
            self._feeds[feed.feed_id] = feed
        for operator in feed.operators:
            self.ingest_operator(operator, parent_feed_id=feed.feed_id)
            self._relationships.record(operator.operator_id, feed.feed_id, None)

    def ingest_operator(self, operator: Operator, parent_feed_id: FeedId | None = None) -> None:
        """Register an operator and resolve its associated feed references.

        A reference without a feed id resolves to ``parent_feed_id``. When
        neither is available the reference is skipped with a warning.

        Args:
            operator: Operator record.
            parent_feed_id: Id of the enclosing feed, if any.

        Raises:
            CatalogStateError: If the builder was already finalized.
        """
        self._begin_write()
        if operator.operator_id in self._operators:
            self._counters.duplicate_operators += 1
            _LOGGER.debug("duplicate_operator_ignored", operator_id=operator.operator_id)
        else:
            self._operators[operator.operator_id] = operator
        for index, reference in enumerate(operator.associated_feeds):
            resolved_feed_id = (
                reference.feed_id if reference.feed_id is not None else parent_feed_id
            )
            if resolved_feed_id is None:
                self._counters.unresolved_references += 1
                _LOGGER.warning(
                    "unresolved_feed_reference",
                    operator_id=operator.operator_id,
                    reference_index=index,
                    agency_id=reference.agency_id,
                )
                continue
            self._relationships.record(operator.operator_id, resolved_feed_id, reference.agency_id)

    def finalize(self) -> CatalogSnapshot:
        """Finish the build and return a read-only snapshot.

        Returns:
            Immutable catalog snapshot.
        """
        self._state = BuilderState.FINALIZED
        operator_to_feeds, feed_to_operators = self._relationships.snapshot()
        return CatalogSnapshot(
            feeds=MappingProxyType(dict(self._feeds)),
            operators=MappingProxyType(dict(self._operators)),
            operator_to_feeds=operator_to_feeds,
            feed_to_operators=feed_to_operators,
            stats=BuildStats(
                documents_ingested=self._counters.documents_ingested,
                unresolved_references=self._counters.unresolved_references,
                duplicate_feeds=self._counters.duplicate_feeds,
                duplicate_operators=self._counters.duplicate_operators,
            ),
        )

    def _begin_write(self) -> None:
        if self._state is BuilderState.FINALIZED:
            raise CatalogStateError(
                "Cannot ingest into a finalized catalog builder. "
                "Create a new CatalogBuilder for another build."
            )
        self._state = BuilderState.ACCUMULATING


def build_catalog_from_documents(documents: Iterable[RegistryDocument]) -> CatalogSnapshot:
    """Build a snapshot from an already-decoded document sequence.

    Args:
        documents: Documents in ingestion order.

    Returns:
        Immutable catalog snapshot.
    """
    builder = CatalogBuilder()
    builder.ingest_documents(documents)
    return builder.finalize()
