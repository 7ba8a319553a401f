"""Operator/feed relationship indices.

This module keeps the Operator→Feeds and Feed→Operators indices in step.
Every pair is written to both sides together and appears at most once per
side; the first agency id recorded for a pair is kept.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from core.types import FeedId, FeedPairInfo, OperatorId, OperatorPairInfo


class RelationshipIndex:
    """Symmetric, de-duplicated operator/feed relationship store."""

    def __init__(self) -> None:
        self._operator_to_feeds: dict[OperatorId, list[FeedPairInfo]] = {}
        self._feed_to_operators: dict[FeedId, list[OperatorPairInfo]] = {}
        self._feed_ids_by_operator: dict[OperatorId, set[FeedId]] = {}
        self._operator_ids_by_feed: dict[FeedId, set[OperatorId]] = {}

    def record(self, operator_id: OperatorId, feed_id: FeedId, agency_id: str | None) -> bool:
        """Record an operator/feed pair in both indices.

        Args:
            operator_id: Operator side of the pair.
            feed_id: Resolved feed side of the pair.
            agency_id: Agency id inside the feed, if declared.

        Returns:
            True when the pair was new on either side.
        """
        added_feed = self._append_feed(operator_id, feed_id, agency_id)
        added_operator = self._append_operator(feed_id, operator_id, agency_id)
        return added_feed or added_operator

    def snapshot(
        self,
    ) -> tuple[
        Mapping[OperatorId, tuple[FeedPairInfo, ...]],
        Mapping[FeedId, tuple[OperatorPairInfo, ...]],
    ]:
        """Copy both indices into read-only mappings.

        Returns:
            Operator→Feeds and Feed→Operators views detached from this index.
        """
        operator_to_feeds = {key: tuple(pairs) for key, pairs in self._operator_to_feeds.items()}
        feed_to_operators = {key: tuple(pairs) for key, pairs in self._feed_to_operators.items()}
        return MappingProxyType(operator_to_feeds), MappingProxyType(feed_to_operators)

    def _append_feed(self, operator_id: OperatorId, feed_id: FeedId, agency_id: str | None) -> bool:
        seen_feed_ids = self._feed_ids_by_operator.setdefault(operator_id, set())
        if feed_id in seen_feed_ids:
            return False
        seen_feed_ids.add(feed_id)
        self._operator_to_feeds.setdefault(operator_id, []).append(
            FeedPairInfo(feed_id=feed_id, agency_id=agency_id)
        )
        return True

    def _append_operator(
        self,
        feed_id: FeedId,
        operator_id: OperatorId,
        agency_id: str | None,
    ) -> bool:
        seen_operator_ids = self._operator_ids_by_feed.setdefault(feed_id, set())
        if operator_id in seen_operator_ids:
            return False
        seen_operator_ids.add(operator_id)
        self._feed_to_operators.setdefault(feed_id, []).append(
            OperatorPairInfo(operator_id=operator_id, agency_id=agency_id)
        )
        return True
