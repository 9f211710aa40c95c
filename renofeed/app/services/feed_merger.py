"""
Merges comments and activity entries into one time-ordered feed.
"""
from __future__ import annotations

from collections.abc import Iterable

from app.schemas.activity_log import ActivityLogItem
from app.schemas.comment import FeedComment
from app.schemas.feed import FeedFilterMode, UnifiedFeedItem
from app.services.ordering import newest_first


def merge_into_unified_feed(
    comments: Iterable[FeedComment],
    activities: Iterable[ActivityLogItem],
) -> list[UnifiedFeedItem]:
    """
    Tag and merge both streams, newest first. The sort is stable, so items
    with equal timestamps keep the order of ``comments`` followed by
    ``activities``.
    """
    items = [
        UnifiedFeedItem(type="comment", created_at=c.created_at, comment=c) for c in comments
    ]
    items.extend(
        UnifiedFeedItem(type="activity", created_at=a.created_at, activity=a)
        for a in activities
    )
    return newest_first(items)


def filter_feed(items: Iterable[UnifiedFeedItem], mode: FeedFilterMode) -> list[UnifiedFeedItem]:
    if mode == "comments":
        return [item for item in items if item.type == "comment"]
    if mode == "activity":
        return [item for item in items if item.type == "activity"]
    return list(items)
