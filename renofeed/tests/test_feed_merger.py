"""
Unified feed merge and filter tests.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

from app.schemas.activity_log import ActivityLogItem
from app.schemas.comment import FeedComment
from app.services.feed_merger import filter_feed, merge_into_unified_feed

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
PROJECT_ID = uuid.uuid4()


def comment_at(minutes: int) -> FeedComment:
    return FeedComment(
        id=uuid.uuid4(),
        content="note",
        created_at=T0 + timedelta(minutes=minutes),
        created_by_user_id=uuid.uuid4(),
        project_id=PROJECT_ID,
    )


def activity_at(minutes: int) -> ActivityLogItem:
    return ActivityLogItem(
        id=uuid.uuid4(),
        project_id=PROJECT_ID,
        actor_id=None,
        action="created",
        entity_type="task",
        entity_id=uuid.uuid4(),
        entity_name="Paint hallway",
        created_at=T0 + timedelta(minutes=minutes),
    )


def item_ids(items) -> list[uuid.UUID]:
    return [(i.comment or i.activity).id for i in items]


def test_merge_sorts_newest_first() -> None:
    c1, c2 = comment_at(1), comment_at(4)
    a1, a2 = activity_at(2), activity_at(3)

    feed = merge_into_unified_feed([c1, c2], [a1, a2])

    assert item_ids(feed) == [c2.id, a2.id, a1.id, c1.id]
    assert [i.type for i in feed] == ["comment", "activity", "activity", "comment"]


def test_equal_timestamps_keep_input_order() -> None:
    c1, c2 = comment_at(5), comment_at(5)
    a1 = activity_at(5)

    first = merge_into_unified_feed([c1, c2], [a1])
    second = merge_into_unified_feed([c1, c2], [a1])

    assert item_ids(first) == [c1.id, c2.id, a1.id]
    assert item_ids(second) == item_ids(first)


def test_merge_empty_streams() -> None:
    assert merge_into_unified_feed([], []) == []
    assert item_ids(merge_into_unified_feed([], [activity_at(0)]))


def test_filter_modes() -> None:
    feed = merge_into_unified_feed([comment_at(1)], [activity_at(2)])

    assert len(filter_feed(feed, "all")) == 2
    assert [i.type for i in filter_feed(feed, "comments")] == ["comment"]
    assert [i.type for i in filter_feed(feed, "activity")] == ["activity"]
