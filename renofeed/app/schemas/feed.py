"""
Feed Pydantic schemas: thread groups and unified feed items.
"""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from app.schemas.activity_log import ActivityLogItem
from app.schemas.comment import ContextType, FeedComment

FeedFilterMode = Literal["all", "comments", "activity"]


class ThreadGroup(BaseModel):
    """All comments sharing one context, oldest first."""

    key: str
    context_type: ContextType
    context_label: str
    first_comment: FeedComment
    comments: list[FeedComment]


class UnifiedFeedItem(BaseModel):
    type: Literal["comment", "activity"]
    created_at: datetime
    comment: FeedComment | None = None
    activity: ActivityLogItem | None = None
