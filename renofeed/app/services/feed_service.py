"""
Project feed business logic.
Composes aggregation, grouping, audience filtering and the unified merge
behind the feed endpoints. These are pull-based reads: callers re-invoke
them whenever a change notification arrives.
"""
from __future__ import annotations

import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import FeedUnavailableException
from app.schemas.activity_log import ActivityLogItem
from app.schemas.comment import FeedComment
from app.schemas.feed import FeedFilterMode, ThreadGroup, UnifiedFeedItem
from app.services.activity_service import activity_service
from app.services.audience_filter import audience_filter
from app.services.comment_aggregator import comment_aggregator
from app.services.feed_merger import filter_feed, merge_into_unified_feed
from app.services.thread_grouper import group_comments

logger = logging.getLogger(__name__)


class FeedService:

    async def list_comments(
        self, db: AsyncSession, *, project_id: uuid.UUID
    ) -> list[FeedComment]:
        try:
            return await comment_aggregator.aggregate(db, project_id=project_id)
        except SQLAlchemyError as exc:
            logger.error("Failed to load comments: project_id=%s: %s", project_id, exc)
            raise FeedUnavailableException() from exc

    async def list_threads(
        self,
        db: AsyncSession,
        *,
        project_id: uuid.UUID,
        restrict_to_user_id: uuid.UUID | None = None,
    ) -> list[ThreadGroup]:
        """Comment threads of the project, optionally only those relevant to one user."""
        groups = group_comments(await self.list_comments(db, project_id=project_id))
        if restrict_to_user_id is None:
            return groups
        try:
            return await audience_filter.filter_for_user(
                db, groups=groups, user_id=restrict_to_user_id, project_id=project_id
            )
        except SQLAlchemyError as exc:
            logger.error(
                "Failed to filter threads: project_id=%s user_id=%s: %s",
                project_id,
                restrict_to_user_id,
                exc,
            )
            raise FeedUnavailableException() from exc

    async def unified_feed(
        self,
        db: AsyncSession,
        *,
        project_id: uuid.UUID,
        mode: FeedFilterMode = "all",
    ) -> list[UnifiedFeedItem]:
        comments: list[FeedComment] = []
        activities: list[ActivityLogItem] = []
        if mode != "activity":
            comments = await self.list_comments(db, project_id=project_id)
        if mode != "comments":
            activities = await activity_service.fetch_project_activities(
                db, project_id=project_id
            )
        return filter_feed(merge_into_unified_feed(comments, activities), mode)


feed_service = FeedService()
