"""
Project feed routes.
/api/v1/projects/{project_id}/comments|threads|activity|feed
"""
from __future__ import annotations

from fastapi import APIRouter, Query

from app.core.dependencies import CurrentProject, CurrentUser, DBSession
from app.schemas.activity_log import ActivityLogItem
from app.schemas.comment import FeedComment
from app.schemas.feed import FeedFilterMode, ThreadGroup, UnifiedFeedItem
from app.services.activity_service import activity_service
from app.services.feed_service import feed_service

router = APIRouter(prefix="/projects/{project_id}", tags=["Feed"])


@router.get(
    "/comments",
    response_model=list[FeedComment],
    summary="List every comment in the project, newest first",
)
async def list_project_comments(
    project: CurrentProject,
    current_user: CurrentUser,
    db: DBSession,
) -> list[FeedComment]:
    return await feed_service.list_comments(db, project_id=project.id)


@router.get(
    "/threads",
    response_model=list[ThreadGroup],
    summary="List comment threads grouped by context",
)
async def list_threads(
    project: CurrentProject,
    current_user: CurrentUser,
    db: DBSession,
    mine: bool = Query(default=False, description="Only threads relevant to me"),
) -> list[ThreadGroup]:
    return await feed_service.list_threads(
        db,
        project_id=project.id,
        restrict_to_user_id=current_user.id if mine else None,
    )


@router.get(
    "/activity",
    response_model=list[ActivityLogItem],
    summary="List the project's activity log",
)
async def list_activity(
    project: CurrentProject,
    current_user: CurrentUser,
    db: DBSession,
) -> list[ActivityLogItem]:
    return await activity_service.fetch_project_activities(db, project_id=project.id)


@router.get(
    "/feed",
    response_model=list[UnifiedFeedItem],
    summary="Comments and activity merged into one timeline",
)
async def unified_feed(
    project: CurrentProject,
    current_user: CurrentUser,
    db: DBSession,
    mode: FeedFilterMode = Query(default="all"),
) -> list[UnifiedFeedItem]:
    return await feed_service.unified_feed(db, project_id=project.id, mode=mode)
