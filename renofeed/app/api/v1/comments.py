"""
Comment posting routes.
/api/v1/projects/{project_id}/comments
"""

import uuid

from fastapi import APIRouter, Request, status

from app.core.config import settings
from app.core.dependencies import CurrentProject, CurrentUser, DBSession
from app.core.rate_limit import limiter
from app.schemas.comment import CommentCreate, CommentReply, FeedComment
from app.services.comment_service import comment_service

router = APIRouter(prefix="/projects/{project_id}", tags=["Comments"])


@router.post(
    "/comments",
    response_model=FeedComment,
    status_code=status.HTTP_201_CREATED,
    summary="Post a comment on the project or one of its entities",
)
@limiter.limit(settings.RATE_LIMIT_COMMENTS)
async def create_comment(
    request: Request,
    comment_in: CommentCreate,
    project: CurrentProject,
    current_user: CurrentUser,
    db: DBSession,
) -> FeedComment:
    return await comment_service.post_comment(
        db, project_id=project.id, comment_in=comment_in, current_user=current_user
    )


@router.post(
    "/comments/{comment_id}/replies",
    response_model=FeedComment,
    status_code=status.HTTP_201_CREATED,
    summary="Reply in the thread of an existing comment",
)
@limiter.limit(settings.RATE_LIMIT_COMMENTS)
async def reply_to_comment(
    request: Request,
    comment_id: uuid.UUID,
    reply_in: CommentReply,
    project: CurrentProject,
    current_user: CurrentUser,
    db: DBSession,
) -> FeedComment:
    return await comment_service.reply(
        db,
        project_id=project.id,
        target_comment_id=comment_id,
        reply_in=reply_in,
        current_user=current_user,
    )
