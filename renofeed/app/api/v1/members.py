"""
Project member routes, used by the @-mention picker.
"""
from __future__ import annotations

from fastapi import APIRouter, Query

from app.core.dependencies import CurrentProject, CurrentUser, DBSession
from app.crud.project import crud_project
from app.schemas.user import MentionCandidate

router = APIRouter(prefix="/projects/{project_id}", tags=["Members"])


@router.get(
    "/members",
    response_model=list[MentionCandidate],
    summary="List project members matching a mention query",
)
async def list_members(
    project: CurrentProject,
    current_user: CurrentUser,
    db: DBSession,
    q: str | None = Query(default=None, max_length=100),
) -> list[MentionCandidate]:
    members = await crud_project.list_members(db, project_id=project.id, search=q)
    return [MentionCandidate.model_validate(m) for m in members]
