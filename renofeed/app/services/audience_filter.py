"""
Personalized thread filtering ("assigned to me" feed view).

A thread is relevant to a user when any of its comments was written by
them, mentions them (in the mention table or in the content itself), or
sits on a task or material assigned to them. The mention table and the
content are checked independently because either can miss a mention
depending on how the comment was posted.

Store lookups are batched across all threads: one query each for task
assignees, material assignees and mention rows, whatever the comment count.
"""
from __future__ import annotations

import uuid
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.comment import crud_comment
from app.crud.material import crud_material
from app.crud.task import crud_task
from app.schemas.comment import FeedComment
from app.schemas.feed import ThreadGroup
from app.services.mention_codec import mentioned_uuids


class AudienceFilter:

    async def filter_for_user(
        self,
        db: AsyncSession,
        *,
        groups: Sequence[ThreadGroup],
        user_id: uuid.UUID,
        project_id: uuid.UUID,
    ) -> list[ThreadGroup]:
        comments = [c for g in groups for c in g.comments]
        task_ids = {c.task_id for c in comments if c.task_id}
        material_ids = {c.material_id for c in comments if c.material_id}

        assigned_tasks = await crud_task.get_assigned_ids(
            db, task_ids=task_ids, user_id=user_id, project_id=project_id
        )
        assigned_materials = await crud_material.get_assigned_ids(
            db, material_ids=material_ids, user_id=user_id, project_id=project_id
        )
        mentioned = await crud_comment.list_mentioned_comment_ids(
            db, comment_ids={c.id for c in comments}, user_id=user_id
        )

        def is_relevant(comment: FeedComment) -> bool:
            if comment.created_by_user_id == user_id:
                return True
            if comment.id in mentioned:
                return True
            if user_id in mentioned_uuids(comment.content):
                return True
            if comment.task_id and comment.task_id in assigned_tasks:
                return True
            if comment.material_id and comment.material_id in assigned_materials:
                return True
            return False

        return [g for g in groups if any(is_relevant(c) for c in g.comments)]


audience_filter = AudienceFilter()
