"""
Project comment aggregation.

Collects every comment visible in a project from independent context-scoped
queries and returns them newest first. Drawing-object comments cannot be
joined to their project in one hop (shape -> plan -> project), so they are
fetched unscoped and reconciled in memory against a batched shape lookup.

Store errors propagate: a failed sub-query fails the whole aggregate rather
than returning a silently truncated list.
"""
from __future__ import annotations

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.comment import crud_comment
from app.crud.floor_map import crud_floor_map_shape
from app.schemas.comment import FeedComment
from app.services.ordering import newest_first

logger = logging.getLogger(__name__)


class CommentAggregator:

    async def aggregate(
        self, db: AsyncSession, *, project_id: uuid.UUID
    ) -> list[FeedComment]:
        task_comments = [
            FeedComment.from_model(comment, task_title=title)
            for comment, title in await crud_comment.list_task_comments(db, project_id=project_id)
        ]
        material_comments = [
            FeedComment.from_model(comment, material_name=name)
            for comment, name in await crud_comment.list_material_comments(
                db, project_id=project_id
            )
        ]
        room_comments = [
            FeedComment.from_model(comment, room_name=name)
            for comment, name in await crud_comment.list_room_comments(db, project_id=project_id)
        ]
        drawing_comments = await self.drawing_object_comments(db, project_id=project_id)
        project_comments = [
            FeedComment.from_model(comment)
            for comment in await crud_comment.list_project_comments(db, project_id=project_id)
        ]

        logger.debug(
            "Aggregated comments for project %s: tasks=%d materials=%d rooms=%d "
            "drawing_objects=%d project=%d",
            project_id,
            len(task_comments),
            len(material_comments),
            len(room_comments),
            len(drawing_comments),
            len(project_comments),
        )

        return newest_first(
            task_comments
            + material_comments
            + room_comments
            + drawing_comments
            + project_comments
        )

    async def drawing_object_comments(
        self, db: AsyncSession, *, project_id: uuid.UUID
    ) -> list[FeedComment]:
        """Drawing-object comments whose shape resolves to ``project_id``."""
        comments = await crud_comment.list_drawing_object_comments(db)
        if not comments:
            return []

        owners = await crud_floor_map_shape.resolve_owners(
            db, (c.drawing_object_id for c in comments if c.drawing_object_id)
        )

        matched: list[FeedComment] = []
        for comment in comments:
            owner = owners.get(comment.drawing_object_id)  # type: ignore[arg-type]
            if owner is None or owner.project_id != project_id:
                continue
            matched.append(FeedComment.from_model(comment, drawing_object_name=owner.name))
        return matched


comment_aggregator = CommentAggregator()
