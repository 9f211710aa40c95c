"""
Comment posting service.
Resolves the target context inside the project, inserts the comment with
exactly one context reference, then records its mentions.
"""
from __future__ import annotations

import logging
import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import BadRequestException, NotFoundException
from app.crud.comment import crud_comment
from app.crud.floor_map import crud_floor_map_shape
from app.crud.material import crud_material
from app.crud.room import crud_room
from app.crud.task import crud_task
from app.crud.user import crud_user
from app.models.user import User
from app.schemas.comment import CommentCreate, CommentImage, CommentReply, FeedComment
from app.services.context_classifier import FeedContext, resolve_context
from app.services.mention_codec import mentioned_uuids

logger = logging.getLogger(__name__)


class CommentService:

    async def post_comment(
        self,
        db: AsyncSession,
        *,
        project_id: uuid.UUID,
        comment_in: CommentCreate,
        current_user: User,
    ) -> FeedComment:
        """Post a top-level comment on a context of the project."""
        context = FeedContext(comment_in.context_type, comment_in.context_id)
        return await self._insert(
            db,
            project_id=project_id,
            context=context,
            content=comment_in.content,
            images=comment_in.images,
            author=current_user,
        )

    async def reply(
        self,
        db: AsyncSession,
        *,
        project_id: uuid.UUID,
        target_comment_id: uuid.UUID,
        reply_in: CommentReply,
        current_user: User,
    ) -> FeedComment:
        """Post into the thread of ``target_comment_id`` by copying its context."""
        target = await crud_comment.get_with_creator(db, target_comment_id)
        if target is None:
            raise NotFoundException("Comment", str(target_comment_id))
        context = resolve_context(FeedComment.from_model(target))
        if context.type == "project" and context.id != project_id:
            raise NotFoundException("Comment", str(target_comment_id))
        return await self._insert(
            db,
            project_id=project_id,
            context=context,
            content=reply_in.content,
            images=reply_in.images,
            author=current_user,
        )

    # ── Private helpers ───────────────────────────────────────────────────────

    async def _insert(
        self,
        db: AsyncSession,
        *,
        project_id: uuid.UUID,
        context: FeedContext,
        content: str,
        images: list[CommentImage],
        author: User,
    ) -> FeedComment:
        columns, names = await self._context_columns(db, project_id=project_id, context=context)

        comment = await crud_comment.create_comment(
            db,
            content=content,
            author_id=author.id,
            images=[image.model_dump() for image in images],
            **columns,
        )

        candidates = mentioned_uuids(content)
        known = {user.id for user in await crud_user.get_many(db, candidates)}
        mentioned = [user_id for user_id in candidates if user_id in known]
        await crud_comment.add_mentions(db, comment_id=comment.id, user_ids=mentioned)

        logger.info(
            "Comment posted: comment_id=%s context=%s mentions=%d",
            comment.id,
            context.key,
            len(mentioned),
        )

        loaded = await crud_comment.get_with_creator(db, comment.id)
        return FeedComment.from_model(loaded, **names)

    async def _context_columns(
        self,
        db: AsyncSession,
        *,
        project_id: uuid.UUID,
        context: FeedContext,
    ) -> tuple[dict[str, Any], dict[str, str]]:
        """
        Check the context entity belongs to the project and return the
        comment columns to set plus its denormalized display name.
        """
        if context.type == "project":
            return {"project_id": project_id}, {}

        if context.id is None:
            raise BadRequestException(f"context_id is required for {context.type} comments")

        if context.type == "task":
            task = await crud_task.get_in_project(db, task_id=context.id, project_id=project_id)
            if task is None:
                raise NotFoundException("Task", str(context.id))
            return {"task_id": task.id}, {"task_title": task.title}

        if context.type == "material":
            material = await crud_material.get_in_project(
                db, material_id=context.id, project_id=project_id
            )
            if material is None:
                raise NotFoundException("Material", str(context.id))
            return {"material_id": material.id}, {"material_name": material.name}

        if context.type == "room":
            room = await crud_room.get_in_project(db, room_id=context.id, project_id=project_id)
            if room is None:
                raise NotFoundException("Room", str(context.id))
            return {"entity_id": room.id, "entity_type": "room"}, {"room_name": room.name}

        owners = await crud_floor_map_shape.resolve_owners(db, [context.id])
        owner = owners.get(context.id)
        if owner is None or owner.project_id != project_id:
            raise NotFoundException("Drawing object", str(context.id))
        return {"drawing_object_id": context.id}, {"drawing_object_name": owner.name}


comment_service = CommentService()
