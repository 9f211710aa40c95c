"""
Comment CRUD operations.
Context-scoped feed queries plus comment and mention inserts.
"""
from __future__ import annotations

import uuid
from collections.abc import Iterable
from typing import Any

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.crud.base import CRUDBase
from app.models.comment import Comment, CommentMention
from app.models.material import Material
from app.models.room import Room
from app.models.task import Task


def _newest_first(query: Select) -> Select:
    return query.options(selectinload(Comment.creator)).order_by(Comment.created_at.desc())


class CRUDComment(CRUDBase[Comment]):

    # ── Feed queries ──────────────────────────────────────────────────────────

    async def list_task_comments(
        self, db: AsyncSession, *, project_id: uuid.UUID
    ) -> list[tuple[Comment, str]]:
        """Comments on the project's tasks, paired with the task title."""
        result = await db.execute(
            _newest_first(
                select(Comment, Task.title)
                .join(Task, Task.id == Comment.task_id)
                .where(Task.project_id == project_id)
            )
        )
        return [(comment, title) for comment, title in result.all()]

    async def list_material_comments(
        self, db: AsyncSession, *, project_id: uuid.UUID
    ) -> list[tuple[Comment, str]]:
        """Comments on the project's materials, paired with the material name."""
        result = await db.execute(
            _newest_first(
                select(Comment, Material.name)
                .join(Material, Material.id == Comment.material_id)
                .where(Material.project_id == project_id)
            )
        )
        return [(comment, name) for comment, name in result.all()]

    async def list_room_comments(
        self, db: AsyncSession, *, project_id: uuid.UUID
    ) -> list[tuple[Comment, str]]:
        """Comments on the project's rooms, paired with the room name."""
        result = await db.execute(
            _newest_first(
                select(Comment, Room.name)
                .join(Room, Room.id == Comment.entity_id)
                .where(Comment.entity_type == "room", Room.project_id == project_id)
            )
        )
        return [(comment, name) for comment, name in result.all()]

    async def list_drawing_object_comments(self, db: AsyncSession) -> list[Comment]:
        """
        Every comment attached to a floor-plan shape, across all projects.
        Callers scope these to a project through the shape's plan.
        """
        result = await db.execute(
            _newest_first(select(Comment).where(Comment.drawing_object_id.is_not(None)))
        )
        return list(result.scalars().all())

    async def list_project_comments(
        self, db: AsyncSession, *, project_id: uuid.UUID
    ) -> list[Comment]:
        """General comments posted directly on the project."""
        result = await db.execute(
            _newest_first(select(Comment).where(Comment.project_id == project_id))
        )
        return list(result.scalars().all())

    async def get_with_creator(
        self, db: AsyncSession, comment_id: uuid.UUID
    ) -> Comment | None:
        result = await db.execute(
            select(Comment)
            .options(selectinload(Comment.creator))
            .where(Comment.id == comment_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    # ── Mentions ──────────────────────────────────────────────────────────────

    async def list_mentioned_comment_ids(
        self,
        db: AsyncSession,
        *,
        comment_ids: Iterable[uuid.UUID],
        user_id: uuid.UUID,
    ) -> set[uuid.UUID]:
        """Of ``comment_ids``, return those with a mention row for ``user_id``."""
        id_list = list(comment_ids)
        if not id_list:
            return set()
        result = await db.execute(
            select(CommentMention.comment_id).where(
                CommentMention.mentioned_user_id == user_id,
                CommentMention.comment_id.in_(id_list),
            )
        )
        return set(result.scalars().all())

    # ── Inserts ───────────────────────────────────────────────────────────────

    async def create_comment(
        self,
        db: AsyncSession,
        *,
        content: str,
        author_id: uuid.UUID,
        images: list[dict[str, Any]] | None = None,
        **context: Any,
    ) -> Comment:
        """Insert a comment. ``context`` holds exactly one context reference."""
        comment = Comment(
            content=content,
            created_by_user_id=author_id,
            images=images or None,
            **context,
        )
        db.add(comment)
        await db.flush()
        await db.refresh(comment)
        return comment

    async def add_mentions(
        self,
        db: AsyncSession,
        *,
        comment_id: uuid.UUID,
        user_ids: Iterable[uuid.UUID],
    ) -> list[CommentMention]:
        mentions = [
            CommentMention(comment_id=comment_id, mentioned_user_id=user_id)
            for user_id in user_ids
        ]
        if mentions:
            db.add_all(mentions)
            await db.flush()
        return mentions


crud_comment = CRUDComment(Comment)
