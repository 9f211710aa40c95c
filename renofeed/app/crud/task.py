"""
Task CRUD operations.
"""
from __future__ import annotations

import uuid
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import CRUDBase
from app.models.task import Task


class CRUDTask(CRUDBase[Task]):

    async def get_in_project(
        self, db: AsyncSession, *, task_id: uuid.UUID, project_id: uuid.UUID
    ) -> Task | None:
        result = await db.execute(
            select(Task).where(Task.id == task_id, Task.project_id == project_id)
        )
        return result.scalar_one_or_none()

    async def get_assigned_ids(
        self,
        db: AsyncSession,
        *,
        task_ids: Iterable[uuid.UUID],
        user_id: uuid.UUID,
        project_id: uuid.UUID,
    ) -> set[uuid.UUID]:
        """Of ``task_ids``, return those assigned to ``user_id``. One query."""
        id_list = list(task_ids)
        if not id_list:
            return set()
        result = await db.execute(
            select(Task.id).where(
                Task.id.in_(id_list),
                Task.project_id == project_id,
                Task.assigned_to_id == user_id,
            )
        )
        return set(result.scalars().all())


crud_task = CRUDTask(Task)
