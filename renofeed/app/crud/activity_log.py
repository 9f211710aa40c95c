"""
Activity log CRUD operations (read-only).
"""
from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.crud.base import CRUDBase
from app.models.activity_log import ActivityLog


class CRUDActivityLog(CRUDBase[ActivityLog]):

    async def list_by_project(
        self, db: AsyncSession, *, project_id: uuid.UUID
    ) -> list[ActivityLog]:
        result = await db.execute(
            select(ActivityLog)
            .options(selectinload(ActivityLog.actor))
            .where(ActivityLog.project_id == project_id)
            .order_by(ActivityLog.created_at.desc())
        )
        return list(result.scalars().all())


crud_activity_log = CRUDActivityLog(ActivityLog)
