"""
Project CRUD operations.
"""
from __future__ import annotations

import uuid

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import CRUDBase
from app.models.project import Project, ProjectMember
from app.models.user import User


class CRUDProject(CRUDBase[Project]):

    async def list_members(
        self,
        db: AsyncSession,
        *,
        project_id: uuid.UUID,
        search: str | None = None,
        limit: int = 50,
    ) -> list[User]:
        """Return the users sharing a project, optionally matching name or email."""
        query = (
            select(User)
            .join(ProjectMember, ProjectMember.user_id == User.id)
            .where(ProjectMember.project_id == project_id)
        )
        if search:
            search_term = f"%{search}%"
            query = query.where(
                or_(User.name.ilike(search_term), User.email.ilike(search_term))
            )
        result = await db.execute(query.order_by(User.name.asc()).limit(limit))
        return list(result.scalars().all())


crud_project = CRUDProject(Project)
