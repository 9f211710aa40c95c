"""
Material CRUD operations.
"""
from __future__ import annotations

import uuid
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import CRUDBase
from app.models.material import Material


class CRUDMaterial(CRUDBase[Material]):

    async def get_in_project(
        self, db: AsyncSession, *, material_id: uuid.UUID, project_id: uuid.UUID
    ) -> Material | None:
        result = await db.execute(
            select(Material).where(
                Material.id == material_id, Material.project_id == project_id
            )
        )
        return result.scalar_one_or_none()

    async def get_assigned_ids(
        self,
        db: AsyncSession,
        *,
        material_ids: Iterable[uuid.UUID],
        user_id: uuid.UUID,
        project_id: uuid.UUID,
    ) -> set[uuid.UUID]:
        """Of ``material_ids``, return those assigned to ``user_id``. One query."""
        id_list = list(material_ids)
        if not id_list:
            return set()
        result = await db.execute(
            select(Material.id).where(
                Material.id.in_(id_list),
                Material.project_id == project_id,
                Material.assigned_to_user_id == user_id,
            )
        )
        return set(result.scalars().all())


crud_material = CRUDMaterial(Material)
