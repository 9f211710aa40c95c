"""
Floor-plan shape CRUD operations.
"""
from __future__ import annotations

import uuid
from collections.abc import Iterable
from typing import NamedTuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import CRUDBase
from app.models.floor_map import FloorMapPlan, FloorMapShape


class ShapeOwner(NamedTuple):
    name: str
    project_id: uuid.UUID


class CRUDFloorMapShape(CRUDBase[FloorMapShape]):

    async def resolve_owners(
        self, db: AsyncSession, shape_ids: Iterable[uuid.UUID]
    ) -> dict[uuid.UUID, ShapeOwner]:
        """
        Map each shape id to its display name and the project owning its plan.
        Unknown ids are absent from the result. One query for the whole batch.
        """
        id_list = list(set(shape_ids))
        if not id_list:
            return {}
        result = await db.execute(
            select(FloorMapShape.id, FloorMapShape.name, FloorMapPlan.project_id)
            .join(FloorMapPlan, FloorMapPlan.id == FloorMapShape.plan_id)
            .where(FloorMapShape.id.in_(id_list))
        )
        return {
            shape_id: ShapeOwner(name=name or "", project_id=project_id)
            for shape_id, name, project_id in result.all()
        }


crud_floor_map_shape = CRUDFloorMapShape(FloorMapShape)
