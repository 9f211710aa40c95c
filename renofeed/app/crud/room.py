"""
Room CRUD operations.
"""
from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import CRUDBase
from app.models.room import Room


class CRUDRoom(CRUDBase[Room]):

    async def get_in_project(
        self, db: AsyncSession, *, room_id: uuid.UUID, project_id: uuid.UUID
    ) -> Room | None:
        result = await db.execute(
            select(Room).where(Room.id == room_id, Room.project_id == project_id)
        )
        return result.scalar_one_or_none()


crud_room = CRUDRoom(Room)
