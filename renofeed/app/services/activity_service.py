"""
Activity feed service.
Reads the project's audit trail. Entries are written by database triggers,
never by this service. A failed read degrades to an empty feed so the
comment half of the page still renders.
"""
from __future__ import annotations

import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.activity_log import crud_activity_log
from app.schemas.activity_log import ActivityLogItem
from app.services.ordering import newest_first

logger = logging.getLogger(__name__)


class ActivityService:

    async def fetch_project_activities(
        self,
        db: AsyncSession,
        *,
        project_id: uuid.UUID,
    ) -> list[ActivityLogItem]:
        """Return the project's activity entries, newest first, or [] on store failure."""
        try:
            entries = await crud_activity_log.list_by_project(db, project_id=project_id)
        except SQLAlchemyError:
            logger.exception("Failed to fetch activities: project_id=%s", project_id)
            return []
        return newest_first(ActivityLogItem.model_validate(entry) for entry in entries)


activity_service = ActivityService()
