"""
ActivityLog Pydantic schemas.
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from app.schemas.user import UserReadPublic

ActivityAction = Literal[
    "created", "status_changed", "assigned", "deleted", "member_added", "member_removed"
]
ActivityEntityType = Literal["task", "room", "material", "floor_plan", "team_member"]


class ActivityLogItem(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    actor_id: uuid.UUID | None
    action: ActivityAction
    entity_type: ActivityEntityType
    entity_id: uuid.UUID | None
    entity_name: str | None
    changes: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    actor: UserReadPublic | None = None

    model_config = {"from_attributes": True}
