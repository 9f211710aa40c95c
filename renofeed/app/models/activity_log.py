"""
ActivityLog ORM model.
Immutable audit trail of project lifecycle events, written by database
triggers on tasks, rooms, materials, members and floor plans. This service
only reads it.
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, Enum, ForeignKey, Index, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, JSONType

ACTIVITY_ACTIONS = (
    "created",
    "status_changed",
    "assigned",
    "deleted",
    "member_added",
    "member_removed",
)
ACTIVITY_ENTITY_TYPES = ("task", "room", "material", "floor_plan", "team_member")


class ActivityLog(Base):
    __tablename__ = "activity_log"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    actor_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    action: Mapped[str] = mapped_column(
        Enum(*ACTIVITY_ACTIONS, name="activity_action_enum"),
        nullable=False,
    )
    entity_type: Mapped[str] = mapped_column(
        Enum(*ACTIVITY_ENTITY_TYPES, name="activity_entity_type_enum"),
        nullable=False,
    )
    entity_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    entity_name: Mapped[str | None] = mapped_column(String(500), nullable=True)
    changes: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    # ── Relationships ─────────────────────────────────────────────────────────
    actor: Mapped["User | None"] = relationship("User")  # type: ignore[name-defined]  # noqa: F821

    __table_args__ = (
        Index("ix_activity_log_project_created", "project_id", "created_at"),
        Index("ix_activity_log_entity_type_id", "entity_type", "entity_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<ActivityLog id={self.id} project_id={self.project_id} "
            f"action={self.action!r} entity_type={self.entity_type!r}>"
        )
