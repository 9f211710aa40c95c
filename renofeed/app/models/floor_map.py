"""
Floor-plan ORM models.
A plan belongs to a project; shapes (walls, fixtures, annotations) belong
to a plan. Comments reference shapes through ``drawing_object_id``.
"""
from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class FloorMapPlan(Base):
    __tablename__ = "floor_map_plans"

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
    name: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    # ── Relationships ─────────────────────────────────────────────────────────
    shapes: Mapped[list["FloorMapShape"]] = relationship(
        "FloorMapShape",
        back_populates="plan",
        cascade="all, delete-orphan",
    )

    __table_args__ = (Index("ix_floor_map_plans_project_id", "project_id"),)

    def __repr__(self) -> str:
        return f"<FloorMapPlan id={self.id} project_id={self.project_id}>"


class FloorMapShape(Base):
    __tablename__ = "floor_map_shapes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    plan_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("floor_map_plans.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    shape_type: Mapped[str] = mapped_column(String(50), nullable=False, default="object")

    # ── Relationships ─────────────────────────────────────────────────────────
    plan: Mapped["FloorMapPlan"] = relationship("FloorMapPlan", back_populates="shapes")

    __table_args__ = (Index("ix_floor_map_shapes_plan_id", "plan_id"),)

    def __repr__(self) -> str:
        return f"<FloorMapShape id={self.id} name={self.name!r}>"
