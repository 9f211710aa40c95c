"""
Comment and CommentMention ORM models.
A comment is attached to exactly one context: a task, a material, a generic
entity (rooms today), a floor-plan shape, or the project itself.
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, JSONType

# Exactly one context reference may be set.
ONE_CONTEXT_SQL = (
    "(CASE WHEN task_id IS NOT NULL THEN 1 ELSE 0 END"
    " + CASE WHEN material_id IS NOT NULL THEN 1 ELSE 0 END"
    " + CASE WHEN entity_id IS NOT NULL THEN 1 ELSE 0 END"
    " + CASE WHEN drawing_object_id IS NOT NULL THEN 1 ELSE 0 END"
    " + CASE WHEN project_id IS NOT NULL THEN 1 ELSE 0 END) = 1"
)


class Comment(Base):
    __tablename__ = "comments"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    images: Mapped[list[dict[str, Any]] | None] = mapped_column(JSONType, nullable=True)
    created_by_user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    # ── Context references ────────────────────────────────────────────────────
    task_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("tasks.id", ondelete="CASCADE"),
        nullable=True,
    )
    material_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("materials.id", ondelete="CASCADE"),
        nullable=True,
    )
    entity_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    entity_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    # No declarative relation: shapes reach their project only through the plan.
    drawing_object_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    project_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=True,
    )

    # ── Relationships ─────────────────────────────────────────────────────────
    creator: Mapped["User"] = relationship("User")  # type: ignore[name-defined]  # noqa: F821
    mentions: Mapped[list["CommentMention"]] = relationship(
        "CommentMention",
        back_populates="comment",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint(ONE_CONTEXT_SQL, name="one_context"),
        Index("ix_comments_task_id", "task_id"),
        Index("ix_comments_material_id", "material_id"),
        Index("ix_comments_entity", "entity_type", "entity_id"),
        Index("ix_comments_drawing_object_id", "drawing_object_id"),
        Index("ix_comments_project_id", "project_id"),
        Index("ix_comments_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Comment id={self.id} author={self.created_by_user_id}>"


class CommentMention(Base):
    __tablename__ = "comment_mentions"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    comment_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    )
    mentioned_user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    # ── Relationships ─────────────────────────────────────────────────────────
    comment: Mapped["Comment"] = relationship("Comment", back_populates="mentions")

    __table_args__ = (
        UniqueConstraint("comment_id", "mentioned_user_id", name="uq_comment_mentions_comment_user"),
        Index("ix_comment_mentions_mentioned_user_id", "mentioned_user_id"),
    )

    def __repr__(self) -> str:
        return f"<CommentMention comment_id={self.comment_id} user_id={self.mentioned_user_id}>"
