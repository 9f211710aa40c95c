"""
Comment Pydantic schemas.
Covers posting payloads, the flat feed comment shape and mention fragments.
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, computed_field, field_validator

from app.core.config import settings
from app.schemas.user import UserReadPublic

ContextType = Literal["task", "material", "room", "drawing_object", "project"]


# ── Mentions ──────────────────────────────────────────────────────────────────

class Mention(BaseModel):
    name: str
    user_id: str

    model_config = {"frozen": True}


class MentionFragment(BaseModel):
    """A span of rendered comment content: literal text or a styled mention."""

    kind: Literal["text", "mention"]
    text: str
    user_id: str | None = None


# ── Create ────────────────────────────────────────────────────────────────────

class CommentImage(BaseModel):
    id: str
    url: str = Field(min_length=1, max_length=2000)
    filename: str = Field(default="", max_length=500)


class CommentReply(BaseModel):
    content: str
    images: list[CommentImage] = Field(default_factory=list, max_length=10)

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Comment content must not be empty")
        if len(v) > settings.MAX_COMMENT_LENGTH:
            raise ValueError(
                f"Comment content must be at most {settings.MAX_COMMENT_LENGTH} characters"
            )
        return v


class CommentCreate(CommentReply):
    """Top-level post. Without a context reference the comment is project-level."""

    context_type: ContextType = "project"
    context_id: uuid.UUID | None = None


# ── Read ──────────────────────────────────────────────────────────────────────

class FeedComment(BaseModel):
    """
    A comment as the feed sees it: flat context references plus the
    denormalized name of whichever context it is attached to.
    """

    id: uuid.UUID
    content: str
    created_at: datetime
    created_by_user_id: uuid.UUID
    images: list[CommentImage] | None = None
    creator: UserReadPublic | None = None

    task_id: uuid.UUID | None = None
    material_id: uuid.UUID | None = None
    entity_id: uuid.UUID | None = None
    entity_type: str | None = None
    drawing_object_id: uuid.UUID | None = None
    project_id: uuid.UUID | None = None

    task_title: str | None = None
    material_name: str | None = None
    room_name: str | None = None
    drawing_object_name: str | None = None

    @computed_field  # type: ignore[misc]
    @property
    def content_fragments(self) -> list[MentionFragment]:
        from app.services.mention_codec import render

        return render(self.content)

    @classmethod
    def from_model(cls, comment: Any, **names: str | None) -> "FeedComment":
        """
        Build from a Comment ORM row whose ``creator`` is already loaded.
        ``names`` carries the denormalized context name, e.g. ``task_title=...``.
        """
        return cls(
            id=comment.id,
            content=comment.content,
            created_at=comment.created_at,
            created_by_user_id=comment.created_by_user_id,
            images=comment.images,
            creator=UserReadPublic.model_validate(comment.creator) if comment.creator else None,
            task_id=comment.task_id,
            material_id=comment.material_id,
            entity_id=comment.entity_id,
            entity_type=comment.entity_type,
            drawing_object_id=comment.drawing_object_id,
            project_id=comment.project_id,
            **names,
        )
