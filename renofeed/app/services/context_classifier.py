"""
Comment context classification.

A comment row carries five nullable context references. ``resolve_context``
turns them into a single ``FeedContext`` once, checking task, material,
generic entity and drawing object in that order and falling back to the
project. Rows with several references set still classify deterministically.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass

from app.schemas.comment import ContextType, FeedComment

PROJECT_KEY = "project"

# Thread-key prefix per context type.
_KEY_PREFIX: dict[str, str] = {
    "task": "task",
    "material": "material",
    "room": "room",
    "drawing_object": "drawing",
}


@dataclass(frozen=True)
class FeedContext:
    type: ContextType
    id: uuid.UUID | None = None

    @property
    def key(self) -> str:
        if self.type == "project":
            return PROJECT_KEY
        return f"{_KEY_PREFIX[self.type]}:{self.id}"


def resolve_context(comment: FeedComment) -> FeedContext:
    if comment.task_id:
        return FeedContext("task", comment.task_id)
    if comment.material_id:
        return FeedContext("material", comment.material_id)
    if comment.entity_id:
        return FeedContext("room", comment.entity_id)
    if comment.drawing_object_id:
        return FeedContext("drawing_object", comment.drawing_object_id)
    return FeedContext("project", comment.project_id)


def classify(comment: FeedComment) -> ContextType:
    return resolve_context(comment).type


def context_key(comment: FeedComment) -> str:
    return resolve_context(comment).key


def label(comment: FeedComment) -> str:
    """Display name of the comment's context, or "" when none is known."""
    names: dict[str, str | None] = {
        "task": comment.task_title,
        "material": comment.material_name,
        "room": comment.room_name,
        "drawing_object": comment.drawing_object_name,
        "project": None,
    }
    return names[classify(comment)] or ""
