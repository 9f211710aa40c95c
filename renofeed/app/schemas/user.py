"""
User Pydantic schemas.
"""
from __future__ import annotations

import uuid

from pydantic import BaseModel


class UserReadPublic(BaseModel):
    """Minimal public profile, safe to expose in comment and activity responses."""

    id: uuid.UUID
    name: str
    email: str | None = None
    avatar_url: str | None = None

    model_config = {"from_attributes": True}


class MentionCandidate(UserReadPublic):
    """A project member offered in the @-mention picker."""
