"""
User CRUD operations.
"""
from __future__ import annotations

from app.crud.base import CRUDBase
from app.models.user import User


class CRUDUser(CRUDBase[User]):
    pass


crud_user = CRUDUser(User)
