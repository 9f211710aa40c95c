"""
FastAPI dependency injection functions.
Provides get_db, get_current_user, and get_project.
"""
from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidTokenException, NotFoundException, UnauthorizedException
from app.core.security import decode_access_token
from app.crud.project import crud_project
from app.crud.user import crud_user
from app.db.session import get_db
from app.models.project import Project
from app.models.user import User

# Re-export get_db so routes can import from one place
__all__ = ["get_db", "get_current_user", "get_project", "DBSession", "CurrentUser", "CurrentProject"]

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    db: Annotated[AsyncSession, Depends(get_db)],
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ] = None,
) -> User:
    """
    Extract and validate the JWT access token from the Authorization header.
    Returns the authenticated User model.
    """
    if credentials is None:
        raise UnauthorizedException("Missing authentication token")

    token = credentials.credentials
    try:
        payload = decode_access_token(token)
    except JWTError:
        raise InvalidTokenException("Invalid or expired access token")

    user_id_str = payload.get("sub")
    if not user_id_str:
        raise InvalidTokenException("Malformed token: missing subject")

    try:
        user_id = uuid.UUID(user_id_str)
    except ValueError:
        raise InvalidTokenException("Malformed token: invalid subject format")

    user = await crud_user.get(db, user_id)
    if user is None:
        raise UnauthorizedException("User not found")

    return user


async def get_project(
    project_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Project:
    """Resolve the project path parameter, 404 if it does not exist."""
    project = await crud_project.get(db, project_id)
    if project is None:
        raise NotFoundException("Project", str(project_id))
    return project


# Convenience type aliases for route signatures
DBSession = Annotated[AsyncSession, Depends(get_db)]
CurrentUser = Annotated[User, Depends(get_current_user)]
CurrentProject = Annotated[Project, Depends(get_project)]
