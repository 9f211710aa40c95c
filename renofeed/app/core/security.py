"""
Security utilities: JWT verification for upstream-issued access tokens.
Tokens use python-jose and share SECRET_KEY with the auth provider.
"""
from __future__ import annotations

from typing import Any

from jose import JWTError, jwt

from app.core.config import settings


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate an access token.
    Raises JWTError on failure.
    """
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    if payload.get("type") != "access":
        raise JWTError("Invalid token type")
    return payload
