"""
Authentication dependencies for FastAPI.

- Extracts the bearer access token from the ``Authorization`` header
- Resolves it to a ``User`` row
- Raises HTTPException 401 when unauthenticated and 403 for non-admins
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from sassify.core.database import get_session
from sassify.core.database.entities.users import ROLE_ADMIN, User
from sassify.core.database.repositories.users import UserRepository
from sassify.core.security import ACCESS_TOKEN_TYPE, TokenError, decode_token

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_session),
) -> User:
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        claims = decode_token(credentials.credentials, ACCESS_TOKEN_TYPE)
        user_id = int(claims["sub"])
    except TokenError as e:
        raise _unauthorized(str(e))
    except (KeyError, TypeError, ValueError):
        raise _unauthorized("Invalid token claims")

    user = await UserRepository(session).get_by_id(user_id)
    if user is None:
        raise _unauthorized("User no longer exists")
    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.has_role(ROLE_ADMIN):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Administrator role required")
    return user
