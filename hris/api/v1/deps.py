"""
FastAPI dependencies — auth guards and database session.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Optional

from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hris.core.access import AccessOperationEnum, AccessServiceEnum, access_policy
from hris.core.security import decode_access_token, strip_bearer
from hris.db.session import get_db
from hris.models.user import User

# We use auto_error=False so we can manually check for the cookie if header is missing
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


async def user_from_token(token: str | None, db: AsyncSession) -> User | None:
    """Resolve an access token to a stored user, or ``None``."""
    if not token:
        return None
    payload = decode_access_token(token)
    if payload is None:
        return None
    user_id: str | None = payload.get("sub")
    if user_id is None:
        return None
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


# ── Auth dependencies ───────────────────────────────────────────────
async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    access_token: Optional[str] = Cookie(default=None),  # Read from HttpOnly Cookie
    db: AsyncSession = Depends(get_db),
) -> User:
    """Decode JWT from Header OR Cookie, look up user."""
    # Priority: Header > Cookie
    user = await user_from_token(token or strip_bearer(access_token), db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def get_current_active_user(
    current_user: User = Depends(get_current_user),
) -> User:
    """Reject inactive accounts."""
    if not current_user.is_active:
        raise HTTPException(status_code=400, detail="Inactive user account")
    return current_user


def require_ability(
    entity: str,
    operation: AccessOperationEnum,
    service: AccessServiceEnum = AccessServiceEnum.PROJECT,
) -> Callable:
    """Build a dependency that lets the request through only if the user's role allows it."""

    async def _check(current_user: User = Depends(get_current_active_user)) -> User:
        if not access_policy.can(current_user.role, service, entity, operation):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Not allowed to {operation.value} {entity}",
            )
        return current_user

    return _check


require_user_manager = require_ability("user", AccessOperationEnum.CREATE)
