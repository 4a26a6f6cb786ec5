"""
Access gate for HTML pages.

``require_page_user`` redirects anonymous visitors to the login root before
anything renders; ``with_authorization`` adds the capability check on top.
Both raise exceptions that ``register_page_handlers`` turns into responses.
"""

from __future__ import annotations

from collections.abc import Callable

from fastapi import Depends, FastAPI, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from hris.api.v1.deps import user_from_token
from hris.core.access import AccessOperationEnum, AccessServiceEnum, access_policy
from hris.core.security import strip_bearer
from hris.db.session import get_db
from hris.models.user import User

LOGIN_ROOT = "/"


class LoginRequired(Exception):
    def __init__(self, redirect_to: str = LOGIN_ROOT) -> None:
        self.redirect_to = redirect_to


class AccessDenied(Exception):
    def __init__(self, user: User, entity: str, operation: AccessOperationEnum) -> None:
        self.user = user
        self.entity = entity
        self.operation = operation


async def require_page_user(request: Request, db: AsyncSession = Depends(get_db)) -> User:
    token = strip_bearer(request.cookies.get("access_token"))
    user = await user_from_token(token, db)
    if user is None or not user.is_active:
        raise LoginRequired()
    return user


def with_authorization(
    entity: str,
    operation: AccessOperationEnum,
    service: AccessServiceEnum = AccessServiceEnum.PROJECT,
) -> Callable:
    async def _check(user: User = Depends(require_page_user)) -> User:
        if not access_policy.can(user.role, service, entity, operation):
            raise AccessDenied(user, entity, operation)
        return user

    return _check


def register_page_handlers(app: FastAPI) -> None:
    from hris.pages.layout import render

    async def _login_required(_request: Request, exc: LoginRequired) -> RedirectResponse:
        return RedirectResponse(exc.redirect_to, status_code=303)

    async def _access_denied(request: Request, exc: AccessDenied):
        return render(
            request,
            "forbidden.html",
            {"entity": exc.entity.replace("_", " "), "operation": exc.operation.value},
            user=exc.user,
            status_code=403,
        )

    app.add_exception_handler(LoginRequired, _login_required)  # type: ignore[arg-type]
    app.add_exception_handler(AccessDenied, _access_denied)  # type: ignore[arg-type]
