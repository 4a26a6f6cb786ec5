"""
Login root and logout for the HTML pages.
"""

# Annotations stay evaluated here: slowapi's wrapper hides this module's
# globals from FastAPI's signature resolution.

import logging

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from hris.api.v1.deps import user_from_token
from hris.api.v1.endpoints.auth import authenticate, set_auth_cookies
from hris.core.config import settings
from hris.core.rate_limit import limiter
from hris.core.security import strip_bearer
from hris.db.session import get_db
from hris.pages.declarations import SICK_LEAVES
from hris.pages.guards import LOGIN_ROOT
from hris.pages.layout import navigation, render

router = APIRouter(tags=["pages:auth"])
logger = logging.getLogger(__name__)


def _landing(user) -> str:
    links = navigation(user)
    if any(link["link"] == SICK_LEAVES.list_url for link in links):
        return SICK_LEAVES.list_url
    return links[0]["link"] if links else LOGIN_ROOT


@router.get(LOGIN_ROOT, name="login")
async def login_page(request: Request, db: AsyncSession = Depends(get_db)):
    user = await user_from_token(strip_bearer(request.cookies.get("access_token")), db)
    if user is not None and user.is_active:
        return RedirectResponse(_landing(user), status_code=303)
    return render(request, "login.html", {"email": "", "error": None})


@router.post("/login", name="login-submit")
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login_submit(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    db: AsyncSession = Depends(get_db),
):
    try:
        user = await authenticate(db, email, password)
    except HTTPException as exc:
        logger.info("Failed page login for %s", email)
        return render(
            request,
            "login.html",
            {"email": email, "error": exc.detail},
            status_code=exc.status_code,
        )
    response = RedirectResponse(_landing(user), status_code=303)
    set_auth_cookies(response, user.id)
    return response


@router.post("/logout", name="logout")
async def logout_submit():
    response = RedirectResponse(LOGIN_ROOT, status_code=303)
    response.delete_cookie("access_token")
    response.delete_cookie("refresh_token")
    return response
