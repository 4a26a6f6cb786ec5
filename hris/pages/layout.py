"""
Page layout: Jinja2 environment, navigation and breadcrumbs.

The navigation menu is generated from the entity declarations, filtered by
what the signed-in user's role may read.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates

from hris.core.access import AccessOperationEnum, AccessServiceEnum, access_policy
from hris.core.app_config import app_config
from hris.models.user import User
from hris.pages.declarations import ENTITY_PAGES

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def can(user: User | None, entity: str, operation: AccessOperationEnum) -> bool:
    role = user.role if user is not None else None
    return access_policy.can(role, AccessServiceEnum.PROJECT, entity, operation)


def navigation(user: User | None) -> list[dict[str, str]]:
    return [
        {"label": page.plural, "link": page.list_url}
        for page in ENTITY_PAGES
        if can(user, page.entity, AccessOperationEnum.READ)
    ]


def lookup(record: dict[str, Any], path: str) -> Any:
    """Follow a dotted path through nested dicts; missing links give ``None``."""
    value: Any = record
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def render(
    request: Request,
    name: str,
    context: dict[str, Any],
    *,
    user: User | None = None,
    breadcrumbs: list[dict[str, Any]] | None = None,
    status_code: int = 200,
):
    ctx = {
        "app_config": app_config,
        "user": user,
        "nav": navigation(user) if user is not None else [],
        "breadcrumbs": breadcrumbs or [],
        **context,
    }
    return templates.TemplateResponse(request, name, ctx, status_code=status_code)
