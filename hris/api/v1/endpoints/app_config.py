"""
Read-only app configuration endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from hris.api.v1.deps import get_current_active_user
from hris.core.app_config import app_config
from hris.models.user import User
from hris.schemas.app_config import AppConfigRead

router = APIRouter(tags=["app-config"])


@router.get("/app-config", response_model=AppConfigRead)
async def read_app_config(
    current_user: User = Depends(get_current_active_user),
) -> AppConfigRead:
    return AppConfigRead(
        **app_config.model_dump(),
        abilities=list(app_config.abilities_for(current_user.role)),
    )
