"""Pydantic schemas for User CRUD."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, field_validator

from hris.core.app_config import app_config


def _check_role(v: str) -> str:
    if not app_config.is_known_role(v):
        raise ValueError(f"Role must be one of: {', '.join(app_config.tenant_roles)}")
    return v


class UserCreate(BaseModel):
    email: str
    password: str
    full_name: str | None = None
    role: str = "Employee"

    @field_validator("role")
    @classmethod
    def _validate_role(cls, v: str) -> str:
        return _check_role(v)

    @field_validator("email")
    @classmethod
    def _normalise_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Invalid email address")
        return v

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters")
        return v


class UserRead(BaseModel):
    id: str
    email: str
    full_name: str | None
    role: str
    is_active: bool
    created_at: datetime | None

    model_config = {"from_attributes": True}
