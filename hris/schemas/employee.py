"""Pydantic schemas for Employee CRUD."""

from __future__ import annotations

import re
from datetime import datetime

from pydantic import BaseModel, field_validator

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _clean_email(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip().lower()
    if not _EMAIL_RE.match(v):
        raise ValueError("email must be a valid email")
    return v


class EmployeeCreate(BaseModel):
    first_name: str
    last_name: str
    email: str | None = None
    company_id: str | None = None
    user_id: str | None = None

    @field_validator("first_name", "last_name")
    @classmethod
    def _name(cls, v: str) -> str:
        v = v.strip()
        if len(v) > 100:
            raise ValueError("must be at most 100 characters")
        return v

    @field_validator("email")
    @classmethod
    def _email(cls, v: str | None) -> str | None:
        return _clean_email(v)


class EmployeeUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    company_id: str | None = None
    user_id: str | None = None

    @field_validator("email")
    @classmethod
    def _email(cls, v: str | None) -> str | None:
        return _clean_email(v)


class EmployeeRead(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str | None
    company_id: str | None
    user_id: str | None
    created_at: datetime | None
    updated_at: datetime | None

    model_config = {"from_attributes": True}
