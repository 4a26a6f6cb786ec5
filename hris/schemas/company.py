"""Pydantic schemas for Company CRUD."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, field_validator


class CompanyCreate(BaseModel):
    name: str
    description: str | None = None
    user_id: str | None = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name is a required field")
        if len(v) > 255:
            raise ValueError("name must be at most 255 characters")
        return v


class CompanyUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    user_id: str | None = None


class CompanyRead(BaseModel):
    id: str
    name: str
    description: str | None
    user_id: str | None
    created_at: datetime | None
    updated_at: datetime | None

    model_config = {"from_attributes": True}
