"""
Query filter shapes for list endpoints.

Every field is optional; the backend ANDs together whichever are set.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class GetQuery(BaseModel):
    limit: int = Field(default=20, ge=1, le=500)
    offset: int = Field(default=0, ge=0)
    search_term: str | None = None
    # column name, prefixed with "-" for descending
    order: str | None = None


class SickLeaveQuery(GetQuery):
    id: str | None = None
    employee_id: str | None = None


class EmployeeQuery(GetQuery):
    id: str | None = None
    company_id: str | None = None
    user_id: str | None = None


class CompanyQuery(GetQuery):
    id: str | None = None
    user_id: str | None = None
