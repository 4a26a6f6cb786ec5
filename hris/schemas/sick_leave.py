"""Pydantic schemas for SickLeave CRUD."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ValidationInfo, field_validator

from hris.schemas.employee import EmployeeRead


class SickLeaveCreate(BaseModel):
    start_date: date
    end_date: date
    doctor_note: bool
    employee_id: str

    @field_validator("employee_id")
    @classmethod
    def _employee(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("employee_id is a required field")
        return v

    @field_validator("end_date")
    @classmethod
    def _end_after_start(cls, v: date, info: ValidationInfo) -> date:
        start = info.data.get("start_date")
        if start is not None and v < start:
            raise ValueError("end_date must not be before start_date")
        return v


class SickLeaveUpdate(BaseModel):
    start_date: date | None = None
    end_date: date | None = None
    doctor_note: bool | None = None
    employee_id: str | None = None


class SickLeaveRead(BaseModel):
    id: str
    start_date: date
    end_date: date
    doctor_note: bool
    employee_id: str
    created_at: datetime | None
    updated_at: datetime | None
    employee: EmployeeRead | None = None

    model_config = {"from_attributes": True}
