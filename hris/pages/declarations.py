"""
Entity page declarations.

Each ``EntityPage`` names the routes, fields, list columns and defaults of
one entity; ``hris.pages.crud`` turns it into list/view/create/edit pages.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any

from fastapi import Request
from pydantic import BaseModel

from hris.forms.fields import (AsyncSelectField, DateField, FormField,
                               SwitchField, TextField)
from hris.schemas.query import CompanyQuery, EmployeeQuery, GetQuery, SickLeaveQuery
from hris.validation import (company_validation_schema,
                             employee_validation_schema,
                             sick_leave_validation_schema)


@dataclass
class EntityPage:
    entity: str  # access-policy / client name, e.g. "sick_leave"
    slug: str  # URL segment, e.g. "sick-leaves"
    label: str
    plural: str
    schema: type[BaseModel]
    query: type[GetQuery]
    fields: list[FormField]
    # (header, dotted path into the record)
    columns: list[tuple[str, str]]
    initial_values: Callable[[Request], dict[str, Any]]
    search: bool = False
    filters: tuple[str, ...] = field(default_factory=tuple)

    @property
    def list_url(self) -> str:
        return f"/{self.slug}"

    @property
    def field_names(self) -> set[str]:
        return {f.name for f in self.fields}


def today() -> datetime:
    """Current calendar day with the time component zeroed."""
    return datetime.combine(date.today(), time.min)


def _sick_leave_defaults(request: Request) -> dict[str, Any]:
    return {
        "start_date": today(),
        "end_date": today(),
        "doctor_note": False,
        "employee_id": request.query_params.get("employee_id"),
    }


def _employee_defaults(request: Request) -> dict[str, Any]:
    return {
        "first_name": "",
        "last_name": "",
        "email": "",
        "company_id": request.query_params.get("company_id"),
    }


def _company_defaults(_request: Request) -> dict[str, Any]:
    return {"name": "", "description": ""}


SICK_LEAVES = EntityPage(
    entity="sick_leave",
    slug="sick-leaves",
    label="Sick Leave",
    plural="Sick Leaves",
    schema=sick_leave_validation_schema,
    query=SickLeaveQuery,
    fields=[
        DateField("start_date", "Start Date"),
        DateField("end_date", "End Date"),
        SwitchField("doctor_note", "Doctor Note"),
        AsyncSelectField(
            "employee_id",
            "Select Employee",
            entity="employee",
            label_field="email",
        ),
    ],
    columns=[
        ("Start Date", "start_date"),
        ("End Date", "end_date"),
        ("Doctor Note", "doctor_note"),
        ("Employee", "employee.email"),
    ],
    initial_values=_sick_leave_defaults,
    filters=("employee_id",),
)

EMPLOYEES = EntityPage(
    entity="employee",
    slug="employees",
    label="Employee",
    plural="Employees",
    schema=employee_validation_schema,
    query=EmployeeQuery,
    fields=[
        TextField("first_name", "First Name"),
        TextField("last_name", "Last Name"),
        TextField("email", "Email"),
        AsyncSelectField(
            "company_id",
            "Select Company",
            entity="company",
            label_field="name",
        ),
    ],
    columns=[
        ("First Name", "first_name"),
        ("Last Name", "last_name"),
        ("Email", "email"),
    ],
    initial_values=_employee_defaults,
    search=True,
    filters=("company_id",),
)

COMPANIES = EntityPage(
    entity="company",
    slug="companies",
    label="Company",
    plural="Companies",
    schema=company_validation_schema,
    query=CompanyQuery,
    fields=[
        TextField("name", "Name"),
        TextField("description", "Description"),
    ],
    columns=[
        ("Name", "name"),
        ("Description", "description"),
    ],
    initial_values=_company_defaults,
    search=True,
)

ENTITY_PAGES = [COMPANIES, EMPLOYEES, SICK_LEAVES]
