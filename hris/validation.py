"""
Client-side record validation.

Runs a candidate record through an entity's pydantic schema and turns any
failure into a ``{field: message}`` mapping suitable for inline display.
Synchronous and free of I/O so it can run before any network call.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ValidationError

from hris.schemas.company import CompanyCreate
from hris.schemas.employee import EmployeeCreate
from hris.schemas.sick_leave import SickLeaveCreate

sick_leave_validation_schema = SickLeaveCreate
employee_validation_schema = EmployeeCreate
company_validation_schema = CompanyCreate


@dataclass
class ValidationResult:
    record: BaseModel | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _message(field_name: str, error: dict) -> str:
    if error["type"] == "missing":
        return f"{field_name} is a required field"
    ctx_error = error.get("ctx", {}).get("error")
    if ctx_error is not None:
        return str(ctx_error)
    return error["msg"]


def errors_by_field(exc: ValidationError) -> dict[str, str]:
    """First message per top-level field; model-level errors land under ``__root__``."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = error.get("loc") or ("__root__",)
        name = str(loc[0])
        errors.setdefault(name, _message(name, error))
    return errors


def validate_record(schema: type[BaseModel], data: Mapping[str, Any]) -> ValidationResult:
    candidate = {k: v for k, v in data.items() if not _is_blank(v)}
    try:
        record = schema.model_validate(candidate)
    except ValidationError as exc:
        return ValidationResult(errors=errors_by_field(exc))
    return ValidationResult(record=record)
