"""
Employee CRUD endpoints.

- GET operations require any tenant role.
- POST / PUT / DELETE require the "Manage employee records" ability.
- Deleting an employee removes their sick leave records with them.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hris.api.v1.crud import find_many_with_count, get_or_404
from hris.api.v1.deps import get_db, require_ability
from hris.core.access import AccessOperationEnum
from hris.models.employee import Company, Employee
from hris.models.user import User
from hris.schemas.common import DeleteResponse, Page
from hris.schemas.employee import EmployeeCreate, EmployeeRead, EmployeeUpdate
from hris.schemas.query import EmployeeQuery

router = APIRouter(prefix="/employees", tags=["employees"])
logger = logging.getLogger(__name__)

_ENTITY = "employee"


async def _check_references(db: AsyncSession, values: dict) -> None:
    company_id = values.get("company_id")
    if company_id and await db.get(Company, company_id) is None:
        raise HTTPException(status_code=400, detail=f"Company '{company_id}' does not exist")
    user_id = values.get("user_id")
    if user_id and await db.get(User, user_id) is None:
        raise HTTPException(status_code=400, detail=f"User '{user_id}' does not exist")


@router.get("", response_model=Page[EmployeeRead])
async def list_employees(
    query: Annotated[EmployeeQuery, Query()],
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_ability(_ENTITY, AccessOperationEnum.READ)),
) -> dict:
    rows, count = await find_many_with_count(
        db,
        Employee,
        query,
        search_columns=(Employee.first_name, Employee.last_name, Employee.email),
    )
    return {"data": rows, "count": count}


@router.post("", response_model=EmployeeRead, status_code=201)
async def create_employee(
    body: EmployeeCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_ability(_ENTITY, AccessOperationEnum.CREATE)),
) -> Employee:
    values = body.model_dump()
    await _check_references(db, values)

    employee = Employee(**values)
    db.add(employee)
    await db.commit()
    await db.refresh(employee)
    logger.info("Created employee %s %s (%s)", employee.first_name, employee.last_name, employee.id)
    return employee


@router.get("/{employee_id}", response_model=EmployeeRead)
async def get_employee(
    employee_id: str,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_ability(_ENTITY, AccessOperationEnum.READ)),
) -> Employee:
    return await get_or_404(db, Employee, employee_id, "Employee")


@router.put("/{employee_id}", response_model=EmployeeRead)
async def update_employee(
    employee_id: str,
    body: EmployeeUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_ability(_ENTITY, AccessOperationEnum.UPDATE)),
) -> Employee:
    employee = await get_or_404(db, Employee, employee_id, "Employee")
    changes = body.model_dump(exclude_unset=True)
    await _check_references(db, changes)

    for field, value in changes.items():
        setattr(employee, field, value)

    await db.commit()
    await db.refresh(employee)
    logger.info("Updated employee %s", employee_id)
    return employee


@router.delete("/{employee_id}", response_model=DeleteResponse)
async def delete_employee(
    employee_id: str,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_ability(_ENTITY, AccessOperationEnum.DELETE)),
) -> DeleteResponse:
    employee = await get_or_404(db, Employee, employee_id, "Employee")
    name = f"{employee.first_name} {employee.last_name}"
    await db.delete(employee)
    await db.commit()
    logger.info("Deleted employee %s (%s)", employee_id, name)
    return DeleteResponse(success=True, message=f"Employee '{name}' deleted")
