"""
Sick leave CRUD endpoints.

Every operation is gated by the role's capability on the ``sick_leave``
entity; any tenant role may read.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hris.api.v1.crud import find_many_with_count, get_or_404
from hris.api.v1.deps import get_db, require_ability
from hris.core.access import AccessOperationEnum
from hris.models.employee import Employee, SickLeave
from hris.models.user import User
from hris.schemas.common import DeleteResponse, Page
from hris.schemas.query import SickLeaveQuery
from hris.schemas.sick_leave import SickLeaveCreate, SickLeaveRead, SickLeaveUpdate

router = APIRouter(prefix="/sick-leaves", tags=["sick-leaves"])
logger = logging.getLogger(__name__)

_ENTITY = "sick_leave"
_WITH_EMPLOYEE = (selectinload(SickLeave.employee),)


async def _ensure_employee(db: AsyncSession, employee_id: str) -> None:
    if await db.get(Employee, employee_id) is None:
        raise HTTPException(status_code=400, detail=f"Employee '{employee_id}' does not exist")


@router.get("", response_model=Page[SickLeaveRead])
async def list_sick_leaves(
    query: Annotated[SickLeaveQuery, Query()],
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_ability(_ENTITY, AccessOperationEnum.READ)),
) -> dict:
    rows, count = await find_many_with_count(db, SickLeave, query, options=_WITH_EMPLOYEE)
    return {"data": rows, "count": count}


@router.post("", response_model=SickLeaveRead, status_code=201)
async def create_sick_leave(
    body: SickLeaveCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_ability(_ENTITY, AccessOperationEnum.CREATE)),
) -> SickLeave:
    await _ensure_employee(db, body.employee_id)

    sick_leave = SickLeave(**body.model_dump())
    db.add(sick_leave)
    await db.commit()
    logger.info(
        "Created sick leave %s for employee %s (%s..%s)",
        sick_leave.id, body.employee_id, body.start_date, body.end_date,
    )
    return await get_or_404(db, SickLeave, sick_leave.id, "Sick leave", _WITH_EMPLOYEE)


@router.get("/{sick_leave_id}", response_model=SickLeaveRead)
async def get_sick_leave(
    sick_leave_id: str,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_ability(_ENTITY, AccessOperationEnum.READ)),
) -> SickLeave:
    return await get_or_404(db, SickLeave, sick_leave_id, "Sick leave", _WITH_EMPLOYEE)


@router.put("/{sick_leave_id}", response_model=SickLeaveRead)
async def update_sick_leave(
    sick_leave_id: str,
    body: SickLeaveUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_ability(_ENTITY, AccessOperationEnum.UPDATE)),
) -> SickLeave:
    sick_leave = await get_or_404(db, SickLeave, sick_leave_id, "Sick leave")
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    if "employee_id" in changes:
        await _ensure_employee(db, changes["employee_id"])

    for field, value in changes.items():
        setattr(sick_leave, field, value)
    if sick_leave.end_date < sick_leave.start_date:
        raise HTTPException(status_code=400, detail="end_date must not be before start_date")

    await db.commit()
    logger.info("Updated sick leave %s", sick_leave_id)
    return await get_or_404(db, SickLeave, sick_leave_id, "Sick leave", _WITH_EMPLOYEE)


@router.delete("/{sick_leave_id}", response_model=DeleteResponse)
async def delete_sick_leave(
    sick_leave_id: str,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_ability(_ENTITY, AccessOperationEnum.DELETE)),
) -> DeleteResponse:
    sick_leave = await get_or_404(db, SickLeave, sick_leave_id, "Sick leave")
    await db.delete(sick_leave)
    await db.commit()
    logger.info("Deleted sick leave %s", sick_leave_id)
    return DeleteResponse(success=True, message="Sick leave deleted")
