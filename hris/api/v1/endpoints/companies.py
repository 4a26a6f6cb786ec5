"""
Company CRUD endpoints.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hris.api.v1.crud import find_many_with_count, get_or_404
from hris.api.v1.deps import get_db, require_ability
from hris.core.access import AccessOperationEnum
from hris.models.employee import Company, Employee
from hris.models.user import User
from hris.schemas.common import DeleteResponse, Page
from hris.schemas.company import CompanyCreate, CompanyRead, CompanyUpdate
from hris.schemas.query import CompanyQuery

router = APIRouter(prefix="/companies", tags=["companies"])
logger = logging.getLogger(__name__)

_ENTITY = "company"


@router.get("", response_model=Page[CompanyRead])
async def list_companies(
    query: Annotated[CompanyQuery, Query()],
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_ability(_ENTITY, AccessOperationEnum.READ)),
) -> dict:
    rows, count = await find_many_with_count(
        db, Company, query, search_columns=(Company.name, Company.description)
    )
    return {"data": rows, "count": count}


@router.post("", response_model=CompanyRead, status_code=201)
async def create_company(
    body: CompanyCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_ability(_ENTITY, AccessOperationEnum.CREATE)),
) -> Company:
    values = body.model_dump()
    # The creating user owns the company unless told otherwise
    values["user_id"] = values.get("user_id") or current_user.id
    company = Company(**values)
    db.add(company)
    await db.commit()
    await db.refresh(company)
    logger.info("Created company %s (%s)", company.name, company.id)
    return company


@router.get("/{company_id}", response_model=CompanyRead)
async def get_company(
    company_id: str,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_ability(_ENTITY, AccessOperationEnum.READ)),
) -> Company:
    return await get_or_404(db, Company, company_id, "Company")


@router.put("/{company_id}", response_model=CompanyRead)
async def update_company(
    company_id: str,
    body: CompanyUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_ability(_ENTITY, AccessOperationEnum.UPDATE)),
) -> Company:
    company = await get_or_404(db, Company, company_id, "Company")
    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(company, field, value)

    await db.commit()
    await db.refresh(company)
    logger.info("Updated company %s", company_id)
    return company


@router.delete("/{company_id}", response_model=DeleteResponse)
async def delete_company(
    company_id: str,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_ability(_ENTITY, AccessOperationEnum.DELETE)),
) -> DeleteResponse:
    company = await get_or_404(db, Company, company_id, "Company")
    employees = await db.scalar(
        select(func.count()).select_from(Employee).where(Employee.company_id == company_id)
    )
    if employees:
        raise HTTPException(
            status_code=409,
            detail=f"Company '{company.name}' still has {employees} employee(s)",
        )

    await db.delete(company)
    await db.commit()
    logger.info("Deleted company %s (%s)", company_id, company.name)
    return DeleteResponse(success=True, message=f"Company '{company.name}' deleted")
