"""
Query helpers shared by the entity endpoints.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

from fastapi import HTTPException
from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from hris.schemas.query import GetQuery

ModelT = TypeVar("ModelT")

# Fields on GetQuery that are paging/search controls, not column filters
_CONTROL_FIELDS = set(GetQuery.model_fields)


async def get_or_404(
    db: AsyncSession,
    model: type[ModelT],
    obj_id: str,
    label: str,
    options: Sequence[Any] = (),
) -> ModelT:
    stmt = select(model).where(model.id == obj_id).options(*options)  # type: ignore[attr-defined]
    result = await db.execute(stmt.execution_options(populate_existing=True))
    obj = result.scalar_one_or_none()
    if obj is None:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return obj


def _order_clause(model: type, order: str | None):
    if not order:
        return model.created_at.desc()  # type: ignore[attr-defined]
    descending = order.startswith("-")
    column = getattr(model, order.lstrip("-"), None)
    if column is None or not hasattr(column, "desc"):
        raise HTTPException(status_code=400, detail=f"Cannot order by '{order.lstrip('-')}'")
    return column.desc() if descending else column.asc()


async def find_many_with_count(
    db: AsyncSession,
    model: type[ModelT],
    query: GetQuery,
    search_columns: Sequence[Any] = (),
    options: Sequence[Any] = (),
) -> tuple[list[ModelT], int]:
    """Apply filters, search and paging; return one page plus the unpaged total."""
    stmt: Select = select(model)
    for name, value in query.model_dump(exclude_none=True).items():
        if name in _CONTROL_FIELDS:
            continue
        stmt = stmt.where(getattr(model, name) == value)

    if query.search_term and search_columns:
        # Escape SQL LIKE metacharacters to prevent wildcard injection
        safe = query.search_term.replace("%", r"\%").replace("_", r"\_")
        stmt = stmt.where(or_(*(c.ilike(f"%{safe}%", escape="\\") for c in search_columns)))

    total = await db.scalar(select(func.count()).select_from(stmt.subquery()))

    page = (
        stmt.options(*options)
        .order_by(_order_clause(model, query.order))
        .offset(query.offset)
        .limit(query.limit)
    )
    result = await db.execute(page)
    return list(result.scalars().all()), int(total or 0)
