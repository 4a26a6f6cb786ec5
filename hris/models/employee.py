"""
Company, Employee & SickLeave models — core HR domain.

A company employs many employees; every sick leave belongs to exactly
one employee and is removed with it.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import (Boolean, Column, Date, DateTime, ForeignKey, Index,
                        String)
from sqlalchemy.orm import relationship

from hris.db.base import Base


def _uuid() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Company(Base):
    __tablename__ = "companies"

    id: str = Column(String(36), primary_key=True, default=_uuid)  # type: ignore[assignment]
    name: str = Column(String(255), nullable=False, index=True)  # type: ignore[assignment]
    description: str | None = Column(String(1000), nullable=True)  # type: ignore[assignment]
    user_id: str | None = Column(String(36), ForeignKey("users.id"), nullable=True)  # type: ignore[assignment]
    created_at: datetime = Column(DateTime(timezone=True), default=_utcnow)  # type: ignore[assignment]
    updated_at: datetime = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)  # type: ignore[assignment]

    employees = relationship("Employee", back_populates="company")


class Employee(Base):
    __tablename__ = "employees"

    id: str = Column(String(36), primary_key=True, default=_uuid)  # type: ignore[assignment]
    first_name: str = Column(String(100), nullable=False)  # type: ignore[assignment]
    last_name: str = Column(String(100), nullable=False)  # type: ignore[assignment]
    email: str | None = Column(String(320), nullable=True, index=True)  # type: ignore[assignment]
    company_id: str | None = Column(String(36), ForeignKey("companies.id"), nullable=True)  # type: ignore[assignment]
    user_id: str | None = Column(String(36), ForeignKey("users.id"), nullable=True)  # type: ignore[assignment]
    created_at: datetime = Column(DateTime(timezone=True), default=_utcnow)  # type: ignore[assignment]
    updated_at: datetime = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)  # type: ignore[assignment]

    company = relationship("Company", back_populates="employees")
    sick_leaves = relationship(
        "SickLeave",
        back_populates="employee",
        cascade="all, delete-orphan",
    )


class SickLeave(Base):
    __tablename__ = "sick_leaves"
    __table_args__ = (Index("ix_sick_leave_employee_start", "employee_id", "start_date"),)

    id: str = Column(String(36), primary_key=True, default=_uuid)  # type: ignore[assignment]
    start_date: date = Column(Date, nullable=False, default=date.today)  # type: ignore[assignment]
    end_date: date = Column(Date, nullable=False, default=date.today)  # type: ignore[assignment]
    doctor_note: bool = Column(Boolean, nullable=False, default=False)  # type: ignore[assignment]
    employee_id: str = Column(String(36), ForeignKey("employees.id"), nullable=False)  # type: ignore[assignment]
    created_at: datetime = Column(DateTime(timezone=True), default=_utcnow)  # type: ignore[assignment]
    updated_at: datetime = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)  # type: ignore[assignment]

    employee = relationship("Employee", back_populates="sick_leaves")
