"""
User model — authentication & role-based access control.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, String

from hris.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: str = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))  # type: ignore[assignment]
    email: str = Column(String(320), unique=True, nullable=False, index=True)  # type: ignore[assignment]
    hashed_password: str = Column(String(128), nullable=False)  # type: ignore[assignment]
    full_name: str | None = Column(String(200), nullable=True)  # type: ignore[assignment]
    role: str = Column(  # type: ignore[assignment]
        String(50),
        nullable=False,
        default="Employee",
        server_default="Employee",
    )  # one of app_config.tenant_roles
    is_active: bool = Column(Boolean, default=True, server_default="1")  # type: ignore[assignment]
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
