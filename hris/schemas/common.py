"""Shared response envelopes."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """Result of a ``find_many_with_count`` call."""

    data: list[T]
    count: int


class DeleteResponse(BaseModel):
    success: bool
    message: str


class LogoutResponse(BaseModel):
    success: bool = True
    message: str
