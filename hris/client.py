"""
Remote CRUD client used by the form pages.

Wraps ``httpx.AsyncClient`` with one ``EntityClient`` per entity. The pages
never touch the database; everything goes through this client, which
forwards the caller's access token to the backend.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, Mapping
from typing import Any

import httpx
from fastapi import Request
from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from hris.core.config import settings
from hris.core.security import strip_bearer

logger = logging.getLogger(__name__)

_IN_PROCESS_BASE = "http://hris.internal"


class ClientError(Exception):
    """A backend call failed; ``message`` is fit for display."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _detail(response: httpx.Response) -> str:
    try:
        detail = response.json().get("detail")
    except (ValueError, AttributeError):
        detail = None
    if isinstance(detail, list):
        # FastAPI request-validation errors
        return "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', [])[1:])}: {err.get('msg')}" for err in detail
        )
    if detail:
        return str(detail)
    return f"Request failed with status {response.status_code}"


class EntityClient:
    def __init__(self, http: httpx.AsyncClient, path: str) -> None:
        self._http = http
        self._path = path

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = await self._http.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise ClientError(f"Backend unreachable: {exc}") from exc
        if response.is_error:
            raise ClientError(_detail(response), response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            logger.warning("%s %s returned a non-JSON body", method, url)
            raise ClientError("Backend returned an unreadable response", response.status_code) from exc

    async def create(self, data: Mapping[str, Any] | BaseModel) -> dict:
        return await self._request("POST", self._path, json=_payload(data))

    async def update(self, obj_id: str, data: Mapping[str, Any] | BaseModel) -> dict:
        return await self._request("PUT", f"{self._path}/{obj_id}", json=_payload(data))

    async def delete(self, obj_id: str) -> dict:
        return await self._request("DELETE", f"{self._path}/{obj_id}")

    async def find_by_id(self, obj_id: str) -> dict:
        return await self._request("GET", f"{self._path}/{obj_id}")

    async def find_many_with_count(self, query: Mapping[str, Any] | BaseModel | None = None) -> dict:
        """Return ``{"data": [...], "count": n}`` for the given filter shape."""
        if isinstance(query, BaseModel):
            params = query.model_dump(exclude_none=True)
        else:
            params = {k: v for k, v in (query or {}).items() if v is not None}
        return await self._request("GET", self._path, params=params)


def _payload(data: Mapping[str, Any] | BaseModel) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    return to_jsonable_python(dict(data))


class HrisClient:
    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http
        self.company = EntityClient(http, "companies")
        self.employee = EntityClient(http, "employees")
        self.sick_leave = EntityClient(http, "sick-leaves")

    def entity(self, name: str) -> EntityClient:
        return getattr(self, name)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> HrisClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def build_client(app: Any = None, token: str | None = None) -> HrisClient:
    """Point at ``BACKEND_URL``, or at *app* in-process when none is configured."""
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    if settings.BACKEND_URL:
        http = httpx.AsyncClient(
            base_url=f"{settings.BACKEND_URL.rstrip('/')}{settings.API_V1_PREFIX}/",
            headers=headers,
            timeout=settings.BACKEND_TIMEOUT_SECONDS,
        )
    else:
        http = httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url=f"{_IN_PROCESS_BASE}{settings.API_V1_PREFIX}/",
            headers=headers,
            timeout=settings.BACKEND_TIMEOUT_SECONDS,
        )
    return HrisClient(http)


async def get_hris_client(request: Request) -> AsyncGenerator[HrisClient, None]:
    """FastAPI dependency — a client acting as the signed-in user."""
    token = strip_bearer(request.cookies.get("access_token"))
    async with build_client(request.app, token) as client:
        yield client
