"""
Generated CRUD pages for one ``EntityPage`` declaration.

    GET  /<slug>                  list, with delete buttons
    GET  /<slug>/view/{id}        read-only detail
    GET  /<slug>/create           empty form with defaults
    POST /<slug>/create           submit -> 303 to list, or re-render
    GET  /<slug>/edit/{id}        form filled from the stored record
    POST /<slug>/edit/{id}        submit -> 303 to list, or re-render
    POST /<slug>/{id}/delete      delete -> 303 to list

Every route sits behind ``with_authorization`` for its operation and talks
to the backend only through the remote client.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, ValidationError

from hris.client import ClientError, HrisClient, get_hris_client
from hris.core.access import AccessOperationEnum
from hris.forms.controller import FormController
from hris.forms.fields import AsyncSelectField, SelectField
from hris.models.user import User
from hris.pages.declarations import EntityPage
from hris.pages.guards import with_authorization
from hris.pages.layout import can, lookup, render
from hris.schemas.query import GetQuery

logger = logging.getLogger(__name__)

_PAGE_SIZE = 20


def _crumbs(page: EntityPage, current: str | None = None) -> list[dict[str, Any]]:
    crumbs: list[dict[str, Any]] = [{"label": page.plural, "link": page.list_url}]
    if current:
        crumbs.append({"label": current, "is_current": True})
    else:
        crumbs[0]["is_current"] = True
    return crumbs


async def _options(page: EntityPage, client: HrisClient) -> dict[str, list[tuple[str, str]]]:
    options: dict[str, list[tuple[str, str]]] = {}
    for field in page.fields:
        if isinstance(field, AsyncSelectField):
            options[field.name] = await field.load_options(client)
        elif isinstance(field, SelectField):
            options[field.name] = field.options
    return options


async def _parse_form(page: EntityPage, request: Request) -> dict[str, Any]:
    form = await request.form()
    return {field.name: field.parse(form.get(field.name)) for field in page.fields}  # type: ignore[arg-type]


def build_entity_router(page: EntityPage) -> APIRouter:
    router = APIRouter(prefix=page.list_url, tags=[f"pages:{page.slug}"])

    async def render_form(
        request: Request,
        user: User,
        client: HrisClient,
        controller: FormController | None,
        title: str,
        action: str,
        *,
        load_error: ClientError | None = None,
        status_code: int = 200,
    ):
        context = {
            "page": page,
            "title": title,
            "action": action,
            "controller": controller,
            "error": load_error or (controller.error if controller else None),
            "options": await _options(page, client) if controller else {},
        }
        return render(
            request,
            "form.html",
            context,
            user=user,
            breadcrumbs=_crumbs(page, title),
            status_code=status_code,
        )

    async def finish_submit(
        request: Request,
        user: User,
        client: HrisClient,
        controller: FormController,
        title: str,
        action: str,
    ):
        if await controller.submit():
            return RedirectResponse(page.list_url, status_code=303)
        status_code = 400 if controller.error is not None else 422
        return await render_form(
            request, user, client, controller, title, action, status_code=status_code
        )

    async def render_list(
        request: Request,
        user: User,
        client: HrisClient,
        *,
        error: ClientError | None = None,
        status_code: int = 200,
    ):
        params: dict[str, Any] = {"limit": _PAGE_SIZE}
        for name in ("offset", "search_term", *page.filters):
            if request.query_params.get(name):
                params[name] = request.query_params[name]
        try:
            query: BaseModel | dict = page.query.model_validate(params)
        except ValidationError:
            query = {"limit": _PAGE_SIZE}

        rows: list[dict[str, Any]] = []
        count = 0
        try:
            result = await client.entity(page.entity).find_many_with_count(query)
            rows, count = result["data"], result["count"]
        except ClientError as exc:
            error = error or exc

        offset = query.offset if isinstance(query, GetQuery) else 0
        context = {
            "page": page,
            "rows": [
                {"id": row["id"], "cells": [lookup(row, path) for _, path in page.columns]}
                for row in rows
            ],
            "count": count,
            "offset": offset,
            "page_size": _PAGE_SIZE,
            "search_term": params.get("search_term", ""),
            "error": error,
            "can_create": can(user, page.entity, AccessOperationEnum.CREATE),
            "can_update": can(user, page.entity, AccessOperationEnum.UPDATE),
            "can_delete": can(user, page.entity, AccessOperationEnum.DELETE),
        }
        return render(
            request,
            "list.html",
            context,
            user=user,
            breadcrumbs=_crumbs(page),
            status_code=status_code,
        )

    # ── List ────────────────────────────────────────────────────────
    @router.get("", name=f"{page.slug}:list")
    async def list_page(
        request: Request,
        user: User = Depends(with_authorization(page.entity, AccessOperationEnum.READ)),
        client: HrisClient = Depends(get_hris_client),
    ):
        return await render_list(request, user, client)

    # ── View ────────────────────────────────────────────────────────
    @router.get("/view/{obj_id}", name=f"{page.slug}:view")
    async def view_page(
        obj_id: str,
        request: Request,
        user: User = Depends(with_authorization(page.entity, AccessOperationEnum.READ)),
        client: HrisClient = Depends(get_hris_client),
    ):
        record: dict[str, Any] | None = None
        error = None
        try:
            record = await client.entity(page.entity).find_by_id(obj_id)
        except ClientError as exc:
            error = exc
        context = {
            "page": page,
            "record": record,
            "cells": [(label, lookup(record, path)) for label, path in page.columns] if record else [],
            "error": error,
            "can_update": can(user, page.entity, AccessOperationEnum.UPDATE),
        }
        return render(
            request,
            "view.html",
            context,
            user=user,
            breadcrumbs=_crumbs(page, f"{page.label} Details"),
            status_code=(error.status_code or 400) if error else 200,
        )

    # ── Create ──────────────────────────────────────────────────────
    def create_controller(request: Request, client: HrisClient) -> FormController:
        return FormController(
            page.schema,
            page.initial_values(request),
            on_submit=client.entity(page.entity).create,
        )

    @router.get("/create", name=f"{page.slug}:create")
    async def create_page(
        request: Request,
        user: User = Depends(with_authorization(page.entity, AccessOperationEnum.CREATE)),
        client: HrisClient = Depends(get_hris_client),
    ):
        controller = create_controller(request, client)
        return await render_form(
            request, user, client, controller, f"Create {page.label}", f"{page.list_url}/create"
        )

    @router.post("/create", name=f"{page.slug}:create-submit")
    async def create_submit(
        request: Request,
        user: User = Depends(with_authorization(page.entity, AccessOperationEnum.CREATE)),
        client: HrisClient = Depends(get_hris_client),
    ):
        controller = create_controller(request, client)
        controller.set_values(await _parse_form(page, request))
        return await finish_submit(
            request, user, client, controller, f"Create {page.label}", f"{page.list_url}/create"
        )

    # ── Edit ────────────────────────────────────────────────────────
    def edit_controller(obj_id: str, initial: dict[str, Any], client: HrisClient) -> FormController:
        async def _update(record: BaseModel) -> Any:
            # fields the page does not show are left as stored
            payload = record.model_dump(mode="json", include=page.field_names)
            return await client.entity(page.entity).update(obj_id, payload)

        return FormController(page.schema, initial, on_submit=_update)

    @router.get("/edit/{obj_id}", name=f"{page.slug}:edit")
    async def edit_page(
        obj_id: str,
        request: Request,
        user: User = Depends(with_authorization(page.entity, AccessOperationEnum.UPDATE)),
        client: HrisClient = Depends(get_hris_client),
    ):
        title = f"Edit {page.label}"
        action = f"{page.list_url}/edit/{obj_id}"
        try:
            record = await client.entity(page.entity).find_by_id(obj_id)
        except ClientError as exc:
            return await render_form(
                request, user, client, None, title, action,
                load_error=exc, status_code=exc.status_code or 400,
            )
        initial = {field.name: record.get(field.name) for field in page.fields}
        controller = edit_controller(obj_id, initial, client)
        return await render_form(request, user, client, controller, title, action)

    @router.post("/edit/{obj_id}", name=f"{page.slug}:edit-submit")
    async def edit_submit(
        obj_id: str,
        request: Request,
        user: User = Depends(with_authorization(page.entity, AccessOperationEnum.UPDATE)),
        client: HrisClient = Depends(get_hris_client),
    ):
        values = await _parse_form(page, request)
        controller = edit_controller(obj_id, values, client)
        controller.set_values(values)
        return await finish_submit(
            request, user, client, controller, f"Edit {page.label}", f"{page.list_url}/edit/{obj_id}"
        )

    # ── Delete ──────────────────────────────────────────────────────
    @router.post("/{obj_id}/delete", name=f"{page.slug}:delete")
    async def delete_action(
        obj_id: str,
        request: Request,
        user: User = Depends(with_authorization(page.entity, AccessOperationEnum.DELETE)),
        client: HrisClient = Depends(get_hris_client),
    ):
        try:
            await client.entity(page.entity).delete(obj_id)
        except ClientError as exc:
            return await render_list(request, user, client, error=exc, status_code=400)
        logger.info("%s %s deleted by %s", page.label, obj_id, user.email)
        return RedirectResponse(page.list_url, status_code=303)

    return router
