"""
Global exception handlers — prevents stack-trace leakage to clients.

Every JSON error body has the shape ``{"detail": ..., "success": false}``,
which is what ``hris.client`` reads back into ``ClientError.message``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def _error(status_code: int, detail: object, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "success": False},
        headers=headers,
    )


async def _http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, exc.detail, getattr(exc, "headers", None))


async def _validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(422, jsonable_encoder(exc.errors()))


async def _integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.error("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return _error(409, "Record conflicts with existing data")


async def _sqlalchemy_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error: %s", exc, exc_info=True)
    return _error(500, "Internal database error")


async def _generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return _error(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the FastAPI app."""
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(IntegrityError, _integrity_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, _sqlalchemy_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _generic_exception_handler)
