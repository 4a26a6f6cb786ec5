"""
HR Information System — application entry point.

This is the **only** file that assembles the app. The JSON backend lives in
`api/`, the generated HTML pages in `pages/`, shared pieces in `core/`.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import select

from hris.api.v1.api import api_router
from hris.core.config import settings
from hris.core.exceptions import register_exception_handlers
from hris.core.rate_limit import limiter
from hris.core.security import get_password_hash
from hris.db.base import Base
from hris.db.session import async_session_factory, engine

# Ensure all models are imported so metadata.create_all can see them
from hris.models.employee import Company, Employee, SickLeave  # noqa: F401
from hris.models.user import User
from hris.pages.guards import register_page_handlers
from hris.pages.router import page_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan ────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(_app: FastAPI):
    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialised")

    # Seed default HR manager on first run
    async with async_session_factory() as session:
        result = await session.execute(
            select(User).where(User.email == settings.FIRST_ADMIN_EMAIL)
        )
        if result.scalar_one_or_none() is None:
            admin = User(
                email=settings.FIRST_ADMIN_EMAIL,
                hashed_password=get_password_hash(settings.FIRST_ADMIN_PASSWORD),
                full_name="System Administrator",
                role=settings.FIRST_ADMIN_ROLE,
            )
            session.add(admin)
            await session.commit()
            logger.info(
                "Default admin created: %s (password: <redacted>)",
                settings.FIRST_ADMIN_EMAIL,
            )

    logger.info("%s v%s started", settings.PROJECT_NAME, settings.VERSION)
    yield
    await engine.dispose()
    logger.info("Shutdown complete")


# ── App factory ─────────────────────────────────────────────────────
def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME,
        description="Generated CRUD administration for HR records",
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Rate limiting (login)
    application.state.limiter = limiter
    application.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

    # Global exception handlers (prevent stack-trace leakage)
    register_exception_handlers(application)
    # Login redirect / access denied for HTML pages
    register_page_handlers(application)

    # Mount API v1
    application.include_router(api_router, prefix=settings.API_V1_PREFIX)

    # Generated HTML pages
    application.include_router(page_router)

    return application


app = create_app()
