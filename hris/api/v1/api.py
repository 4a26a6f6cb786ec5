"""
V1 API router aggregator — wires all endpoint modules together.
"""

from fastapi import APIRouter

from hris.api.v1.endpoints import app_config, auth, companies, employees, sick_leaves

api_router = APIRouter()

# Auth (login, refresh, user management)
api_router.include_router(auth.router)

# Static roles / abilities / add-ons
api_router.include_router(app_config.router)

# Entity CRUD
api_router.include_router(companies.router)
api_router.include_router(employees.router)
api_router.include_router(sick_leaves.router)
