"""
HTML page router — login root plus generated pages for every entity.
"""

from fastapi import APIRouter

from hris.pages import auth
from hris.pages.crud import build_entity_router
from hris.pages.declarations import ENTITY_PAGES

page_router = APIRouter()

page_router.include_router(auth.router)

for _page in ENTITY_PAGES:
    page_router.include_router(build_entity_router(_page))
