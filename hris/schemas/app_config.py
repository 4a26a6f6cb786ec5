"""Read-only view of the static app configuration."""

from __future__ import annotations

from pydantic import BaseModel


class AppConfigRead(BaseModel):
    application_name: str
    tenant_name: str
    owner_roles: list[str]
    customer_roles: list[str]
    tenant_roles: list[str]
    add_ons: list[str]
    owner_abilities: list[str]
    customer_abilities: list[str]
    get_quote_url: str
    # abilities of the calling user's role
    abilities: list[str] = []
