"""
Static application declaration: roles, abilities, tenant naming and add-ons.

Loaded once at import time and never mutated. The access policy and the
page layout both read from ``app_config``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class AppConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    owner_roles: tuple[str, ...]
    customer_roles: tuple[str, ...]
    tenant_roles: tuple[str, ...]
    tenant_name: str
    application_name: str
    add_ons: tuple[str, ...]
    owner_abilities: tuple[str, ...]
    customer_abilities: tuple[str, ...]
    get_quote_url: str

    def abilities_for(self, role: str | None) -> tuple[str, ...]:
        """Abilities granted to *role*; tenant roles outside owner/customer get none."""
        if role in self.owner_roles:
            return self.owner_abilities
        if role in self.customer_roles:
            return self.customer_abilities
        return ()

    def has_add_on(self, name: str) -> bool:
        return name in self.add_ons

    def is_known_role(self, role: str) -> bool:
        return role in self.tenant_roles or role in self.owner_roles or role in self.customer_roles


app_config = AppConfig(
    owner_roles=("HR Manager",),
    customer_roles=(),
    tenant_roles=("Payroll Administrator", "Employee", "HR Manager"),
    tenant_name="Company",
    application_name="HR Information System",
    add_ons=("file upload", "chat", "notifications", "file"),
    customer_abilities=(),
    owner_abilities=(
        "Manage sick leave records",
        "Manage user records",
        "Manage company records",
        "Manage employee records",
    ),
    get_quote_url="https://app.roq.ai/proposal/1043578d-1566-4f20-aec7-7949fbcb4132",
)
