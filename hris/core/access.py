"""
Capability checks — maps role abilities onto (service, entity, operation).

An ability of the form ``"Manage <entity> records"`` grants every operation
on that entity. Every tenant role may read every entity.
"""

from __future__ import annotations

import re
from enum import Enum

from hris.core.app_config import AppConfig, app_config

_MANAGE_RE = re.compile(r"^Manage (?P<entity>[a-z ]+) records$", re.IGNORECASE)


class AccessServiceEnum(str, Enum):
    PROJECT = "project"
    PLATFORM = "platform"


class AccessOperationEnum(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


def _entity_from_ability(ability: str) -> str | None:
    match = _MANAGE_RE.match(ability.strip())
    if match is None:
        return None
    return match.group("entity").strip().lower().replace(" ", "_")


class AccessPolicy:
    def __init__(self, config: AppConfig) -> None:
        self._config = config

    def managed_entities(self, role: str | None) -> set[str]:
        entities = set()
        for ability in self._config.abilities_for(role):
            entity = _entity_from_ability(ability)
            if entity is not None:
                entities.add(entity)
        return entities

    def can(
        self,
        role: str | None,
        service: AccessServiceEnum,
        entity: str,
        operation: AccessOperationEnum,
    ) -> bool:
        if service != AccessServiceEnum.PROJECT or role is None:
            return False
        if entity in self.managed_entities(role):
            return True
        return operation == AccessOperationEnum.READ and role in self._config.tenant_roles


access_policy = AccessPolicy(app_config)
