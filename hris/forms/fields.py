"""
Form field components.

Each field knows how to turn a raw form value into a Python value and how
to display a stored value back in an input. Parsing is lenient: anything
that cannot be converted is passed through so the validation schema can
report it against the field.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any

from hris.client import ClientError, HrisClient

logger = logging.getLogger(__name__)

_TRUTHY = {"on", "true", "1", "yes"}


class FormField:
    kind = "text"

    def __init__(self, name: str, label: str, *, placeholder: str | None = None) -> None:
        self.name = name
        self.label = label
        self.placeholder = placeholder or label

    def parse(self, raw: str | None) -> Any:
        if raw is None:
            return None
        raw = raw.strip()
        return raw or None

    def display(self, value: Any) -> str:
        return "" if value is None else str(value)


class TextField(FormField):
    kind = "text"


class NumberField(FormField):
    kind = "number"

    def parse(self, raw: str | None) -> Any:
        raw = super().parse(raw)
        if raw is None:
            return None
        try:
            return int(raw)
        except ValueError:
            pass
        try:
            return float(raw)
        except ValueError:
            return raw


class DateField(FormField):
    kind = "date"

    def parse(self, raw: str | None) -> Any:
        raw = super().parse(raw)
        if raw is None:
            return None
        try:
            return date.fromisoformat(raw[:10])
        except ValueError:
            return raw

    def display(self, value: Any) -> str:
        if isinstance(value, datetime):
            return value.date().isoformat()
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, str):
            return value[:10]
        return ""


class SwitchField(FormField):
    """Checkbox; browsers omit unchecked boxes, so absent means ``False``."""

    kind = "switch"

    def parse(self, raw: str | None) -> bool:
        return raw is not None and raw.strip().lower() in _TRUTHY

    def display(self, value: Any) -> str:
        return "checked" if value else ""


class SelectField(FormField):
    kind = "select"

    def __init__(
        self,
        name: str,
        label: str,
        options: list[tuple[str, str]],
        *,
        placeholder: str | None = None,
    ) -> None:
        super().__init__(name, label, placeholder=placeholder)
        self.options = options


class AsyncSelectField(FormField):
    """Select whose options are fetched from another entity through the client."""

    kind = "select"

    def __init__(
        self,
        name: str,
        label: str,
        *,
        entity: str,
        label_field: str,
        placeholder: str | None = None,
    ) -> None:
        super().__init__(name, label, placeholder=placeholder)
        self.entity = entity
        self.label_field = label_field

    async def load_options(self, client: HrisClient) -> list[tuple[str, str]]:
        try:
            page = await client.entity(self.entity).find_many_with_count({"limit": 500})
        except ClientError as exc:
            logger.warning("Could not load %s options: %s", self.entity, exc.message)
            return []
        return [
            (item["id"], str(item.get(self.label_field) or item["id"]))
            for item in page.get("data", [])
        ]
