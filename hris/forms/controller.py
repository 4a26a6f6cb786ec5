"""
Form submission state machine.

    IDLE -> EDITING -> VALIDATING -> SUBMITTING -> SUCCESS
                ^           |             |
                |___________|<------------| (remote error kept in .error)

A submit is refused while another is in flight. Validation failures go
straight back to EDITING without calling ``on_submit``; a failed remote call
keeps the entered values and exposes the error. Values reset to their
initial state only after a successful submit.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel

from hris.client import ClientError
from hris.validation import validate_record

logger = logging.getLogger(__name__)


class FormState(str, Enum):
    IDLE = "idle"
    EDITING = "editing"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCESS = "success"


SubmitHandler = Callable[[BaseModel], Awaitable[Any]]


class FormController:
    def __init__(
        self,
        schema: type[BaseModel],
        initial_values: Mapping[str, Any],
        on_submit: SubmitHandler,
    ) -> None:
        self.schema = schema
        self.initial_values = dict(initial_values)
        self.on_submit = on_submit
        self.values: dict[str, Any] = dict(initial_values)
        self.errors: dict[str, str] = {}
        self.error: ClientError | None = None
        self.result: Any = None
        self.state = FormState.IDLE

    @property
    def is_submitting(self) -> bool:
        return self.state == FormState.SUBMITTING

    def set_field(self, name: str, value: Any) -> None:
        if self.is_submitting:
            return
        self.values[name] = value
        self.state = FormState.EDITING

    def set_values(self, values: Mapping[str, Any]) -> None:
        for name, value in values.items():
            self.set_field(name, value)

    def reset(self) -> None:
        self.values = dict(self.initial_values)
        self.errors = {}

    async def submit(self) -> bool:
        """Validate and hand the record to ``on_submit``; ``True`` on success."""
        if self.is_submitting:
            return False

        self.error = None
        self.state = FormState.VALIDATING
        outcome = validate_record(self.schema, self.values)
        if not outcome.ok:
            self.errors = outcome.errors
            self.state = FormState.EDITING
            return False

        self.errors = {}
        self.state = FormState.SUBMITTING
        try:
            self.result = await self.on_submit(outcome.record)
        except ClientError as exc:
            logger.info("Submit of %s failed: %s", self.schema.__name__, exc.message)
            self.error = exc
            self.state = FormState.EDITING
            return False

        self.reset()
        self.state = FormState.SUCCESS
        return True
