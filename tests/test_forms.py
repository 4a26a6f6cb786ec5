"""Tests for form field parsing and the submit state machine."""

import asyncio
from datetime import date, datetime, time
from types import SimpleNamespace

import pytest

from hris.client import ClientError
from hris.forms.controller import FormController, FormState
from hris.forms.fields import DateField, NumberField, SelectField, SwitchField, TextField
from hris.pages.crud import _options
from hris.pages.declarations import SICK_LEAVES
from hris.pages.layout import templates
from hris.validation import sick_leave_validation_schema


class Recorder:
    def __init__(self, error: ClientError | None = None) -> None:
        self.calls = []
        self.error = error

    async def __call__(self, record):
        self.calls.append(record)
        if self.error is not None:
            raise self.error
        return {"id": "new"}


def _defaults(**query):
    return SICK_LEAVES.initial_values(SimpleNamespace(query_params=query))


# ── Fields ──────────────────────────────────────────────────────────
def test_text_field_strips_and_blanks_to_none():
    field = TextField("name", "Name")
    assert field.parse("  Acme ") == "Acme"
    assert field.parse("   ") is None
    assert field.parse(None) is None


def test_number_field():
    field = NumberField("days", "Days")
    assert field.parse("3") == 3
    assert field.parse("2.5") == 2.5
    assert field.parse("three") == "three"


def test_date_field_parse_and_display():
    field = DateField("start_date", "Start Date")
    assert field.parse("2026-03-02") == date(2026, 3, 2)
    assert field.parse("02/03/2026") == "02/03/2026"
    assert field.display(datetime(2026, 3, 2)) == "2026-03-02"
    assert field.display("2026-03-02T00:00:00") == "2026-03-02"
    assert field.display(None) == ""


def test_switch_field_absent_means_false():
    field = SwitchField("doctor_note", "Doctor Note")
    assert field.parse(None) is False
    assert field.parse("on") is True
    assert field.display(True) == "checked"


# ── Defaults ────────────────────────────────────────────────────────
def test_sick_leave_defaults_are_today_at_midnight():
    values = _defaults()
    midnight = datetime.combine(date.today(), time.min)
    assert values["start_date"] == midnight
    assert values["end_date"] == midnight
    assert values["doctor_note"] is False
    assert values["employee_id"] is None


def test_sick_leave_defaults_take_employee_from_query():
    assert _defaults(employee_id="emp-7")["employee_id"] == "emp-7"


# ── State machine ───────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_validation_failure_makes_no_call():
    submit = Recorder()
    form = FormController(sick_leave_validation_schema, _defaults(), submit)
    assert form.state == FormState.IDLE

    ok = await form.submit()

    assert ok is False
    assert submit.calls == []
    assert form.errors["employee_id"] == "employee_id is a required field"
    assert form.state == FormState.EDITING


@pytest.mark.asyncio
async def test_successful_submit_calls_once_and_resets():
    submit = Recorder()
    form = FormController(sick_leave_validation_schema, _defaults(), submit)
    form.set_field("employee_id", "emp-1")
    form.set_field("doctor_note", True)
    assert form.state == FormState.EDITING

    ok = await form.submit()

    assert ok is True
    assert form.state == FormState.SUCCESS
    assert len(submit.calls) == 1
    record = submit.calls[0]
    assert record.employee_id == "emp-1"
    assert record.doctor_note is True
    assert record.start_date == date.today()
    # values go back to their initial state after success
    assert form.values["employee_id"] is None
    assert form.values["doctor_note"] is False


@pytest.mark.asyncio
async def test_remote_failure_keeps_values_and_error():
    submit = Recorder(ClientError("Employee 'emp-x' does not exist", 400))
    form = FormController(sick_leave_validation_schema, _defaults(), submit)
    form.set_values({"employee_id": "emp-x", "doctor_note": True})

    ok = await form.submit()

    assert ok is False
    assert len(submit.calls) == 1
    assert form.error.message == "Employee 'emp-x' does not exist"
    assert form.state == FormState.EDITING
    assert form.values["employee_id"] == "emp-x"
    assert form.values["doctor_note"] is True

    # resubmitting clears the old error first
    submit.error = None
    assert await form.submit() is True
    assert form.error is None


@pytest.mark.asyncio
async def test_submit_refused_while_in_flight():
    release = asyncio.Event()
    calls = []

    async def slow_submit(record):
        calls.append(record)
        await release.wait()

    form = FormController(sick_leave_validation_schema, _defaults(employee_id="emp-1"), slow_submit)
    first = asyncio.create_task(form.submit())
    await asyncio.sleep(0)
    assert form.is_submitting

    # edits and a second submit are ignored while submitting
    form.set_field("employee_id", "emp-2")
    assert await form.submit() is False

    release.set()
    assert await first is True
    assert len(calls) == 1
    assert calls[0].employee_id == "emp-1"


@pytest.mark.asyncio
async def test_select_field_renders_static_options():
    field = SelectField("role", "Role", [("HR Manager", "HR Manager"), ("Employee", "Employee")])
    page = SimpleNamespace(fields=[field], list_url="/users", label="User")
    options = await _options(page, client=None)
    assert options == {"role": field.options}

    controller = FormController(sick_leave_validation_schema, {"role": "Employee"}, on_submit=Recorder())
    html = templates.get_template("form.html").render(
        app_config=SimpleNamespace(application_name="HRIS", tenant_name="Company", add_ons=[]),
        nav=[],
        breadcrumbs=[],
        page=page,
        title="Create User",
        action="/users/create",
        controller=controller,
        options=options,
    )
    assert '<select id="select-role" name="role">' in html
    assert '<option value="HR Manager" >HR Manager</option>' in html
    assert '<option value="Employee" selected>Employee</option>' in html
    assert field.parse(" Employee ") == "Employee"
