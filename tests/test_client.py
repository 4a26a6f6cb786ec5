"""Tests for the remote CRUD client against the in-process backend."""

import httpx
import pytest

from hris.client import ClientError, HrisClient, build_client
from hris.main import app
from hris.schemas.query import SickLeaveQuery


@pytest.mark.asyncio
async def test_entity_round_trip():
    async with build_client(app) as client:
        employee = await client.employee.create(
            {"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"}
        )
        leave = await client.sick_leave.create(
            {
                "start_date": "2026-03-02",
                "end_date": "2026-03-02",
                "doctor_note": False,
                "employee_id": employee["id"],
            }
        )
        page = await client.sick_leave.find_many_with_count(SickLeaveQuery(employee_id=employee["id"]))
        assert page["count"] == 1
        assert page["data"][0]["id"] == leave["id"]

        updated = await client.sick_leave.update(leave["id"], {"doctor_note": True})
        assert updated["doctor_note"] is True

        fetched = await client.employee.find_by_id(employee["id"])
        assert fetched["email"] == "ada@example.com"

        await client.sick_leave.delete(leave["id"])
        assert (await client.sick_leave.find_many_with_count({})).get("count") == 0


@pytest.mark.asyncio
async def test_backend_detail_becomes_client_error():
    async with build_client(app) as client:
        with pytest.raises(ClientError) as exc_info:
            await client.employee.find_by_id("missing")
    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Employee not found"


@pytest.mark.asyncio
async def test_validation_errors_are_flattened():
    async with build_client(app) as client:
        with pytest.raises(ClientError) as exc_info:
            await client.sick_leave.create({"doctor_note": False})
    assert exc_info.value.status_code == 422
    assert "employee_id" in exc_info.value.message


@pytest.mark.asyncio
async def test_non_json_success_becomes_client_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>ok</html>"))
    http = httpx.AsyncClient(transport=transport, base_url="http://backend.test/api/v1/")
    async with HrisClient(http) as client:
        with pytest.raises(ClientError) as exc_info:
            await client.company.create({"name": "Acme"})
    assert exc_info.value.status_code == 200
    assert exc_info.value.message == "Backend returned an unreadable response"
