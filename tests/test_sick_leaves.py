"""Tests for sick leave CRUD endpoints."""

import pytest
from httpx import AsyncClient


async def _employee(async_client: AsyncClient, email: str = "ada@example.com") -> str:
    resp = await async_client.post(
        "/api/v1/employees",
        json={"first_name": "Ada", "last_name": "Lovelace", "email": email},
    )
    return resp.json()["id"]


async def _sick_leave(async_client: AsyncClient, employee_id: str, **fields):
    body = {
        "start_date": "2026-03-02",
        "end_date": "2026-03-04",
        "doctor_note": True,
        "employee_id": employee_id,
        **fields,
    }
    return await async_client.post("/api/v1/sick-leaves", json=body)


@pytest.mark.asyncio
async def test_create_sick_leave(async_client: AsyncClient):
    employee_id = await _employee(async_client)
    resp = await _sick_leave(async_client, employee_id)
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["employee_id"] == employee_id
    assert data["start_date"] == "2026-03-02"
    assert data["doctor_note"] is True
    assert data["employee"]["email"] == "ada@example.com"


@pytest.mark.asyncio
async def test_create_sick_leave_requires_employee(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/v1/sick-leaves",
        json={"start_date": "2026-03-02", "end_date": "2026-03-04", "doctor_note": False},
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_create_sick_leave_unknown_employee(async_client: AsyncClient):
    resp = await _sick_leave(async_client, "ghost")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Employee 'ghost' does not exist"


@pytest.mark.asyncio
async def test_list_filtered_by_employee(async_client: AsyncClient):
    first = await _employee(async_client, "first@example.com")
    second = await _employee(async_client, "second@example.com")
    await _sick_leave(async_client, first)
    await _sick_leave(async_client, first, start_date="2026-04-01", end_date="2026-04-01")
    await _sick_leave(async_client, second)

    resp = await async_client.get("/api/v1/sick-leaves", params={"employee_id": first})
    data = resp.json()
    assert data["count"] == 2
    assert {row["employee_id"] for row in data["data"]} == {first}

    ordered = await async_client.get("/api/v1/sick-leaves", params={"order": "start_date"})
    assert [row["start_date"] for row in ordered.json()["data"]][0] == "2026-03-02"


@pytest.mark.asyncio
async def test_update_sick_leave(async_client: AsyncClient):
    employee_id = await _employee(async_client)
    created = (await _sick_leave(async_client, employee_id)).json()
    resp = await async_client.put(
        f"/api/v1/sick-leaves/{created['id']}", json={"doctor_note": False, "end_date": "2026-03-06"}
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["doctor_note"] is False
    assert data["end_date"] == "2026-03-06"
    assert data["employee"]["id"] == employee_id


@pytest.mark.asyncio
async def test_update_rejects_end_before_start(async_client: AsyncClient):
    employee_id = await _employee(async_client)
    created = (await _sick_leave(async_client, employee_id)).json()
    resp = await async_client.put(
        f"/api/v1/sick-leaves/{created['id']}", json={"end_date": "2026-03-01"}
    )
    assert resp.status_code == 400

    unchanged = await async_client.get(f"/api/v1/sick-leaves/{created['id']}")
    assert unchanged.json()["end_date"] == "2026-03-04"


@pytest.mark.asyncio
async def test_delete_sick_leave(async_client: AsyncClient):
    employee_id = await _employee(async_client)
    created = (await _sick_leave(async_client, employee_id)).json()
    resp = await async_client.delete(f"/api/v1/sick-leaves/{created['id']}")
    assert resp.status_code == 200
    missing = await async_client.get(f"/api/v1/sick-leaves/{created['id']}")
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_payroll_admin_cannot_delete(async_client: AsyncClient, act_as_role):
    employee_id = await _employee(async_client)
    created = (await _sick_leave(async_client, employee_id)).json()
    act_as_role("Payroll Administrator")
    resp = await async_client.delete(f"/api/v1/sick-leaves/{created['id']}")
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Not allowed to delete sick_leave"
